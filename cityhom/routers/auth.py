"""
Authentication API endpoints for signup, login, token refresh and logout.
The refresh token lives in an HTTP-only cookie; access tokens are returned in the body.
"""

from typing import Optional
from fastapi import APIRouter, Cookie, Depends, Response, status
from cityhom.config import settings
from cityhom.schemas.auth import SignupRequest, LoginRequest, AccessTokenResponse, AuthResponse
from cityhom.schemas.base import APIResponse
from cityhom.schemas.error import get_auth_error_responses, get_error_responses
from cityhom.schemas.user import UserResponse
from cityhom.services.auth import AuthService
from cityhom.utils.auth import TokenPayload
from cityhom.utils.dependencies import get_auth_service, get_current_user


router = APIRouter(prefix="/auth", tags=["Authentication"])


def set_refresh_cookie(response: Response, refresh_token: str) -> None:
    """Attach the refresh token as a cross-site HTTP-only cookie."""
    response.set_cookie(
        key=settings.refresh_cookie_name,
        value=refresh_token,
        max_age=settings.refresh_token_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.refresh_cookie_secure,
        samesite="none",
    )


@router.post(
    "/signup",
    response_model=APIResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    responses=get_error_responses(400, 409, 500)
)
async def signup(
    signup_data: SignupRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
) -> APIResponse[AuthResponse]:
    """
    Create an account and sign it in.

    Returns the user and an access token; the refresh token is set as a cookie.
    """
    user, access_token, refresh_token = await auth_service.signup(signup_data)
    set_refresh_cookie(response, refresh_token)

    return APIResponse[AuthResponse](
        message="User registered successfully",
        data=AuthResponse(
            user=UserResponse.model_validate(user),
            access_token=access_token,
            expires_in=auth_service.access_token_lifetime
        )
    )


@router.post(
    "/login",
    response_model=APIResponse[AuthResponse],
    summary="User login",
    description="Authenticate with email or phone number and password",
    responses=get_error_responses(400, 401, 500)
)
async def login(
    login_data: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
) -> APIResponse[AuthResponse]:
    user, access_token, refresh_token = await auth_service.login(login_data)
    set_refresh_cookie(response, refresh_token)

    return APIResponse[AuthResponse](
        message="Login successful",
        data=AuthResponse(
            user=UserResponse.model_validate(user),
            access_token=access_token,
            expires_in=auth_service.access_token_lifetime
        )
    )


@router.post(
    "/refresh",
    response_model=APIResponse[AccessTokenResponse],
    summary="Refresh access token",
    description="Issue a new access token from the refresh cookie",
    responses=get_auth_error_responses()
)
async def refresh_token(
    jwt_token: Optional[str] = Cookie(None, alias=settings.refresh_cookie_name),
    auth_service: AuthService = Depends(get_auth_service)
) -> APIResponse[AccessTokenResponse]:
    access_token = await auth_service.refresh_access_token(jwt_token)
    return APIResponse[AccessTokenResponse](
        message="Access token refreshed",
        data=AccessTokenResponse(access_token=access_token, expires_in=auth_service.access_token_lifetime)
    )


@router.post(
    "/logout",
    response_model=APIResponse[None],
    summary="User logout",
    description="Clear the refresh cookie",
    responses=get_auth_error_responses()
)
async def logout(
    response: Response,
    current_user: TokenPayload = Depends(get_current_user)
) -> APIResponse[None]:
    response.delete_cookie(
        key=settings.refresh_cookie_name,
        httponly=True,
        secure=settings.refresh_cookie_secure,
        samesite="none",
    )
    return APIResponse[None](message="Logged out successfully")
