"""
Authentication service for signup, login and token refresh.
Access tokens travel in response bodies; refresh tokens are handed to the router for the cookie.
"""

from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from cityhom.config import settings
from cityhom.repositories.user import UserRepository
from cityhom.models.user import User
from cityhom.schemas.auth import SignupRequest, LoginRequest
from cityhom.utils.auth import (
    create_access_token,
    create_refresh_token,
    verify_token,
    REFRESH_TOKEN
)
from cityhom.utils.exceptions import (
    DuplicateResourceError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    UnauthorizedError
)
from jose import JWTError, ExpiredSignatureError
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for managing accounts and issued tokens.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    @property
    def access_token_lifetime(self) -> int:
        """Access token lifetime in seconds."""
        return settings.access_token_expire_minutes * 60

    def create_tokens(self, user: User) -> Tuple[str, str]:
        """
        Create access and refresh tokens for user.

        Returns:
            Tuple of (access_token, refresh_token)
        """
        access_token = create_access_token(user_id=user.id, roles=user.roles or [])
        refresh_token = create_refresh_token(user_id=user.id)
        return access_token, refresh_token

    async def ensure_unique(self, email: Optional[str], phone_number: Optional[int], exclude_id=None) -> None:
        """
        Raise DuplicateResourceError when another account already holds the email or phone number.
        """
        existing = await self.user_repo.find_conflict(email, phone_number, exclude_id=exclude_id)
        if not existing:
            return
        if email and existing.email == email.lower().strip():
            raise DuplicateResourceError("Email address")
        raise DuplicateResourceError("Phone number")

    async def signup(self, signup_data: SignupRequest) -> Tuple[User, str, str]:
        """
        Register a new account and sign it in.

        Args:
            signup_data: Validated signup payload

        Returns:
            Tuple of (user, access_token, refresh_token)

        Raises:
            DuplicateResourceError: If the email or phone number is already registered
        """
        await self.ensure_unique(signup_data.email, signup_data.phone_number)

        user_data = signup_data.model_dump(mode="json", exclude_none=True)
        user = await self.user_repo.create_user(user_data)
        logger.info(f"New user signed up: {user.email} (ID: {user.id})")

        access_token, refresh_token = self.create_tokens(user)
        return user, access_token, refresh_token

    async def login(self, login_data: LoginRequest) -> Tuple[User, str, str]:
        """
        Authenticate by email or phone number and create tokens.

        Raises:
            InvalidCredentialsError: If no account matches the credentials
        """
        user = await self.user_repo.authenticate_user(
            login_data.password,
            email=login_data.email,
            phone_number=login_data.phone_number
        )
        if not user:
            logger.warning(f"Failed login attempt for {login_data.email or login_data.phone_number}")
            raise InvalidCredentialsError()

        logger.info(f"User logged in: {user.email}")
        access_token, refresh_token = self.create_tokens(user)
        return user, access_token, refresh_token

    async def refresh_access_token(self, refresh_token: Optional[str]) -> str:
        """
        Create a new access token from the refresh cookie.

        Raises:
            UnauthorizedError: If the cookie is missing or the user no longer exists
            TokenExpiredError: If the refresh token has expired
            InvalidTokenError: If the refresh token is otherwise invalid
        """
        if not refresh_token:
            raise UnauthorizedError("Please login first")

        try:
            payload = verify_token(refresh_token, REFRESH_TOKEN)
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as e:
            logger.debug(f"Rejected refresh token: {e}")
            raise InvalidTokenError()

        user = await self.user_repo.get_by_id(payload.user_id)
        if not user:
            raise UnauthorizedError("Unauthorized: User no longer exists")

        # Roles are re-read so role changes apply from the next refresh
        return create_access_token(user_id=user.id, roles=user.roles or [])
