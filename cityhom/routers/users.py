"""
User API endpoints: profile reads, updates, deletion and avatar uploads.
"""

from fastapi import APIRouter, Depends, Path
from typing import List
from uuid import UUID

from cityhom.schemas.base import APIResponse
from cityhom.schemas.error import get_crud_error_responses, get_error_responses
from cityhom.schemas.image import PresignedUpload, SignedUrlRequest
from cityhom.schemas.user import UserAdminUpdate, UserResponse
from cityhom.services.user import UserService
from cityhom.utils.auth import TokenPayload
from cityhom.utils.dependencies import get_current_user, get_user_service


router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/get-signed-url",
    response_model=APIResponse[List[PresignedUpload]],
    summary="Presigned uploads for avatar images",
    responses=get_error_responses(400, 401, 403, 500)
)
async def get_avatar_signed_urls(
    upload_request: SignedUrlRequest,
    current_user: TokenPayload = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
) -> APIResponse[List[PresignedUpload]]:
    uploads = await user_service.issue_avatar_uploads(upload_request.files)
    return APIResponse[List[PresignedUpload]](message="Signed URLs generated successfully", data=uploads)


@router.get(
    "/{user_id}",
    response_model=APIResponse[UserResponse],
    summary="Get user by ID",
    description="The user themself or an admin.",
    responses=get_error_responses(400, 401, 403, 404)
)
async def get_user(
    user_id: UUID = Path(..., description="User ID"),
    current_user: TokenPayload = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
) -> APIResponse[UserResponse]:
    user = await user_service.get_user(user_id, current_user)
    return APIResponse[UserResponse](message="User fetched successfully", data=user)


@router.put(
    "/{user_id}",
    response_model=APIResponse[UserResponse],
    summary="Update user",
    description="Partial update. Only admins may change roles and verification flags.",
    responses=get_crud_error_responses()
)
async def update_user(
    user_data: UserAdminUpdate,
    user_id: UUID = Path(..., description="User ID"),
    current_user: TokenPayload = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
) -> APIResponse[UserResponse]:
    user = await user_service.update_user(user_id, user_data, current_user)
    return APIResponse[UserResponse](message="User updated successfully", data=user)


@router.delete(
    "/{user_id}",
    response_model=APIResponse[None],
    summary="Delete user",
    description="Removes the account with its listings, their images and its address.",
    responses=get_crud_error_responses()
)
async def delete_user(
    user_id: UUID = Path(..., description="User ID"),
    current_user: TokenPayload = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
) -> APIResponse[None]:
    await user_service.delete_user(user_id, current_user)
    return APIResponse[None](message="User deleted successfully")
