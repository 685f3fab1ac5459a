"""
User service for profile reads, updates and account deletion.
Deleting an account removes everything the user owns.
"""

from typing import List
import uuid
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cityhom.models import LISTING_MODELS
from cityhom.models.user import User, is_admin
from cityhom.repositories.address import AddressRepository
from cityhom.repositories.listing import ListingRepository
from cityhom.repositories.user import UserRepository
from cityhom.schemas.base import update_values
from cityhom.schemas.image import FileDescriptor, PresignedUpload
from cityhom.schemas.user import UserAdminUpdate, UserResponse
from cityhom.services.auth import AuthService
from cityhom.services.image import ImageService
from cityhom.utils.auth import TokenPayload, hash_password
from cityhom.utils.exceptions import ForbiddenError, InsufficientPermissionsError, NotFoundError

logger = logging.getLogger(__name__)

AVATAR_FOLDER = "user-avatar"

# Fields only administrators may set
ADMIN_ONLY_FIELDS = ("roles", "is_verified", "is_email_verified")


class UserService:
    """Service for managing user accounts."""

    def __init__(self, db_session: AsyncSession, image_service: ImageService):
        self.db = db_session
        self.user_repo = UserRepository(db_session)
        self.address_repo = AddressRepository(db_session)
        self.image_service = image_service

    @staticmethod
    def _check_access(user_id: uuid.UUID, current_user: TokenPayload) -> None:
        if not current_user.can_manage(user_id):
            raise ForbiddenError("You are not allowed to access this user")

    async def _get_or_404(self, user_id: uuid.UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user

    async def get_user(self, user_id: uuid.UUID, current_user: TokenPayload) -> UserResponse:
        self._check_access(user_id, current_user)
        return UserResponse.model_validate(await self._get_or_404(user_id))

    async def update_user(
        self,
        user_id: uuid.UUID,
        user_data: UserAdminUpdate,
        current_user: TokenPayload
    ) -> UserResponse:
        """
        Apply a partial profile update.

        Raises:
            ForbiddenError: If the requester is neither the user nor an admin
            InsufficientPermissionsError: If a non-admin changes roles or verification flags
            DuplicateResourceError: If the new email or phone number belongs to another account
        """
        self._check_access(user_id, current_user)
        await self._get_or_404(user_id)

        update_data = update_values(user_data)
        if not current_user.is_admin and any(field in update_data for field in ADMIN_ONLY_FIELDS):
            raise InsufficientPermissionsError()

        if "email" in update_data or "phone_number" in update_data:
            await AuthService(self.db).ensure_unique(
                update_data.get("email"),
                update_data.get("phone_number"),
                exclude_id=user_id
            )

        if "password" in update_data:
            update_data["password"] = hash_password(update_data["password"])

        user = await self.user_repo.update(user_id, update_data)
        logger.info(f"User {user_id} updated by {current_user.user_id}")
        return UserResponse.model_validate(user)

    async def delete_user(self, user_id: uuid.UUID, current_user: TokenPayload) -> None:
        """
        Delete an account with its listings, their images and its address.
        Administrator accounts cannot be deleted.
        """
        self._check_access(user_id, current_user)
        user = await self._get_or_404(user_id)
        if is_admin(user.roles or []):
            raise ForbiddenError("Administrator accounts cannot be deleted")

        image_urls: List[str] = []
        for model in LISTING_MODELS:
            repo = ListingRepository(model, self.db)
            for listing in await repo.get_by_owner(user_id):
                image_urls.extend(listing.space_images_url or [])
            await repo.delete_by_field("user_id", user_id)

        if image_urls:
            await self.image_service.delete_images(image_urls)

        await self.address_repo.delete_by_field("user_id", user_id)
        await self.user_repo.delete(user_id)
        logger.info(f"User {user_id} deleted by {current_user.user_id}")

    async def issue_avatar_uploads(self, files: List[FileDescriptor]) -> List[PresignedUpload]:
        return await self.image_service.issue_uploads(files, AVATAR_FOLDER)
