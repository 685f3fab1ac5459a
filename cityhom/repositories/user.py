"""
User repository for authentication and user management operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from cityhom.repositories.base import BaseRepository
from cityhom.models.user import User
from cityhom.utils.auth import hash_password, verify_password
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user management with authentication support.
    Passwords are hashed here and never leave this layer in plain text.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user with a hashed password.

        Args:
            user_data: Dictionary containing user information; must include password

        Returns:
            Created user instance
        """
        create_data = dict(user_data)
        create_data["password"] = hash_password(create_data["password"])
        created_user = await self.create(create_data)
        logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
        return created_user

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)."""
        return await self.get_by_field("email", email.lower().strip())

    async def get_by_phone_number(self, phone_number: int) -> Optional[User]:
        return await self.get_by_field("phone_number", phone_number)

    async def find_conflict(
        self,
        email: Optional[str] = None,
        phone_number: Optional[int] = None,
        exclude_id=None
    ) -> Optional[User]:
        """Return another user already holding the email or phone number, if any."""
        conditions = []
        if email:
            conditions.append(User.email == email.lower().strip())
        if phone_number is not None:
            conditions.append(User.phone_number == phone_number)
        if not conditions:
            return None

        query = select(User).where(or_(*conditions))
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await self.db.execute(query)
        return result.scalars().first()

    async def authenticate_user(
        self,
        password: str,
        email: Optional[str] = None,
        phone_number: Optional[int] = None
    ) -> Optional[User]:
        """
        Authenticate user by email or phone number and password.

        Returns:
            User instance if authentication successful, None otherwise
        """
        if email:
            user = await self.get_by_email(email)
        else:
            user = await self.get_by_phone_number(phone_number)

        if not user:
            logger.debug("Authentication failed: user not found")
            return None

        if not verify_password(password, user.password):
            logger.debug(f"Authentication failed: invalid password for {user.id}")
            return None

        return user
