"""
Address repository. Addresses are unique per user.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc, func
from cityhom.repositories.base import BaseRepository
from cityhom.models.address import Address
from cityhom.models.user import User
from typing import Optional, List, Tuple
import uuid
import logging

logger = logging.getLogger(__name__)


class AddressRepository(BaseRepository[Address]):

    def __init__(self, db: AsyncSession):
        super().__init__(Address, db)

    async def get_by_user(self, user_id: uuid.UUID) -> Optional[Address]:
        return await self.get_by_field("user_id", user_id)

    async def with_user(self, skip: int = 0, limit: int = 10) -> Tuple[List[Tuple[Address, Optional[User]]], int]:
        """Addresses joined with their owners, newest first, with the total count."""
        total = (await self.db.execute(select(func.count(Address.id)))).scalar() or 0
        query = (
            select(Address, User)
            .outerjoin(User, Address.user_id == User.id)
            .order_by(desc(Address.created_at))
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return [(row[0], row[1]) for row in result.all()], total
