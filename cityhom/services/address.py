"""
Address service. Every user keeps at most one address.
"""

import uuid
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cityhom.models.address import Address
from cityhom.repositories.address import AddressRepository
from cityhom.repositories.user import UserRepository
from cityhom.schemas.address import AddressCreate, AddressUpdate, AddressResponse
from cityhom.schemas.base import update_values
from cityhom.utils.auth import TokenPayload
from cityhom.utils.exceptions import ConflictError, NotFoundError, OwnershipError, UnauthorizedError

logger = logging.getLogger(__name__)


class AddressService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.address_repo = AddressRepository(db_session)
        self.user_repo = UserRepository(db_session)

    async def create_address(self, address_data: AddressCreate, current_user: TokenPayload) -> AddressResponse:
        """
        Create the requester's address.

        Raises:
            UnauthorizedError: If the requester's account no longer exists
            ConflictError: If the requester already has an address
        """
        if not await self.user_repo.exists(current_user.user_id):
            raise UnauthorizedError("Unauthorized: User no longer exists")

        if await self.address_repo.get_by_user(current_user.user_id):
            raise ConflictError("You already have an address")

        create_data = address_data.model_dump(mode="json", exclude_none=True)
        create_data["user_id"] = current_user.user_id
        address = await self.address_repo.create(create_data)
        logger.info(f"Address created for user {current_user.user_id}")
        return AddressResponse.model_validate(address)

    async def get_my_address(self, current_user: TokenPayload) -> AddressResponse:
        address = await self.address_repo.get_by_user(current_user.user_id)
        if not address:
            raise NotFoundError("Address")
        return AddressResponse.model_validate(address)

    async def _get_owned(self, address_id: uuid.UUID, current_user: TokenPayload) -> Address:
        address = await self.address_repo.get_by_id(address_id)
        if not address:
            raise NotFoundError("Address", str(address_id))
        if not current_user.can_manage(address.user_id):
            raise OwnershipError("address")
        return address

    async def get_address(self, address_id: uuid.UUID, current_user: TokenPayload) -> AddressResponse:
        return AddressResponse.model_validate(await self._get_owned(address_id, current_user))

    async def update_address(
        self,
        address_id: uuid.UUID,
        address_data: AddressUpdate,
        current_user: TokenPayload
    ) -> AddressResponse:
        await self._get_owned(address_id, current_user)
        update_data = update_values(address_data)
        address = await self.address_repo.update(address_id, update_data)
        return AddressResponse.model_validate(address)

    async def delete_address(self, address_id: uuid.UUID, current_user: TokenPayload) -> None:
        await self._get_owned(address_id, current_user)
        await self.address_repo.delete(address_id)
        logger.info(f"Address {address_id} deleted by {current_user.user_id}")
