"""
Listing services for rooms, flats, houses, lands and apartments.
Handles CRUD with ownership validation, filtered listing and image cleanup.
"""

from typing import List, Optional, Type
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel
from cityhom.config import settings
from cityhom.database import Base
from cityhom.models import Room, Flat, House, Land, Apartment
from cityhom.repositories.listing import ListingRepository, ListingFilters
from cityhom.repositories.user import UserRepository
from cityhom.schemas.base import Page, update_values
from cityhom.schemas.image import FileDescriptor, PresignedUpload
from cityhom.schemas.room import RoomResponse
from cityhom.schemas.flat import FlatResponse
from cityhom.schemas.house import HouseResponse
from cityhom.schemas.land import LandResponse
from cityhom.schemas.apartment import ApartmentResponse
from cityhom.services.image import ImageService
from cityhom.utils.auth import TokenPayload
from cityhom.utils.exceptions import NotFoundError, OwnershipError, UnauthorizedError
import uuid
import logging

logger = logging.getLogger(__name__)


class ListingService:
    """
    Service for one listing collection.
    Subclasses bind the model, the response schema and the image folder.
    """

    model: Type[Base]
    response_schema: Type[BaseModel]
    label: str
    image_folder: str

    def __init__(self, db_session: AsyncSession, image_service: ImageService):
        self.db = db_session
        self.repo = ListingRepository(self.model, db_session)
        self.user_repo = UserRepository(db_session)
        self.image_service = image_service

    def to_response(self, listing):
        return self.response_schema.model_validate(listing)

    async def create_listing(self, listing_data: BaseModel, current_user: TokenPayload):
        """
        Create a listing owned by the requester.

        Args:
            listing_data: Validated create schema
            current_user: Identity from the access token

        Returns:
            The stored listing as a response schema
        """
        if not await self.user_repo.exists(current_user.user_id):
            raise UnauthorizedError("Unauthorized: User no longer exists")

        create_data = listing_data.model_dump(mode="json", exclude_none=True)
        create_data["user_id"] = current_user.user_id
        create_data["space_categories"] = self.model.category.value

        listing = await self.repo.create(create_data)
        logger.info(f"{self.label} created by user {current_user.user_id}: {listing.id}")
        return self.to_response(listing)

    async def _get_or_404(self, listing_id: uuid.UUID):
        listing = await self.repo.get_by_id(listing_id)
        if not listing:
            raise NotFoundError(self.label, str(listing_id))
        return listing

    async def get_listing(self, listing_id: uuid.UUID):
        return self.to_response(await self._get_or_404(listing_id))

    async def list_listings(
        self,
        filters: ListingFilters,
        page: int = 1,
        limit: int = 10,
        sort_by: str = "createdAt",
        sort_order: str = "desc"
    ) -> Page:
        """Filtered, sorted page of listings. Filters on absent columns are ignored."""
        listings, total = await self.repo.search(
            filters,
            skip=(page - 1) * limit,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order
        )
        docs = [self.to_response(listing) for listing in listings]
        return Page[self.response_schema].build(docs, total, page, limit)

    async def list_owned(self, current_user: TokenPayload, page: int = 1, limit: Optional[int] = None) -> Page:
        """The requester's own listings, newest first."""
        return await self.list_listings(
            ListingFilters(user_id=current_user.user_id),
            page=page,
            limit=limit or settings.owner_page_size
        )

    async def update_listing(self, listing_id: uuid.UUID, listing_data: BaseModel, current_user: TokenPayload):
        """
        Merge the supplied fields into a listing.

        Raises:
            NotFoundError: If the listing doesn't exist
            OwnershipError: If the requester is neither the owner nor an admin
        """
        listing = await self._get_or_404(listing_id)
        if not current_user.can_manage(listing.user_id):
            raise OwnershipError(self.label.lower())

        update_data = update_values(listing_data)
        updated = await self.repo.update(listing_id, update_data)
        if not updated:
            raise NotFoundError(self.label, str(listing_id))

        logger.info(f"{self.label} updated by user {current_user.user_id}: {listing_id}")
        return self.to_response(updated)

    async def delete_listing(self, listing_id: uuid.UUID, current_user: TokenPayload) -> None:
        """
        Delete a listing after removing its stored images.
        Image deletion is best effort and never blocks the removal.
        """
        listing = await self._get_or_404(listing_id)
        if not current_user.can_manage(listing.user_id):
            raise OwnershipError(self.label.lower())

        if listing.space_images_url:
            await self.image_service.delete_images(list(listing.space_images_url))

        await self.repo.delete(listing_id)
        logger.info(f"{self.label} deleted by user {current_user.user_id}: {listing_id}")

    async def issue_image_uploads(self, files: List[FileDescriptor]) -> List[PresignedUpload]:
        return await self.image_service.issue_uploads(files, self.image_folder)


class RoomService(ListingService):
    model = Room
    response_schema = RoomResponse
    label = "Room"
    image_folder = "room-images"


class FlatService(ListingService):
    model = Flat
    response_schema = FlatResponse
    label = "Flat"
    image_folder = "flat-images"


class HouseService(ListingService):
    model = House
    response_schema = HouseResponse
    label = "House"
    image_folder = "house-images"


class LandService(ListingService):
    model = Land
    response_schema = LandResponse
    label = "Land"
    image_folder = "land-images"


class ApartmentService(ListingService):
    model = Apartment
    response_schema = ApartmentResponse
    label = "Apartment"
    image_folder = "apartment-images"
