"""
Listing repository shared by rooms, flats, houses, lands and apartments.
Builds filter conditions against whichever columns the listing table carries.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_, desc, false
from cityhom.repositories.base import BaseRepository, ModelType
from cityhom.models.user import User
from datetime import datetime
from typing import Optional, List, Any, Tuple, Type
import uuid
import logging

logger = logging.getLogger(__name__)

SORT_FIELDS = {"fare": "fare", "createdAt": "created_at"}


class ListingFilters:
    """Data class for listing filters. Unset values do not filter."""

    location_fields: Tuple[str, ...] = ("city", "chowk", "municipality")

    def __init__(
        self,
        fare_min: Optional[float] = None,
        fare_max: Optional[float] = None,
        location_query: Optional[str] = None,
        city: Optional[str] = None,
        chowk: Optional[str] = None,
        municipality: Optional[str] = None,
        near_popular_place: Optional[str] = None,
        is_available: Optional[bool] = None,
        listing_type: Optional[str] = None,
        gender_preference: Optional[str] = None,
        is_space_provider_living: Optional[bool] = None,
        min_bedrooms: Optional[int] = None,
        user_id: Optional[uuid.UUID] = None,
        created_since: Optional[datetime] = None,
        location_fields: Optional[Tuple[str, ...]] = None,
    ):
        self.fare_min = fare_min
        self.fare_max = fare_max
        self.location_query = location_query
        self.city = city
        self.chowk = chowk
        self.municipality = municipality
        self.near_popular_place = near_popular_place
        self.is_available = is_available
        self.listing_type = listing_type
        self.gender_preference = gender_preference
        self.is_space_provider_living = is_space_provider_living
        self.min_bedrooms = min_bedrooms
        self.user_id = user_id
        self.created_since = created_since
        if location_fields is not None:
            self.location_fields = location_fields


class ListingRepository(BaseRepository[ModelType]):
    """
    Repository for listing tables with filtering, sorting and pagination.
    Works for every listing model; filters on columns a model lacks are handled per `strict`.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        super().__init__(model, db)

    def build_conditions(self, filters: ListingFilters, strict: bool = False) -> List[Any]:
        """
        Translate filters into SQL conditions for this model.

        With `strict`, a filter on a column the model does not have matches
        nothing; otherwise such filters are ignored.
        """
        conditions = []
        model = self.model

        def column(name: str):
            if hasattr(model, name):
                return getattr(model, name)
            if strict:
                conditions.append(false())
            return None

        if filters.fare_min is not None:
            conditions.append(model.fare >= filters.fare_min)
        if filters.fare_max is not None:
            conditions.append(model.fare <= filters.fare_max)

        if filters.location_query:
            columns = [getattr(model, name) for name in filters.location_fields if hasattr(model, name)]
            if columns:
                conditions.append(or_(*[
                    col.icontains(filters.location_query.strip(), autoescape=True) for col in columns
                ]))

        for name in ("city", "chowk", "municipality", "near_popular_place"):
            value = getattr(filters, name)
            if value:
                col = column(name)
                if col is not None:
                    conditions.append(col.icontains(value.strip(), autoescape=True))

        for name in ("is_available", "listing_type", "gender_preference", "is_space_provider_living", "user_id"):
            value = getattr(filters, name)
            if value is not None:
                col = column(name)
                if col is not None:
                    conditions.append(col == value)

        if filters.min_bedrooms is not None:
            if hasattr(model, "no_of_bedrooms"):
                conditions.append(model.no_of_bedrooms >= filters.min_bedrooms)

        if filters.created_since is not None:
            conditions.append(model.created_at >= filters.created_since)

        return conditions

    async def search(
        self,
        filters: ListingFilters,
        skip: int = 0,
        limit: int = 10,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
        strict: bool = False
    ) -> Tuple[List[ModelType], int]:
        """
        Search listings with filtering and pagination.

        Returns:
            Tuple of (listings, total count)
        """
        field = SORT_FIELDS.get(sort_by, "created_at")
        order_by = f"-{field}" if sort_order.lower() == "desc" else field
        return await self.paginate(self.build_conditions(filters, strict), skip, limit, order_by)

    async def find_all(
        self,
        filters: ListingFilters,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
        strict: bool = False
    ) -> List[ModelType]:
        """All listings matching the filters, sorted, without a window."""
        try:
            query = select(self.model)
            conditions = self.build_conditions(filters, strict)
            if conditions:
                query = query.where(and_(*conditions))
            field = SORT_FIELDS.get(sort_by, "created_at")
            order_by = f"-{field}" if sort_order.lower() == "desc" else field
            result = await self.db.execute(query.order_by(*self._ordering(order_by)))
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to query {self.model.__name__} records: {e}")
            raise

    async def get_by_owner(self, user_id: uuid.UUID) -> List[ModelType]:
        """Every listing owned by a user, newest first."""
        return await self.find_all(ListingFilters(user_id=user_id))

    async def with_owner(self, skip: int = 0, limit: int = 10) -> Tuple[List[Tuple[ModelType, Optional[User]]], int]:
        """
        Listings joined with their owning user, newest first.

        Returns:
            Tuple of ((listing, owner) pairs, total count)
        """
        try:
            total = await self.count()
            query = (
                select(self.model, User)
                .outerjoin(User, self.model.user_id == User.id)
                .order_by(desc(self.model.created_at))
                .offset(skip)
                .limit(limit)
            )
            result = await self.db.execute(query)
            return [(row[0], row[1]) for row in result.all()], total
        except Exception as e:
            logger.error(f"Failed to join {self.model.__name__} with owners: {e}")
            raise
