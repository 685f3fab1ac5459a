"""
Admin service: dashboard aggregation and owner-joined listings.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from cityhom.config import settings
from cityhom.models import User, Room, Flat, House, Land
from cityhom.repositories.base import BaseRepository
from cityhom.repositories.listing import ListingRepository
from cityhom.repositories.user import UserRepository
from cityhom.repositories.address import AddressRepository
from cityhom.schemas.address import AddressWithUser
from cityhom.schemas.admin import DashboardResponse, EntityStats
from cityhom.schemas.base import Page
from cityhom.schemas.search import SpaceSummary, SpaceWithOwner
from cityhom.schemas.user import UserResponse, OwnerSummary
from cityhom.utils.exceptions import BadRequestError
import asyncio
import logging

logger = logging.getLogger(__name__)

# Dashboard entities in response order
DASHBOARD_ENTITIES = (
    ("users", User),
    ("rooms", Room),
    ("flats", Flat),
    ("houses", House),
    ("lands", Land),
)


def growth_rate(total: int, new: int) -> str:
    """Percentage growth of the window over the prior population, two decimals."""
    return f"{new / max(1, total - new) * 100:.2f}"


class AdminService:
    """
    Read-only aggregation for administrators.
    Dashboard queries run concurrently, one session each.
    """

    def __init__(self, db_session: AsyncSession, session_factory: async_sessionmaker):
        self.db = db_session
        self.session_factory = session_factory

    async def _count(self, model, since=None) -> int:
        async with self.session_factory() as session:
            return await BaseRepository(model, session).count_since(since)

    async def _latest(self, model, limit: int) -> List[Any]:
        async with self.session_factory() as session:
            records = await BaseRepository(model, session).latest(limit)
        schema = UserResponse if model is User else SpaceSummary
        return [schema.model_validate(record) for record in records]

    async def dashboard(self, days: int) -> DashboardResponse:
        """
        Totals, new-in-window counts, growth and latest entries for each entity.

        Raises:
            BadRequestError: If days is outside 1..max_days
        """
        if days < 1 or days > settings.dashboard_max_days:
            raise BadRequestError(f"days must be an integer between 1 and {settings.dashboard_max_days}")

        since = datetime.now(timezone.utc) - timedelta(days=days)
        latest_count = settings.dashboard_latest_count

        totals, news, latest = await asyncio.gather(
            asyncio.gather(*(self._count(model) for _, model in DASHBOARD_ENTITIES)),
            asyncio.gather(*(self._count(model, since) for _, model in DASHBOARD_ENTITIES)),
            asyncio.gather(*(self._latest(model, latest_count) for _, model in DASHBOARD_ENTITIES)),
        )

        stats: Dict[str, EntityStats] = {}
        latest_entries: Dict[str, List[Any]] = {}
        for (name, _), total, new, entries in zip(DASHBOARD_ENTITIES, totals, news, latest):
            stats[name] = EntityStats(total=total, new=new, growth=growth_rate(total, new))
            latest_entries[name] = entries

        return DashboardResponse(days=days, since=since, stats=stats, latest=latest_entries)

    async def user_details(self, page: int, limit: int) -> Page[UserResponse]:
        users, total = await UserRepository(self.db).paginate(skip=(page - 1) * limit, limit=limit)
        docs = [UserResponse.model_validate(user) for user in users]
        return Page[UserResponse].build(docs, total, page, limit)

    async def listings_with_owner(self, model, page: int, limit: int) -> Page[SpaceWithOwner]:
        """Listings of one collection joined with an owner summary."""
        pairs, total = await ListingRepository(model, self.db).with_owner(skip=(page - 1) * limit, limit=limit)
        return Page[SpaceWithOwner].build(self._attach_owners(SpaceWithOwner, pairs), total, page, limit)

    async def addresses_with_user(self, page: int, limit: int) -> Page[AddressWithUser]:
        pairs, total = await AddressRepository(self.db).with_user(skip=(page - 1) * limit, limit=limit)
        return Page[AddressWithUser].build(self._attach_owners(AddressWithUser, pairs), total, page, limit)

    @staticmethod
    def _attach_owners(schema, pairs: List[Tuple[Any, Any]]) -> List[Any]:
        docs = []
        for record, owner in pairs:
            doc = schema.model_validate(record)
            doc.user = OwnerSummary.model_validate(owner) if owner else None
            docs.append(doc)
        return docs
