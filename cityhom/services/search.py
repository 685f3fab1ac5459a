"""
Unified search over rooms, flats, lands and houses.
Each collection is queried concurrently in its own session, then the results are merged in memory.
"""

from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Sequence
from sqlalchemy.ext.asyncio import async_sessionmaker
from cityhom.models import SEARCHABLE_MODELS
from cityhom.models.listing import SpaceCategory
from cityhom.repositories.listing import ListingRepository, ListingFilters
from cityhom.schemas.base import Page
from cityhom.schemas.search import SpaceSummary
from cityhom.utils.exceptions import BadRequestError
import asyncio
import logging

logger = logging.getLogger(__name__)

# Unified search matches locations on these fields only
SEARCH_LOCATION_FIELDS = ("city", "chowk")


def parse_categories(raw: Optional[Iterable[str]]) -> List[SpaceCategory]:
    """
    Resolve requested categories from repeated and/or comma-separated values.
    No selection means every searchable collection.
    """
    searchable = [model.category for model in SEARCHABLE_MODELS]
    names = [part.strip().lower() for value in (raw or []) for part in value.split(",") if part.strip()]
    if not names:
        return searchable

    selected = []
    for name in names:
        try:
            category = SpaceCategory(name)
        except ValueError:
            raise BadRequestError(f"Unknown space category '{name}'")
        if category not in searchable:
            raise BadRequestError(f"Space category '{name}' is not searchable")
        if category not in selected:
            selected.append(category)
    return selected


def sort_spaces(spaces: List[SpaceSummary], sort_by: str, sort_order: str) -> List[SpaceSummary]:
    """Stable sort of the merged feed; ties keep collection order."""
    if sort_by == "fare":
        def key(space):
            return space.fare
    else:
        def key(space):
            return space.created_at
    return sorted(spaces, key=key, reverse=sort_order.lower() == "desc")


class SearchService:
    """
    Cross-collection search.
    Takes a session factory because every collection is read in a separate session.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def _search_collection(
        self,
        model,
        filters: ListingFilters,
        sort_by: str,
        sort_order: str
    ) -> List[SpaceSummary]:
        async with self.session_factory() as session:
            repo = ListingRepository(model, session)
            listings = await repo.find_all(filters, sort_by=sort_by, sort_order=sort_order, strict=True)
        return [SpaceSummary.model_validate(listing) for listing in listings]

    async def search(
        self,
        filters: ListingFilters,
        categories: Sequence[SpaceCategory],
        page: int = 1,
        limit: int = 10,
        sort_by: str = "createdAt",
        sort_order: str = "desc"
    ) -> Page[SpaceSummary]:
        """
        Search the selected collections and return one page of the merged feed.

        A filter on a field a collection does not carry excludes that
        collection entirely. Counts and page bounds cover the whole union.
        """
        filters.location_fields = SEARCH_LOCATION_FIELDS
        models = [model for model in SEARCHABLE_MODELS if model.category in categories]

        per_collection = await asyncio.gather(*(
            self._search_collection(model, filters, sort_by, sort_order) for model in models
        ))

        merged = [space for spaces in per_collection for space in spaces]
        ordered = sort_spaces(merged, sort_by, sort_order)

        start = (page - 1) * limit
        logger.debug(f"Unified search matched {len(ordered)} spaces across {len(models)} collections")
        return Page[SpaceSummary].build(ordered[start:start + limit], len(ordered), page, limit)

    async def newest(self, days: int, page: int = 1, limit: int = 10) -> Page[SpaceSummary]:
        """Spaces created within the last `days` days, newest first."""
        since = datetime.now(timezone.utc) - timedelta(days=days)
        return await self.search(
            ListingFilters(created_since=since),
            [model.category for model in SEARCHABLE_MODELS],
            page=page,
            limit=limit,
            sort_by="createdAt",
            sort_order="desc"
        )
