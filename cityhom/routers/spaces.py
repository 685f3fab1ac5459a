"""
Unified search endpoints spanning rooms, flats, lands and houses.
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from cityhom.config import settings
from cityhom.models.listing import GenderPreference
from cityhom.repositories.listing import ListingFilters
from cityhom.schemas.base import APIResponse, Page
from cityhom.schemas.error import get_error_responses
from cityhom.schemas.search import SpaceSummary
from cityhom.services.search import SearchService, parse_categories
from cityhom.utils.dependencies import get_search_service


router = APIRouter(prefix="/spaces", tags=["Spaces"])


@router.get(
    "/search",
    response_model=APIResponse[Page[SpaceSummary]],
    summary="Search all spaces",
    description=(
        "Searches every selected collection concurrently and merges the results. "
        "A filter on a field a collection does not have excludes that collection."
    ),
    responses=get_error_responses(400, 500)
)
async def search_spaces(
    space_categories: Optional[List[str]] = Query(
        None,
        alias="spaceCategories",
        description="room, flat, land or house; comma-separated or repeated"
    ),
    location_query: Optional[str] = Query(None, alias="locationQuery", description="Substring of city or chowk"),
    min_fare: float = Query(0, alias="minFare", ge=0),
    max_fare: Optional[float] = Query(None, alias="maxFare", ge=0),
    gender_preference: Optional[GenderPreference] = Query(None, alias="genderPreference"),
    is_space_provider_living: Optional[bool] = Query(None, alias="isSpaceProviderLiving"),
    is_available: Optional[bool] = Query(None, alias="isAvailable"),
    min_bedrooms: Optional[int] = Query(None, alias="minBedrooms", ge=0),
    sort_by: str = Query("createdAt", alias="sortBy", pattern="^(fare|createdAt)$"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    search_service: SearchService = Depends(get_search_service)
) -> APIResponse[Page[SpaceSummary]]:
    filters = ListingFilters(
        fare_min=min_fare,
        fare_max=max_fare,
        location_query=location_query,
        gender_preference=gender_preference.value if gender_preference else None,
        is_space_provider_living=is_space_provider_living,
        is_available=is_available,
        min_bedrooms=min_bedrooms
    )
    result = await search_service.search(
        filters,
        parse_categories(space_categories),
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order
    )
    return APIResponse[Page[SpaceSummary]](message="Spaces fetched successfully", data=result)


@router.get(
    "/new",
    response_model=APIResponse[Page[SpaceSummary]],
    summary="Recently listed spaces",
    responses=get_error_responses(400, 500)
)
async def new_spaces(
    days: int = Query(settings.dashboard_default_days, ge=1, le=settings.dashboard_max_days),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    search_service: SearchService = Depends(get_search_service)
) -> APIResponse[Page[SpaceSummary]]:
    result = await search_service.newest(days, page=page, limit=limit)
    return APIResponse[Page[SpaceSummary]](message="New spaces fetched successfully", data=result)
