"""
Listing API endpoints for rooms, flats, houses, lands and apartments.
Every collection gets the same routes through build_listing_router.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from typing import List, Optional, Type
from pydantic import BaseModel
from uuid import UUID

from cityhom.config import settings
from cityhom.models.listing import GenderPreference, ListingPurpose
from cityhom.repositories.listing import ListingFilters
from cityhom.schemas.base import APIResponse, Page
from cityhom.schemas.error import get_crud_error_responses, get_error_responses
from cityhom.schemas.image import PresignedUpload, SignedUrlRequest
from cityhom.schemas.room import RoomCreate, RoomUpdate
from cityhom.schemas.flat import FlatCreate, FlatUpdate
from cityhom.schemas.house import HouseCreate, HouseUpdate
from cityhom.schemas.land import LandCreate, LandUpdate
from cityhom.schemas.apartment import ApartmentCreate, ApartmentUpdate
from cityhom.services.listing import (
    ListingService,
    RoomService,
    FlatService,
    HouseService,
    LandService,
    ApartmentService
)
from cityhom.utils.auth import TokenPayload
from cityhom.utils.dependencies import get_current_user, listing_service, require_listing_role

SORT_BY_PATTERN = "^(fare|createdAt)$"
SORT_ORDER_PATTERN = "^(asc|desc)$"


def build_listing_router(
    service_class: Type[ListingService],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    plural: str,
    tag: str
) -> APIRouter:
    """
    Build the CRUD router of one listing collection.

    Args:
        service_class: Service bound to the collection's model
        create_schema: Request body for POST
        update_schema: Partial request body for PUT
        plural: URL segment, e.g. "rooms"
        tag: OpenAPI tag
    """
    router = APIRouter(prefix=f"/{plural}", tags=[tag])
    get_service = listing_service(service_class)
    response_schema = service_class.response_schema
    label = service_class.label

    @router.post(
        "",
        response_model=APIResponse[response_schema],
        status_code=status.HTTP_201_CREATED,
        summary=f"Create {label.lower()}",
        description="Requires the space_provider or space_broker role (admins included).",
        responses=get_crud_error_responses()
    )
    async def create_listing(
        listing_data: create_schema,
        current_user: TokenPayload = Depends(require_listing_role),
        service: ListingService = Depends(get_service)
    ):
        listing = await service.create_listing(listing_data, current_user)
        return APIResponse[response_schema](message=f"{label} created successfully", data=listing)

    @router.get(
        "",
        response_model=APIResponse[Page[response_schema]],
        summary=f"List {plural}",
        description="Filtered, sorted and paginated. Filters on fields this collection lacks are ignored.",
        responses=get_error_responses(400, 500)
    )
    async def list_listings(
        page: int = Query(1, ge=1, description="Page number (starts from 1)"),
        limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
        fare_min: Optional[float] = Query(None, alias="fareMin", ge=0),
        fare_max: Optional[float] = Query(None, alias="fareMax", ge=0),
        location_query: Optional[str] = Query(None, alias="locationQuery", description="Substring of any location field"),
        city: Optional[str] = Query(None),
        chowk: Optional[str] = Query(None),
        municipality: Optional[str] = Query(None),
        near_popular_place: Optional[str] = Query(None, alias="nearPopularPlace"),
        is_available: Optional[bool] = Query(None, alias="isAvailable"),
        listing_type: Optional[ListingPurpose] = Query(None, alias="listingType"),
        gender_preference: Optional[GenderPreference] = Query(None, alias="genderPreference"),
        min_bedrooms: Optional[int] = Query(None, alias="minBedrooms", ge=0),
        sort_by: str = Query("createdAt", alias="sortBy", pattern=SORT_BY_PATTERN),
        sort_order: str = Query("desc", alias="sortOrder", pattern=SORT_ORDER_PATTERN),
        service: ListingService = Depends(get_service)
    ):
        filters = ListingFilters(
            fare_min=fare_min,
            fare_max=fare_max,
            location_query=location_query,
            city=city,
            chowk=chowk,
            municipality=municipality,
            near_popular_place=near_popular_place,
            is_available=is_available,
            listing_type=listing_type.value if listing_type else None,
            gender_preference=gender_preference.value if gender_preference else None,
            min_bedrooms=min_bedrooms
        )
        result = await service.list_listings(filters, page, limit, sort_by, sort_order)
        return APIResponse[Page[response_schema]](message=f"{tag} fetched successfully", data=result)

    @router.get(
        f"/my-{plural}",
        response_model=APIResponse[Page[response_schema]],
        summary=f"List my {plural}",
        responses=get_error_responses(401, 403, 500)
    )
    async def list_my_listings(
        page: int = Query(1, ge=1),
        limit: int = Query(settings.owner_page_size, ge=1, le=settings.max_page_size),
        current_user: TokenPayload = Depends(get_current_user),
        service: ListingService = Depends(get_service)
    ):
        result = await service.list_owned(current_user, page, limit)
        return APIResponse[Page[response_schema]](message=f"Your {plural} fetched successfully", data=result)

    @router.post(
        "/get-signed-url",
        response_model=APIResponse[List[PresignedUpload]],
        summary=f"Presigned uploads for {label.lower()} images",
        responses=get_error_responses(400, 401, 403, 500)
    )
    async def get_signed_urls(
        upload_request: SignedUrlRequest,
        current_user: TokenPayload = Depends(get_current_user),
        service: ListingService = Depends(get_service)
    ):
        uploads = await service.issue_image_uploads(upload_request.files)
        return APIResponse[List[PresignedUpload]](message="Signed URLs generated successfully", data=uploads)

    @router.get(
        "/{listing_id}",
        response_model=APIResponse[response_schema],
        summary=f"Get {label.lower()} by ID",
        responses=get_error_responses(400, 404, 500)
    )
    async def get_listing(
        listing_id: UUID = Path(..., description=f"{label} ID"),
        service: ListingService = Depends(get_service)
    ):
        listing = await service.get_listing(listing_id)
        return APIResponse[response_schema](message=f"{label} fetched successfully", data=listing)

    @router.put(
        "/{listing_id}",
        response_model=APIResponse[response_schema],
        summary=f"Update {label.lower()}",
        description="Owner or admin only. Only supplied fields change.",
        responses=get_crud_error_responses()
    )
    async def update_listing(
        listing_data: update_schema,
        listing_id: UUID = Path(..., description=f"{label} ID"),
        current_user: TokenPayload = Depends(require_listing_role),
        service: ListingService = Depends(get_service)
    ):
        listing = await service.update_listing(listing_id, listing_data, current_user)
        return APIResponse[response_schema](message=f"{label} updated successfully", data=listing)

    @router.delete(
        "/{listing_id}",
        response_model=APIResponse[None],
        summary=f"Delete {label.lower()}",
        description="Owner or admin only. Stored images are removed on a best-effort basis.",
        responses=get_crud_error_responses()
    )
    async def delete_listing(
        listing_id: UUID = Path(..., description=f"{label} ID"),
        current_user: TokenPayload = Depends(require_listing_role),
        service: ListingService = Depends(get_service)
    ):
        await service.delete_listing(listing_id, current_user)
        return APIResponse[None](message=f"{label} deleted successfully")

    return router


rooms_router = build_listing_router(RoomService, RoomCreate, RoomUpdate, "rooms", "Rooms")
flats_router = build_listing_router(FlatService, FlatCreate, FlatUpdate, "flats", "Flats")
houses_router = build_listing_router(HouseService, HouseCreate, HouseUpdate, "houses", "Houses")
lands_router = build_listing_router(LandService, LandCreate, LandUpdate, "lands", "Lands")
apartments_router = build_listing_router(
    ApartmentService, ApartmentCreate, ApartmentUpdate, "apartments", "Apartments"
)
