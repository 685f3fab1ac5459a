"""
Admin API endpoints: dashboard statistics and owner-joined collections.
Every route requires the admin or super_admin role.
"""

from fastapi import APIRouter, Depends, Query

from cityhom.config import settings
from cityhom.models import Room, Flat, House, Land
from cityhom.schemas.address import AddressWithUser
from cityhom.schemas.admin import DashboardResponse
from cityhom.schemas.base import APIResponse, Page
from cityhom.schemas.error import get_error_responses
from cityhom.schemas.search import SpaceWithOwner
from cityhom.schemas.user import UserResponse
from cityhom.services.admin import AdminService
from cityhom.utils.dependencies import get_admin_service, require_admin


router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
    responses=get_error_responses(400, 401, 403, 500)
)


@router.get("/dashboard", response_model=APIResponse[DashboardResponse], summary="Dashboard statistics")
async def dashboard(
    days: int = Query(settings.dashboard_default_days, description="Window size in days (1-730)"),
    admin_service: AdminService = Depends(get_admin_service)
) -> APIResponse[DashboardResponse]:
    """
    Totals, new entries within the window, growth and the latest entries
    for users, rooms, flats, houses and lands.
    """
    stats = await admin_service.dashboard(days)
    return APIResponse[DashboardResponse](message="Dashboard data fetched successfully", data=stats)


@router.get("/user-details", response_model=APIResponse[Page[UserResponse]], summary="All users")
async def user_details(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    admin_service: AdminService = Depends(get_admin_service)
) -> APIResponse[Page[UserResponse]]:
    result = await admin_service.user_details(page, limit)
    return APIResponse[Page[UserResponse]](message="Users fetched successfully", data=result)


@router.get(
    "/addresses-with-user",
    response_model=APIResponse[Page[AddressWithUser]],
    summary="Addresses with their owners"
)
async def addresses_with_user(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    admin_service: AdminService = Depends(get_admin_service)
) -> APIResponse[Page[AddressWithUser]]:
    result = await admin_service.addresses_with_user(page, limit)
    return APIResponse[Page[AddressWithUser]](message="Addresses fetched successfully", data=result)


def _register_with_owner_route(model, plural: str) -> None:
    @router.get(
        f"/{plural}-with-owner",
        response_model=APIResponse[Page[SpaceWithOwner]],
        summary=f"{plural.capitalize()} with their owners",
        name=f"{plural}_with_owner"
    )
    async def listings_with_owner(
        page: int = Query(1, ge=1),
        limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
        admin_service: AdminService = Depends(get_admin_service)
    ) -> APIResponse[Page[SpaceWithOwner]]:
        result = await admin_service.listings_with_owner(model, page, limit)
        return APIResponse[Page[SpaceWithOwner]](message=f"{plural.capitalize()} fetched successfully", data=result)


for _model, _plural in ((Room, "rooms"), (Flat, "flats"), (House, "houses"), (Land, "lands")):
    _register_with_owner_route(_model, _plural)
