"""
Address API endpoints. Each user keeps a single address.
"""

from fastapi import APIRouter, Depends, Path, status
from uuid import UUID

from cityhom.schemas.address import AddressCreate, AddressUpdate, AddressResponse
from cityhom.schemas.base import APIResponse
from cityhom.schemas.error import get_crud_error_responses
from cityhom.services.address import AddressService
from cityhom.utils.auth import TokenPayload
from cityhom.utils.dependencies import get_address_service, get_current_user


router = APIRouter(prefix="/addresses", tags=["Addresses"])


@router.post(
    "",
    response_model=APIResponse[AddressResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create my address",
    responses=get_crud_error_responses()
)
async def create_address(
    address_data: AddressCreate,
    current_user: TokenPayload = Depends(get_current_user),
    address_service: AddressService = Depends(get_address_service)
) -> APIResponse[AddressResponse]:
    address = await address_service.create_address(address_data, current_user)
    return APIResponse[AddressResponse](message="Address created successfully", data=address)


@router.get("/me", response_model=APIResponse[AddressResponse], summary="Get my address")
async def get_my_address(
    current_user: TokenPayload = Depends(get_current_user),
    address_service: AddressService = Depends(get_address_service)
) -> APIResponse[AddressResponse]:
    address = await address_service.get_my_address(current_user)
    return APIResponse[AddressResponse](message="Address fetched successfully", data=address)


@router.get(
    "/{address_id}",
    response_model=APIResponse[AddressResponse],
    summary="Get address by ID",
    responses=get_crud_error_responses()
)
async def get_address(
    address_id: UUID = Path(..., description="Address ID"),
    current_user: TokenPayload = Depends(get_current_user),
    address_service: AddressService = Depends(get_address_service)
) -> APIResponse[AddressResponse]:
    address = await address_service.get_address(address_id, current_user)
    return APIResponse[AddressResponse](message="Address fetched successfully", data=address)


@router.put(
    "/{address_id}",
    response_model=APIResponse[AddressResponse],
    summary="Update address",
    responses=get_crud_error_responses()
)
async def update_address(
    address_data: AddressUpdate,
    address_id: UUID = Path(..., description="Address ID"),
    current_user: TokenPayload = Depends(get_current_user),
    address_service: AddressService = Depends(get_address_service)
) -> APIResponse[AddressResponse]:
    address = await address_service.update_address(address_id, address_data, current_user)
    return APIResponse[AddressResponse](message="Address updated successfully", data=address)


@router.delete(
    "/{address_id}",
    response_model=APIResponse[None],
    summary="Delete address",
    responses=get_crud_error_responses()
)
async def delete_address(
    address_id: UUID = Path(..., description="Address ID"),
    current_user: TokenPayload = Depends(get_current_user),
    address_service: AddressService = Depends(get_address_service)
) -> APIResponse[None]:
    await address_service.delete_address(address_id, current_user)
    return APIResponse[None](message="Address deleted successfully")
