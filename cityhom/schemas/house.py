"""
Pydantic schemas for house listings.
"""

from pydantic import Field, field_validator
from cityhom.models.listing import FurnishStatus
from cityhom.schemas.base import RequiredLowerStr, partial_model
from cityhom.schemas.listing import ParcelBase, ListingRead, HouseFacilities, check_phone_number


class HouseCreate(ParcelBase):
    """House creation schema."""

    phone_number: int = Field(..., examples=[9800000000])
    build_up_area: RequiredLowerStr
    no_of_bedrooms: int = Field(..., ge=0)
    no_of_bathrooms: int = Field(..., ge=0)
    no_of_kitchens: int = Field(..., ge=0)
    build_year: int = Field(..., ge=1800, le=2200, description="Year of construction (AD or BS)")
    furnish: FurnishStatus = FurnishStatus.FULL
    no_of_floors: int = Field(..., ge=1)
    no_of_living_rooms: int = Field(..., ge=0)
    no_of_parking_spaces: int = Field(..., ge=0)
    facilities: HouseFacilities = Field(default_factory=HouseFacilities)

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v):
        return check_phone_number(v)


HouseUpdate = partial_model(HouseCreate, "HouseUpdate")


class HouseResponse(ListingRead, HouseCreate):
    """House as stored."""
