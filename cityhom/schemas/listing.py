"""
Pydantic schemas shared by all listing types.
Handles common listing fields, nested documents and their validation rules.
"""

from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime
import uuid

from cityhom.models.listing import (
    Country,
    ListingPurpose,
    SpaceType,
    SpaceCategory,
    GenderPreference,
    FurnishStatus,
)
from cityhom.schemas.base import CamelModel, LowerStr, RequiredLowerStr, TrimmedStr, UrlStr


def check_phone_number(v):
    if v is not None and (v <= 0 or len(str(v)) < 10):
        raise ValueError("Phone number must be at least 10 digits")
    return v


class Facility(CamelModel):
    """Amenities offered with a room, flat or apartment."""

    water: bool = False
    table: bool = False
    chair: bool = False
    clothes_hanger: bool = False
    bed: bool = False
    fan: bool = False
    wifi: bool = False
    parking: Optional[LowerStr] = None


class HouseFacilities(CamelModel):
    """Amenities offered with a house."""

    security_staff: bool = False
    elevator: bool = False
    maintenances: bool = False
    kids_play_ground: bool = False
    electricity_backup: bool = False
    cafeteria: bool = False
    washing_machine: bool = False
    tv_cable: bool = False
    swimming_pool: bool = False
    modular_kitchen: bool = False
    microwave: bool = False
    gym: bool = False
    cctv: bool = False
    garden: bool = False
    fencing: bool = False
    balcony: bool = False
    ac: bool = False
    water_tank: bool = False
    water_supply: bool = False
    drainage: bool = False
    jacuzzi: bool = False
    garage: bool = False
    lawn: bool = False


class NearByLocation(CamelModel):
    """Landmarks close to a house or land parcel."""

    landmark: Optional[LowerStr] = None
    hospital: Optional[LowerStr] = None
    school: Optional[LowerStr] = None
    park: Optional[LowerStr] = None
    market: RequiredLowerStr
    police_station: Optional[LowerStr] = None
    fire_station: Optional[LowerStr] = None
    bank: Optional[LowerStr] = None
    post_office: Optional[LowerStr] = None
    atm: Optional[LowerStr] = None
    library: Optional[LowerStr] = None
    pharmacy: Optional[LowerStr] = None
    ward_office: Optional[LowerStr] = None
    restaurant: Optional[LowerStr] = None
    bus_station: Optional[LowerStr] = None
    cinema_hall: Optional[LowerStr] = None


class ListingBase(CamelModel):
    """Fields every listing accepts on create."""

    country: Country = Field(Country.NEPAL, description="Country of the listing")
    city: RequiredLowerStr = Field(..., description="City", examples=["kathmandu"])
    chowk: RequiredLowerStr = Field(..., description="Chowk or neighbourhood", examples=["baneshwor"])
    space_images_url: List[UrlStr] = Field(default_factory=list, description="Public image URLs")
    description_of_space: RequiredLowerStr = Field(..., description="Free-text description")
    fare: float = Field(..., description="Monthly rent or sale price", examples=[12000])
    listing_type: ListingPurpose = Field(ListingPurpose.RENT, description="rent or sale")
    space_type: SpaceType = SpaceType.RESIDENTIAL
    is_available: bool = True
    is_exclusive: bool = False

    @field_validator("fare")
    @classmethod
    def validate_fare(cls, v):
        """Fare can be zero but never negative."""
        if v is not None and v < 0:
            raise ValueError("Fare must be non-negative")
        return v


class SharedSpaceBase(ListingBase):
    """Fields of rooms, flats and apartments."""

    district: Optional[LowerStr] = None
    street: Optional[LowerStr] = None
    facility: Facility = Field(default_factory=Facility)
    gender_preference: GenderPreference = GenderPreference.FOR_ALL
    is_space_provider_living: bool = True
    rules_of_living: RequiredLowerStr
    phone_number: int = Field(..., examples=[9800000000])
    near_popular_place: RequiredLowerStr

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v):
        return check_phone_number(v)


class UnitBase(SharedSpaceBase):
    """Fields of flats and apartments."""

    house_number: Optional[LowerStr] = None
    no_of_bedrooms: int
    no_of_bathrooms: int = Field(0, ge=0)
    no_of_kitchens: int = Field(0, ge=0)
    no_of_parking_spaces: Optional[TrimmedStr] = None
    furnish: FurnishStatus = FurnishStatus.NONE
    floor: int = 0

    @field_validator("no_of_bedrooms")
    @classmethod
    def validate_bedrooms(cls, v):
        if v is not None and v < 1:
            raise ValueError("Must have at least one bedroom")
        return v

    @field_validator("floor")
    @classmethod
    def validate_floor(cls, v):
        if v is not None and v < 0:
            raise ValueError("Floor must be non-negative")
        return v


class ParcelBase(ListingBase):
    """Fields of houses and land parcels."""

    title: RequiredLowerStr
    video_url: Optional[UrlStr] = None
    municipality: RequiredLowerStr
    ward_no: int = Field(..., ge=1)
    total_area: RequiredLowerStr
    dimension: Optional[LowerStr] = None
    road_type: RequiredLowerStr
    property_face: RequiredLowerStr
    road_access: RequiredLowerStr
    plot_number: TrimmedStr
    near_by_location: Optional[NearByLocation] = None
    is_fare_negotiable: bool = False


class ListingRead(CamelModel):
    """Stored fields added to every listing response."""

    id: uuid.UUID
    user_id: uuid.UUID
    space_categories: SpaceCategory
    created_at: datetime
    updated_at: datetime
