"""
Pydantic schemas for apartment listings.
"""

from pydantic import Field, field_validator
from cityhom.schemas.base import partial_model
from cityhom.schemas.listing import UnitBase, ListingRead


class ApartmentCreate(UnitBase):
    """Apartment creation schema. Apartments need at least one bathroom and kitchen."""

    no_of_bathrooms: int = Field(1)
    no_of_kitchens: int = Field(1)
    is_active: bool = True

    @field_validator("no_of_bathrooms")
    @classmethod
    def validate_bathrooms(cls, v):
        if v is not None and v < 1:
            raise ValueError("Must have at least one bathroom")
        return v

    @field_validator("no_of_kitchens")
    @classmethod
    def validate_kitchens(cls, v):
        if v is not None and v < 1:
            raise ValueError("Must have at least one kitchen")
        return v


ApartmentUpdate = partial_model(ApartmentCreate, "ApartmentUpdate")


class ApartmentResponse(ListingRead, ApartmentCreate):
    pass
