"""
Pydantic schemas for land listings.
"""

from cityhom.schemas.base import partial_model
from cityhom.schemas.listing import ParcelBase, ListingRead


class LandCreate(ParcelBase):
    """Land creation schema."""


LandUpdate = partial_model(LandCreate, "LandUpdate")


class LandResponse(ListingRead, LandCreate):
    """Land parcel as stored."""
