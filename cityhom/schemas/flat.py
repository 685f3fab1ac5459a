"""
Pydantic schemas for flat listings.
"""

from cityhom.schemas.base import partial_model
from cityhom.schemas.listing import UnitBase, ListingRead


class FlatCreate(UnitBase):
    """Flat creation schema."""


FlatUpdate = partial_model(FlatCreate, "FlatUpdate")


class FlatResponse(ListingRead, FlatCreate):
    """Flat as stored."""
