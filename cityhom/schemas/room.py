"""
Pydantic schemas for room listings.
"""

from typing import Optional
from cityhom.schemas.base import LowerStr, RequiredLowerStr, partial_model
from cityhom.schemas.listing import SharedSpaceBase, ListingRead


class RoomCreate(SharedSpaceBase):
    """Room creation schema. The owner is taken from the access token."""

    district: RequiredLowerStr
    home_number: Optional[LowerStr] = None


RoomUpdate = partial_model(RoomCreate, "RoomUpdate")


class RoomResponse(ListingRead, RoomCreate):
    """Room as stored."""
