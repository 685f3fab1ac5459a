"""
Pydantic schemas for user addresses.
"""

from pydantic import Field
from typing import Optional
from datetime import datetime
import uuid

from cityhom.schemas.base import CamelModel, partial_model
from cityhom.schemas.user import OwnerSummary


class AddressCreate(CamelModel):
    """Address creation schema. The owner is taken from the access token."""

    country: str = Field("nepal", min_length=2, max_length=50)
    state: str = Field(..., min_length=1, max_length=50)
    city: str = Field(..., min_length=2, max_length=50)
    chowk: str = Field(..., min_length=2, max_length=50)
    street: Optional[str] = Field(None, min_length=5, max_length=100)
    house_number: Optional[str] = Field(None, min_length=1, max_length=50)
    zip_code: Optional[str] = Field(None, pattern=r"^[0-9]{5}(-[0-9]{4})?$", examples=["44600"])
    is_default: bool = True


AddressUpdate = partial_model(AddressCreate, "AddressUpdate")


class AddressResponse(AddressCreate):
    id: uuid.UUID
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class AddressWithUser(AddressResponse):
    """Address joined with its owner for admin views."""

    user: Optional[OwnerSummary] = None
