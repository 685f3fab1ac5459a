"""
Schemas for the unified cross-collection feed.
"""

from typing import List, Optional
from datetime import datetime
import uuid

from cityhom.models.listing import SpaceCategory
from cityhom.schemas.base import CamelModel
from cityhom.schemas.user import OwnerSummary


class SpaceSummary(CamelModel):
    """Uniform projection of any listing, tagged with its category."""

    id: uuid.UUID
    user_id: uuid.UUID
    space_categories: SpaceCategory
    title: Optional[str] = None
    city: str
    chowk: str
    municipality: Optional[str] = None
    near_popular_place: Optional[str] = None
    fare: float
    listing_type: str
    is_available: bool
    gender_preference: Optional[str] = None
    is_space_provider_living: Optional[bool] = None
    no_of_bedrooms: Optional[int] = None
    space_images_url: List[str] = []
    description_of_space: str
    created_at: datetime


class SpaceWithOwner(SpaceSummary):
    """Listing summary joined with its owner for admin views."""

    user: Optional[OwnerSummary] = None
