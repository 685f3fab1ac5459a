"""
Database models for the CityHom API.
Includes users, addresses and the listing tables.
"""

from cityhom.models.user import User, UserRole, ROLE_HIERARCHY, has_role_access, is_admin
from cityhom.models.address import Address
from cityhom.models.listing import (
    Country,
    ListingPurpose,
    SpaceType,
    SpaceCategory,
    GenderPreference,
    FurnishStatus,
)
from cityhom.models.room import Room
from cityhom.models.flat import Flat
from cityhom.models.house import House
from cityhom.models.land import Land
from cityhom.models.apartment import Apartment

# Collections merged by the unified search, in feed order
SEARCHABLE_MODELS = (Room, Flat, Land, House)

# Every listing table owned by a user
LISTING_MODELS = (Room, Flat, House, Land, Apartment)

__all__ = [
    "User",
    "UserRole",
    "ROLE_HIERARCHY",
    "has_role_access",
    "is_admin",
    "Address",
    "Country",
    "ListingPurpose",
    "SpaceType",
    "SpaceCategory",
    "GenderPreference",
    "FurnishStatus",
    "Room",
    "Flat",
    "House",
    "Land",
    "Apartment",
    "SEARCHABLE_MODELS",
    "LISTING_MODELS",
]
