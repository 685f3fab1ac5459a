"""
Repository layer for data access operations.
"""

from cityhom.repositories.base import BaseRepository
from cityhom.repositories.listing import ListingRepository, ListingFilters
from cityhom.repositories.user import UserRepository
from cityhom.repositories.address import AddressRepository

__all__ = [
    "BaseRepository",
    "ListingRepository",
    "ListingFilters",
    "UserRepository",
    "AddressRepository",
]
