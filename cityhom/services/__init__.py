"""
Service layer for business logic implementation.
Contains services for authentication, users, addresses, listings, search, admin, images and error handling.
"""

from .auth import AuthService
from .user import UserService
from .address import AddressService
from .listing import (
    ListingService,
    RoomService,
    FlatService,
    HouseService,
    LandService,
    ApartmentService
)
from .search import SearchService
from .admin import AdminService
from .image import ImageService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "UserService",
    "AddressService",
    "ListingService",
    "RoomService",
    "FlatService",
    "HouseService",
    "LandService",
    "ApartmentService",
    "SearchService",
    "AdminService",
    "ImageService",
    "ErrorHandlerService"
]
