"""
Pydantic schemas for request/response validation.
"""

from .base import APIResponse, Page, CamelModel, partial_model
from .auth import SignupRequest, LoginRequest, AccessTokenResponse, AuthResponse
from .user import UserCreate, UserUpdate, UserAdminUpdate, UserResponse, OwnerSummary
from .address import AddressCreate, AddressUpdate, AddressResponse, AddressWithUser
from .listing import Facility, HouseFacilities, NearByLocation
from .room import RoomCreate, RoomUpdate, RoomResponse
from .flat import FlatCreate, FlatUpdate, FlatResponse
from .house import HouseCreate, HouseUpdate, HouseResponse
from .land import LandCreate, LandUpdate, LandResponse
from .apartment import ApartmentCreate, ApartmentUpdate, ApartmentResponse
from .search import SpaceSummary, SpaceWithOwner
from .admin import DashboardResponse, EntityStats
from .image import (
    FileDescriptor,
    SignedUrlRequest,
    ImageUploadRequest,
    PresignedUpload,
    DeleteImageRequest,
    DeleteImagesRequest,
    DeleteImagesResult,
)
from .error import ErrorResponse

__all__ = [
    "APIResponse",
    "Page",
    "CamelModel",
    "partial_model",
    "SignupRequest",
    "LoginRequest",
    "AccessTokenResponse",
    "AuthResponse",
    "UserCreate",
    "UserUpdate",
    "UserAdminUpdate",
    "UserResponse",
    "OwnerSummary",
    "AddressCreate",
    "AddressUpdate",
    "AddressResponse",
    "AddressWithUser",
    "Facility",
    "HouseFacilities",
    "NearByLocation",
    "RoomCreate",
    "RoomUpdate",
    "RoomResponse",
    "FlatCreate",
    "FlatUpdate",
    "FlatResponse",
    "HouseCreate",
    "HouseUpdate",
    "HouseResponse",
    "LandCreate",
    "LandUpdate",
    "LandResponse",
    "ApartmentCreate",
    "ApartmentUpdate",
    "ApartmentResponse",
    "SpaceSummary",
    "SpaceWithOwner",
    "DashboardResponse",
    "EntityStats",
    "FileDescriptor",
    "SignedUrlRequest",
    "ImageUploadRequest",
    "PresignedUpload",
    "DeleteImageRequest",
    "DeleteImagesRequest",
    "DeleteImagesResult",
    "ErrorResponse",
]
