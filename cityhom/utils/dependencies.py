"""
FastAPI dependency injection utilities for authentication and services.
Provides reusable dependencies for route protection and service construction.
"""

from typing import Callable, Optional, Type
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from jose import JWTError, ExpiredSignatureError
from cityhom.database import get_db, get_session_factory
from cityhom.models.user import UserRole, ADMIN_ROLES
from cityhom.services.auth import AuthService
from cityhom.services.user import UserService
from cityhom.services.address import AddressService
from cityhom.services.listing import ListingService
from cityhom.services.search import SearchService
from cityhom.services.admin import AdminService
from cityhom.services.image import ImageService
from cityhom.utils.auth import TokenPayload, verify_token
from cityhom.utils.exceptions import (
    UnauthorizedError,
    InvalidTokenError,
    TokenExpiredError,
    InsufficientPermissionsError
)
from cityhom.utils.storage import ObjectStorage, get_object_storage
import logging

logger = logging.getLogger(__name__)

# HTTP Bearer token security scheme; missing headers are reported by get_current_user
security = HTTPBearer(auto_error=False)

# Roles allowed to publish and manage listings; admins pass through the hierarchy
LISTING_ROLES = (UserRole.SPACE_PROVIDER, UserRole.SPACE_BROKER)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_image_service(storage: ObjectStorage = Depends(get_object_storage)) -> ImageService:
    return ImageService(storage)


async def get_user_service(
    db: AsyncSession = Depends(get_db),
    image_service: ImageService = Depends(get_image_service)
) -> UserService:
    return UserService(db, image_service)


async def get_address_service(db: AsyncSession = Depends(get_db)) -> AddressService:
    return AddressService(db)


def listing_service(service_class: Type[ListingService]) -> Callable:
    """
    Create a dependency that builds the service for one listing collection.

    Args:
        service_class: ListingService subclass bound to a model

    Returns:
        Dependency function
    """
    async def service_dependency(
        db: AsyncSession = Depends(get_db),
        image_service: ImageService = Depends(get_image_service)
    ) -> ListingService:
        return service_class(db, image_service)

    return service_dependency


async def get_search_service(
    session_factory: async_sessionmaker = Depends(get_session_factory)
) -> SearchService:
    return SearchService(session_factory)


async def get_admin_service(
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker = Depends(get_session_factory)
) -> AdminService:
    return AdminService(db, session_factory)


def _decode_access_token(token: str) -> TokenPayload:
    try:
        return verify_token(token)
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError as e:
        logger.debug(f"Rejected access token: {e}")
        raise InvalidTokenError()


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenPayload:
    """
    Get the identity carried by the bearer access token.

    Raises:
        UnauthorizedError: If no bearer token is provided
        TokenExpiredError: If the token has expired
        InvalidTokenError: If the token signature or claims are invalid
    """
    if not credentials or not credentials.credentials:
        raise UnauthorizedError()
    return _decode_access_token(credentials.credentials)


def authorize_roles(*allowed_roles: UserRole) -> Callable:
    """
    Create a dependency that requires one of the given roles.
    A role also satisfies every role beneath it in the hierarchy.

    Args:
        allowed_roles: Roles accepted by the route

    Returns:
        Dependency function
    """
    async def role_dependency(
        current_user: TokenPayload = Depends(get_current_user)
    ) -> TokenPayload:
        if not current_user.has_any_role(allowed_roles):
            logger.info(f"User {current_user.user_id} lacks roles {[role.value for role in allowed_roles]}")
            raise InsufficientPermissionsError()
        return current_user

    return role_dependency


require_admin = authorize_roles(*(UserRole(role) for role in sorted(ADMIN_ROLES)))
require_listing_role = authorize_roles(*LISTING_ROLES)
