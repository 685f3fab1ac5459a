"""
API route handlers for the CityHom API.
"""

from .auth import router as auth_router
from .users import router as users_router
from .addresses import router as addresses_router
from .listings import rooms_router, flats_router, houses_router, lands_router, apartments_router
from .spaces import router as spaces_router
from .admin import router as admin_router
from .images import router as images_router

__all__ = [
    "auth_router",
    "users_router",
    "addresses_router",
    "rooms_router",
    "flats_router",
    "houses_router",
    "lands_router",
    "apartments_router",
    "spaces_router",
    "admin_router",
    "images_router",
]
