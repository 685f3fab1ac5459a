"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from pydantic import ValidationError as PydanticValidationError
from jose import JWTError
import logging

from cityhom.config import settings
from cityhom.database import test_database_connection, close_db_connection
from cityhom.routers import (
    auth_router,
    users_router,
    addresses_router,
    rooms_router,
    flats_router,
    houses_router,
    lands_router,
    apartments_router,
    spaces_router,
    admin_router,
    images_router
)
from cityhom.utils.exceptions import APIException, ServiceUnavailableError
from cityhom.services.error_handler import ErrorHandlerService
from cityhom.middleware.validation import ValidationMiddleware

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    db_connected = await test_database_connection()
    if not db_connected:
        logger.error("Failed to connect to database on startup")

    yield

    logger.info("Shutting down application")
    await close_db_connection()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Backend for the CityHom rental marketplace.

    ## Features

    * **Listings**: rooms, flats, houses, lands and apartments with owner-only mutations
    * **Unified search**: one feed across rooms, flats, lands and houses
    * **Images**: presigned direct uploads to object storage
    * **Admin**: dashboard statistics and owner-joined collections

    ## Authentication

    Sign up or log in under `/api/v1/auth` to receive an access token and send it as
    `Authorization: Bearer <token>`. The refresh token is kept in the `jwtToken` cookie
    and exchanged at `/api/v1/auth/refresh`.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Authentication", "description": "Signup, login and token refresh"},
        {"name": "Users", "description": "User profiles"},
        {"name": "Addresses", "description": "One address per user"},
        {"name": "Rooms", "description": "Room listings"},
        {"name": "Flats", "description": "Flat listings"},
        {"name": "Houses", "description": "House listings"},
        {"name": "Lands", "description": "Land listings"},
        {"name": "Apartments", "description": "Apartment listings (superseded by flats)"},
        {"name": "Spaces", "description": "Unified search across listing types"},
        {"name": "Admin", "description": "Administrator views"},
        {"name": "Images", "description": "Presigned uploads and image deletion"},
        {"name": "Health", "description": "System health endpoints"}
    ],
    lifespan=lifespan,
)

app.add_middleware(
    ValidationMiddleware,
    max_request_size=settings.max_request_size,
    enable_request_logging=settings.debug,
    enable_rate_limiting=settings.rate_limit_enabled,
    rate_limit_requests=settings.rate_limit_max_requests,
    rate_limit_window_minutes=settings.rate_limit_window_minutes
)

# Added last so preflight requests are answered before validation
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

for router in (
    auth_router,
    users_router,
    addresses_router,
    rooms_router,
    flats_router,
    houses_router,
    lands_router,
    apartments_router,
    spaces_router,
    admin_router,
    images_router,
):
    app.include_router(router, prefix=settings.api_v1_prefix)


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation errors are reported as 400 with per-field messages."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(JWTError)
async def jwt_exception_handler(request: Request, exc: JWTError):
    return ErrorHandlerService.handle_jwt_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with secure error responses."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/", tags=["Health"])
async def root():
    """Basic API information."""
    return {
        "success": True,
        "message": f"Welcome to {settings.app_name}",
        "data": {
            "version": settings.app_version,
            "environment": settings.environment,
            "documentation": "/docs",
            "apiPrefix": settings.api_v1_prefix
        }
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint with database connectivity test.
    Used by container health checks and load balancers.
    """
    if not await test_database_connection():
        raise ServiceUnavailableError("Database connection failed")

    return {
        "success": True,
        "message": "Service is healthy",
        "data": {
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "database": "connected"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "cityhom.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
