"""
Test configuration and fixtures for the CityHom API.
Provides database fixtures, a fake object storage, test data factories and an HTTP client.
"""

import os

# Configure the application before it is imported
os.environ["ENVIRONMENT"] = "testing"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ACCESS_TOKEN_SECRET"] = "test-access-secret"
os.environ["REFRESH_TOKEN_SECRET"] = "test-refresh-secret"
os.environ["STORAGE_PUBLIC_BASE_URL"] = "https://cdn.cityhom.test"

import itertools
import uuid
from datetime import timedelta
from typing import Any, AsyncGenerator, Dict, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from cityhom.database import Base, get_db, get_session_factory
from cityhom.main import app
from cityhom.models import User, UserRole, Room, Flat, House, Land, Apartment
from cityhom.repositories.base import BaseRepository
from cityhom.repositories.user import UserRepository
from cityhom.utils.auth import create_access_token, create_refresh_token
from cityhom.utils.storage import ObjectStorage, get_object_storage

PUBLIC_BASE_URL = "https://cdn.cityhom.test"
DEFAULT_PASSWORD = "secret123"

_phone_numbers = itertools.count(9800000001)


class FakeStorage(ObjectStorage):
    """Object storage that records calls instead of talking to S3."""

    def __init__(self):
        super().__init__(client=None, bucket="cityhom-test", public_base_url=PUBLIC_BASE_URL)
        self.presigned: List[Dict[str, str]] = []
        self.deleted: List[str] = []
        self.failing_keys = set()

    async def presigned_post(self, key: str, content_type: str) -> Dict[str, Any]:
        self.presigned.append({"key": key, "content_type": content_type})
        return {
            "url": "https://cityhom-test.s3.amazonaws.com/",
            "fields": {"key": key, "Content-Type": content_type, "policy": "test-policy"},
        }

    async def delete(self, key: str) -> None:
        if key in self.failing_keys:
            raise RuntimeError(f"storage refused to delete {key}")
        self.deleted.append(key)


@pytest.fixture
async def test_engine(tmp_path):
    """Fresh SQLite database file per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cityhom.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
async def async_client(session_factory, fake_storage) -> AsyncGenerator[AsyncClient, None]:
    """Async client with database, session factory and storage overrides."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_object_storage] = lambda: fake_storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def auth_headers(user: User, expires_delta: Optional[timedelta] = None) -> Dict[str, str]:
    """Bearer header for a user."""
    token = create_access_token(user.id, user.roles, expires_delta=expires_delta)
    return {"Authorization": f"Bearer {token}"}


def refresh_cookie(user: User, expires_delta: Optional[timedelta] = None) -> Dict[str, str]:
    """Cookie header carrying a refresh token."""
    return {"Cookie": f"jwtToken={create_refresh_token(user.id, expires_delta=expires_delta)}"}


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
        name: str = "test user",
        phone_number: Optional[int] = None,
    ) -> dict:
        """Signup payload in wire format."""
        return {
            "name": name,
            "email": email or f"user{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "phoneNumber": phone_number or next(_phone_numbers),
        }

    @staticmethod
    async def create_user(
        session_factory: async_sessionmaker,
        roles: Optional[List[str]] = None,
        email: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
        name: str = "test user",
    ) -> User:
        """Create a test user in the database."""
        async with session_factory() as session:
            return await UserRepository(session).create_user({
                "name": name,
                "email": email or f"user{uuid.uuid4().hex[:8]}@example.com",
                "password": password,
                "phone_number": next(_phone_numbers),
                "roles": roles or [UserRole.SPACE_PROVIDER.value],
            })


class ListingFactory:
    """Factory for listing payloads and stored listings."""

    @staticmethod
    def room_payload(**overrides) -> dict:
        data = {
            "city": "Kathmandu",
            "chowk": "Baneshwor",
            "district": "Kathmandu",
            "descriptionOfSpace": "Sunny room near the ring road",
            "fare": 12000,
            "rulesOfLiving": "No smoking",
            "phoneNumber": 9800000000,
            "nearPopularPlace": "Civil Mall",
        }
        data.update(overrides)
        return data

    @staticmethod
    def flat_payload(**overrides) -> dict:
        data = ListingFactory.room_payload(noOfBedrooms=2, noOfBathrooms=1, noOfKitchens=1)
        data.pop("district")
        data.update(overrides)
        return data

    @staticmethod
    def land_payload(**overrides) -> dict:
        data = {
            "title": "Plot in Bhaisepati",
            "city": "Lalitpur",
            "chowk": "Bhaisepati",
            "descriptionOfSpace": "Flat land with road access",
            "fare": 2500000,
            "listingType": "sale",
            "municipality": "Lalitpur",
            "wardNo": 25,
            "totalArea": "4 aana",
            "roadType": "Blacktopped",
            "propertyFace": "East",
            "roadAccess": "13 ft",
            "plotNumber": "P-1021",
        }
        data.update(overrides)
        return data

    @staticmethod
    def house_payload(**overrides) -> dict:
        data = ListingFactory.land_payload(
            title="Family house in Budhanilkantha",
            city="Kathmandu",
            chowk="Budhanilkantha",
            phoneNumber=9800000000,
            buildUpArea="2200 sq ft",
            noOfBedrooms=4,
            noOfBathrooms=3,
            noOfKitchens=1,
            buildYear=2018,
            noOfFloors=3,
            noOfLivingRooms=1,
            noOfParkingSpaces=2,
            nearByLocation={"market": "Bishalnagar Market", "school": "Budhanilkantha School"},
        )
        data.update(overrides)
        return data

    # Column values for rows created directly through repositories
    _ROWS: Dict[Any, Dict[str, Any]] = {
        Room: {
            "district": "kathmandu",
            "rules_of_living": "no smoking",
            "phone_number": 9800000000,
            "near_popular_place": "civil mall",
        },
        Flat: {
            "rules_of_living": "no pets",
            "phone_number": 9800000000,
            "near_popular_place": "labim mall",
            "no_of_bedrooms": 2,
        },
        Apartment: {
            "rules_of_living": "no pets",
            "phone_number": 9800000000,
            "near_popular_place": "labim mall",
            "no_of_bedrooms": 3,
            "no_of_bathrooms": 1,
            "no_of_kitchens": 1,
        },
        Land: {
            "title": "plot",
            "municipality": "lalitpur",
            "ward_no": 3,
            "total_area": "4 aana",
            "road_type": "gravel",
            "property_face": "east",
            "road_access": "12 ft",
            "plot_number": "p-1",
        },
        House: {
            "title": "house",
            "municipality": "kathmandu",
            "ward_no": 9,
            "total_area": "5 aana",
            "road_type": "blacktopped",
            "property_face": "south",
            "road_access": "20 ft",
            "plot_number": "h-1",
            "phone_number": 9800000000,
            "build_up_area": "1800 sq ft",
            "no_of_bedrooms": 4,
            "no_of_bathrooms": 2,
            "no_of_kitchens": 1,
            "build_year": 2015,
            "no_of_floors": 2,
            "no_of_living_rooms": 1,
            "no_of_parking_spaces": 1,
        },
    }

    @staticmethod
    async def create_listing(session_factory: async_sessionmaker, model, user_id: uuid.UUID, **overrides):
        """Create a listing row of `model` owned by `user_id`."""
        data = {
            "user_id": user_id,
            "city": "kathmandu",
            "chowk": "baneshwor",
            "description_of_space": "test listing",
            "fare": 10000,
            "space_categories": model.category.value,
        }
        data.update(ListingFactory._ROWS[model])
        data.update(overrides)
        async with session_factory() as session:
            return await BaseRepository(model, session).create(data)


@pytest.fixture
async def provider_user(session_factory) -> User:
    """A space provider."""
    return await UserFactory.create_user(session_factory, email="provider@test.com", name="space provider")


@pytest.fixture
async def other_provider(session_factory) -> User:
    return await UserFactory.create_user(session_factory, email="other@test.com", name="other provider")


@pytest.fixture
async def plain_user(session_factory) -> User:
    """A user without listing roles."""
    return await UserFactory.create_user(session_factory, roles=[UserRole.USER.value], email="plain@test.com")


@pytest.fixture
async def admin_user(session_factory) -> User:
    return await UserFactory.create_user(session_factory, roles=[UserRole.ADMIN.value], email="admin@test.com")


@pytest.fixture
async def super_admin_user(session_factory) -> User:
    return await UserFactory.create_user(
        session_factory, roles=[UserRole.SUPER_ADMIN.value], email="root@test.com"
    )
