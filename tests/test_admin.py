"""
Tests for the admin dashboard and owner-joined collections.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from cityhom.database import utcnow
from cityhom.models import Room, Flat, House
from cityhom.repositories.address import AddressRepository
from cityhom.services.admin import growth_rate
from tests.conftest import ListingFactory, UserFactory, auth_headers

ADMIN_URL = "/api/v1/admin"


class TestGrowthRate:

    def test_no_entries(self):
        assert growth_rate(0, 0) == "0.00"

    def test_everything_new(self):
        assert growth_rate(3, 3) == "300.00"

    def test_partial_growth(self):
        assert growth_rate(10, 2) == "25.00"
        assert growth_rate(4, 1) == "33.33"


class TestDashboard:
    """Tests for GET /admin/dashboard."""

    @pytest.mark.asyncio
    async def test_requires_admin(self, async_client: AsyncClient, provider_user):
        response = await async_client.get(f"{ADMIN_URL}/dashboard", headers=auth_headers(provider_user))

        assert response.status_code == 403
        assert response.json()["message"] == "Forbidden: Insufficient permissions"

    @pytest.mark.asyncio
    async def test_requires_token(self, async_client: AsyncClient):
        response = await async_client.get(f"{ADMIN_URL}/dashboard")

        assert response.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize("days", [0, 731])
    async def test_days_out_of_range(self, async_client: AsyncClient, admin_user, days):
        response = await async_client.get(
            f"{ADMIN_URL}/dashboard",
            params={"days": days},
            headers=auth_headers(admin_user)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "days must be an integer between 1 and 730"

    @pytest.mark.asyncio
    async def test_dashboard_statistics(self, async_client: AsyncClient, admin_user, provider_user, session_factory):
        fresh_room = await ListingFactory.create_listing(session_factory, Room, provider_user.id)
        await ListingFactory.create_listing(
            session_factory, Room, provider_user.id, created_at=utcnow() - timedelta(days=30)
        )
        await ListingFactory.create_listing(session_factory, House, provider_user.id)

        response = await async_client.get(
            f"{ADMIN_URL}/dashboard",
            params={"days": 7},
            headers=auth_headers(admin_user)
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["days"] == 7

        stats = data["stats"]
        assert stats["users"] == {"total": 2, "new": 2, "growth": "200.00"}
        assert stats["rooms"] == {"total": 2, "new": 1, "growth": "100.00"}
        assert stats["houses"] == {"total": 1, "new": 1, "growth": "100.00"}
        assert stats["flats"] == {"total": 0, "new": 0, "growth": "0.00"}
        assert stats["lands"] == {"total": 0, "new": 0, "growth": "0.00"}

        latest = data["latest"]
        assert latest["rooms"][0]["id"] == str(fresh_room.id)
        assert len(latest["rooms"]) == 2
        assert latest["flats"] == []
        assert {user["email"] for user in latest["users"]} == {"admin@test.com", "provider@test.com"}
        assert all("password" not in user for user in latest["users"])

    @pytest.mark.asyncio
    async def test_latest_entries_are_capped(self, async_client: AsyncClient, admin_user, provider_user, session_factory):
        for _ in range(7):
            await ListingFactory.create_listing(session_factory, Flat, provider_user.id)

        response = await async_client.get(f"{ADMIN_URL}/dashboard", headers=auth_headers(admin_user))

        data = response.json()["data"]
        assert data["days"] == 7
        assert data["stats"]["flats"]["total"] == 7
        assert len(data["latest"]["flats"]) == 5


class TestAdminCollections:

    @pytest.mark.asyncio
    async def test_user_details(self, async_client: AsyncClient, admin_user, session_factory):
        for _ in range(3):
            await UserFactory.create_user(session_factory)

        response = await async_client.get(
            f"{ADMIN_URL}/user-details",
            params={"limit": 2},
            headers=auth_headers(admin_user)
        )

        assert response.status_code == 200
        page = response.json()["data"]
        assert page["totalDocs"] == 4
        assert page["totalPages"] == 2
        assert len(page["docs"]) == 2
        assert all("password" not in user for user in page["docs"])

    @pytest.mark.asyncio
    async def test_rooms_with_owner(self, async_client: AsyncClient, admin_user, provider_user, session_factory):
        room = await ListingFactory.create_listing(session_factory, Room, provider_user.id)

        response = await async_client.get(f"{ADMIN_URL}/rooms-with-owner", headers=auth_headers(admin_user))

        assert response.status_code == 200
        docs = response.json()["data"]["docs"]
        assert docs[0]["id"] == str(room.id)
        assert docs[0]["user"] == {
            "id": str(provider_user.id),
            "name": provider_user.name,
            "email": "provider@test.com",
            "phoneNumber": provider_user.phone_number,
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("plural", ["rooms", "flats", "houses", "lands"])
    async def test_with_owner_routes_exist(self, async_client: AsyncClient, admin_user, plural):
        response = await async_client.get(f"{ADMIN_URL}/{plural}-with-owner", headers=auth_headers(admin_user))

        assert response.status_code == 200
        assert response.json()["data"]["docs"] == []

    @pytest.mark.asyncio
    async def test_addresses_with_user(self, async_client: AsyncClient, admin_user, provider_user, session_factory):
        async with session_factory() as session:
            await AddressRepository(session).create({
                "user_id": provider_user.id,
                "state": "bagmati",
                "city": "kathmandu",
                "chowk": "baneshwor",
            })

        response = await async_client.get(f"{ADMIN_URL}/addresses-with-user", headers=auth_headers(admin_user))

        assert response.status_code == 200
        docs = response.json()["data"]["docs"]
        assert len(docs) == 1
        assert docs[0]["user"]["email"] == "provider@test.com"

    @pytest.mark.asyncio
    async def test_collections_require_admin(self, async_client: AsyncClient, provider_user):
        response = await async_client.get(f"{ADMIN_URL}/rooms-with-owner", headers=auth_headers(provider_user))

        assert response.status_code == 403
