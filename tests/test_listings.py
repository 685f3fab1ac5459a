"""
Tests for the listing endpoints shared by rooms, flats, houses, lands and apartments.
"""

import uuid
import warnings

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from cityhom.models import Room, Flat, House, Land
from tests.conftest import ListingFactory, PUBLIC_BASE_URL, auth_headers

ROOMS_URL = "/api/v1/rooms"


class TestCreateListing:
    """Tests for POST /{collection}."""

    @pytest.mark.asyncio
    async def test_create_room(self, async_client: AsyncClient, provider_user):
        payload = ListingFactory.room_payload(
            city="  Kathmandu ",
            spaceImagesUrl=[f"{PUBLIC_BASE_URL}/room-images/a.jpg"],
            facility={"wifi": True, "parking": "Bike"}
        )

        response = await async_client.post(ROOMS_URL, json=payload, headers=auth_headers(provider_user))

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Room created successfully"

        data = body["data"]
        assert data["fare"] == 12000
        assert data["city"] == "kathmandu"
        assert data["rulesOfLiving"] == "no smoking"
        assert data["userId"] == str(provider_user.id)
        assert data["spaceCategories"] == "room"
        assert data["country"] == "nepal"
        assert data["listingType"] == "rent"
        assert data["spaceType"] == "residential"
        assert data["genderPreference"] == "forAll"
        assert data["isAvailable"] is True
        assert data["facility"]["wifi"] is True
        assert data["facility"]["parking"] == "bike"
        assert data["facility"]["bed"] is False
        assert data["spaceImagesUrl"] == [f"{PUBLIC_BASE_URL}/room-images/a.jpg"]

    @pytest.mark.asyncio
    async def test_url_fields_serialize_cleanly(self, async_client: AsyncClient, provider_user):
        payload = ListingFactory.land_payload(
            spaceImagesUrl=[f"{PUBLIC_BASE_URL}/land-images/a.jpg"],
            videoUrl="https://videos.cityhom.test/walkthrough.mp4"
        )

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            response = await async_client.post("/api/v1/lands", json=payload, headers=auth_headers(provider_user))

        assert response.status_code == 201
        assert response.json()["data"]["videoUrl"] == "https://videos.cityhom.test/walkthrough.mp4"
        assert not [w for w in caught if "PydanticSerializationUnexpectedValue" in str(w.message)]

    @pytest.mark.asyncio
    async def test_invalid_url_rejected(self, async_client: AsyncClient, provider_user):
        response = await async_client.post(
            "/api/v1/lands",
            json=ListingFactory.land_payload(videoUrl="not a url"),
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 400
        assert response.json()["errors"][0].startswith("videoUrl:")

    @pytest.mark.asyncio
    async def test_negative_fare_rejected(self, async_client: AsyncClient, provider_user, session_factory):
        response = await async_client.post(
            ROOMS_URL,
            json=ListingFactory.room_payload(fare=-5),
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation Error"
        assert "fare: Fare must be non-negative" in body["errors"]

        async with session_factory() as session:
            assert await session.scalar(select(func.count()).select_from(Room)) == 0

    @pytest.mark.asyncio
    async def test_zero_fare_allowed(self, async_client: AsyncClient, provider_user):
        response = await async_client.post(
            ROOMS_URL,
            json=ListingFactory.room_payload(fare=0),
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 201
        assert response.json()["data"]["fare"] == 0

    @pytest.mark.asyncio
    async def test_missing_required_field(self, async_client: AsyncClient, provider_user, session_factory):
        payload = ListingFactory.room_payload()
        del payload["rulesOfLiving"]

        response = await async_client.post(ROOMS_URL, json=payload, headers=auth_headers(provider_user))

        assert response.status_code == 400
        assert "rulesOfLiving: Field required" in response.json()["errors"]
        async with session_factory() as session:
            assert await session.scalar(select(func.count()).select_from(Room)) == 0

    @pytest.mark.asyncio
    async def test_invalid_enum_value(self, async_client: AsyncClient, provider_user):
        response = await async_client.post(
            ROOMS_URL,
            json=ListingFactory.room_payload(genderPreference="anyone"),
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 400
        assert any(error.startswith("genderPreference:") for error in response.json()["errors"])

    @pytest.mark.asyncio
    async def test_short_phone_number(self, async_client: AsyncClient, provider_user):
        response = await async_client.post(
            ROOMS_URL,
            json=ListingFactory.room_payload(phoneNumber=98000),
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 400
        assert "phoneNumber: Phone number must be at least 10 digits" in response.json()["errors"]

    @pytest.mark.asyncio
    async def test_flat_requires_a_bedroom(self, async_client: AsyncClient, provider_user):
        response = await async_client.post(
            "/api/v1/flats",
            json=ListingFactory.flat_payload(noOfBedrooms=0),
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 400
        assert "noOfBedrooms: Must have at least one bedroom" in response.json()["errors"]

    @pytest.mark.asyncio
    async def test_create_house(self, async_client: AsyncClient, provider_user):
        response = await async_client.post(
            "/api/v1/houses",
            json=ListingFactory.house_payload(),
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["spaceCategories"] == "house"
        assert data["title"] == "family house in budhanilkantha"
        assert data["nearByLocation"]["market"] == "bishalnagar market"
        assert data["furnish"] == "full"
        assert data["facilities"]["garage"] is False

    @pytest.mark.asyncio
    async def test_create_land_for_sale(self, async_client: AsyncClient, provider_user):
        response = await async_client.post(
            "/api/v1/lands",
            json=ListingFactory.land_payload(),
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["listingType"] == "sale"
        assert data["plotNumber"] == "P-1021"
        assert data["wardNo"] == 25

    @pytest.mark.asyncio
    async def test_create_apartment(self, async_client: AsyncClient, provider_user):
        response = await async_client.post(
            "/api/v1/apartments",
            json=ListingFactory.flat_payload(),
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 201
        assert response.json()["data"]["spaceCategories"] == "apartment"


class TestGetListing:

    @pytest.mark.asyncio
    async def test_get_room(self, async_client: AsyncClient, provider_user, session_factory):
        room = await ListingFactory.create_listing(session_factory, Room, provider_user.id)

        response = await async_client.get(f"{ROOMS_URL}/{room.id}")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(room.id)

    @pytest.mark.asyncio
    async def test_get_missing_room(self, async_client: AsyncClient):
        missing_id = uuid.uuid4()

        response = await async_client.get(f"{ROOMS_URL}/{missing_id}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": f"Room not found with ID: {missing_id}"}

    @pytest.mark.asyncio
    async def test_malformed_id(self, async_client: AsyncClient):
        response = await async_client.get(f"{ROOMS_URL}/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["errors"][0].startswith("listing_id:")


class TestListListings:
    """Tests for GET /{collection} filters, sorting and pagination."""

    @pytest.mark.asyncio
    async def test_empty_collection(self, async_client: AsyncClient):
        response = await async_client.get(ROOMS_URL)

        assert response.status_code == 200
        page = response.json()["data"]
        assert page["docs"] == []
        assert page["totalDocs"] == 0
        assert page["totalPages"] == 1
        assert page["hasNextPage"] is False

    @pytest.mark.asyncio
    async def test_fare_range_and_sort(self, async_client: AsyncClient, provider_user, session_factory):
        for fare in (5000, 20000, 12000, 8000):
            await ListingFactory.create_listing(session_factory, Room, provider_user.id, fare=fare)

        response = await async_client.get(
            ROOMS_URL,
            params={"fareMin": 6000, "fareMax": 15000, "sortBy": "fare", "sortOrder": "asc"}
        )

        assert response.status_code == 200
        page = response.json()["data"]
        assert [doc["fare"] for doc in page["docs"]] == [8000, 12000]
        assert page["totalDocs"] == 2

    @pytest.mark.asyncio
    async def test_pagination(self, async_client: AsyncClient, provider_user, session_factory):
        for fare in range(1000, 6000, 1000):
            await ListingFactory.create_listing(session_factory, Room, provider_user.id, fare=fare)

        response = await async_client.get(
            ROOMS_URL,
            params={"page": 2, "limit": 2, "sortBy": "fare", "sortOrder": "desc"}
        )

        page = response.json()["data"]
        assert [doc["fare"] for doc in page["docs"]] == [3000, 2000]
        assert page["totalDocs"] == 5
        assert page["totalPages"] == 3
        assert page["page"] == 2
        assert page["pagingCounter"] == 3
        assert page["prevPage"] == 1
        assert page["nextPage"] == 3

    @pytest.mark.asyncio
    async def test_location_query(self, async_client: AsyncClient, provider_user, session_factory):
        await ListingFactory.create_listing(session_factory, Room, provider_user.id, city="pokhara", chowk="lakeside")
        await ListingFactory.create_listing(session_factory, Room, provider_user.id, city="kathmandu")

        response = await async_client.get(ROOMS_URL, params={"locationQuery": "LAKE"})

        docs = response.json()["data"]["docs"]
        assert len(docs) == 1
        assert docs[0]["chowk"] == "lakeside"

    @pytest.mark.asyncio
    async def test_filter_on_missing_field_is_ignored(self, async_client: AsyncClient, provider_user, session_factory):
        await ListingFactory.create_listing(session_factory, Land, provider_user.id)

        response = await async_client.get("/api/v1/lands", params={"genderPreference": "girlsOnly"})

        assert response.json()["data"]["totalDocs"] == 1

    @pytest.mark.asyncio
    async def test_min_bedrooms(self, async_client: AsyncClient, provider_user, session_factory):
        await ListingFactory.create_listing(session_factory, Flat, provider_user.id, no_of_bedrooms=1)
        await ListingFactory.create_listing(session_factory, Flat, provider_user.id, no_of_bedrooms=3)

        response = await async_client.get("/api/v1/flats", params={"minBedrooms": 2})

        docs = response.json()["data"]["docs"]
        assert [doc["noOfBedrooms"] for doc in docs] == [3]

    @pytest.mark.asyncio
    async def test_invalid_sort_field(self, async_client: AsyncClient):
        response = await async_client.get(ROOMS_URL, params={"sortBy": "title"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_my_listings(self, async_client: AsyncClient, provider_user, other_provider, session_factory):
        mine = await ListingFactory.create_listing(session_factory, House, provider_user.id)
        await ListingFactory.create_listing(session_factory, House, other_provider.id)

        response = await async_client.get("/api/v1/houses/my-houses", headers=auth_headers(provider_user))

        assert response.status_code == 200
        page = response.json()["data"]
        assert [doc["id"] for doc in page["docs"]] == [str(mine.id)]
        assert page["limit"] == 15

    @pytest.mark.asyncio
    async def test_my_listings_limit(self, async_client: AsyncClient, provider_user, session_factory):
        for _ in range(3):
            await ListingFactory.create_listing(session_factory, Room, provider_user.id)

        response = await async_client.get(
            f"{ROOMS_URL}/my-rooms", params={"limit": 2}, headers=auth_headers(provider_user)
        )
        too_large = await async_client.get(
            f"{ROOMS_URL}/my-rooms", params={"limit": 101}, headers=auth_headers(provider_user)
        )

        page = response.json()["data"]
        assert (page["limit"], len(page["docs"]), page["totalPages"]) == (2, 2, 2)
        assert too_large.status_code == 400


class TestUpdateListing:

    @pytest.mark.asyncio
    async def test_owner_partial_update(self, async_client: AsyncClient, provider_user, session_factory):
        room = await ListingFactory.create_listing(session_factory, Room, provider_user.id, fare=9000)

        response = await async_client.put(
            f"{ROOMS_URL}/{room.id}",
            json={"fare": 9500, "isAvailable": False},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["fare"] == 9500
        assert data["isAvailable"] is False
        assert data["city"] == "kathmandu"
        assert data["rulesOfLiving"] == "no smoking"

    @pytest.mark.asyncio
    async def test_update_validates_supplied_fields(self, async_client: AsyncClient, provider_user, session_factory):
        room = await ListingFactory.create_listing(session_factory, Room, provider_user.id)

        response = await async_client.put(
            f"{ROOMS_URL}/{room.id}",
            json={"fare": -1},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 400
        assert "fare: Fare must be non-negative" in response.json()["errors"]

    @pytest.mark.asyncio
    async def test_null_clears_optional_fields(self, async_client: AsyncClient, provider_user, session_factory):
        land = await ListingFactory.create_listing(
            session_factory, Land, provider_user.id,
            video_url="https://videos.cityhom.test/plot.mp4", dimension="40x60"
        )

        response = await async_client.put(
            f"/api/v1/lands/{land.id}",
            json={"videoUrl": None, "dimension": None, "fare": None, "title": None},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["videoUrl"] is None
        assert data["dimension"] is None
        assert data["fare"] == 10000
        assert data["title"] == "plot"

    @pytest.mark.asyncio
    async def test_non_owner_forbidden(self, async_client: AsyncClient, provider_user, other_provider, session_factory):
        room = await ListingFactory.create_listing(session_factory, Room, provider_user.id)

        response = await async_client.put(
            f"{ROOMS_URL}/{room.id}",
            json={"fare": 1},
            headers=auth_headers(other_provider)
        )

        assert response.status_code == 403
        assert response.json()["message"] == "You are not allowed to modify this room"

    @pytest.mark.asyncio
    async def test_admin_can_update_any_listing(self, async_client: AsyncClient, provider_user, admin_user, session_factory):
        land = await ListingFactory.create_listing(session_factory, Land, provider_user.id)

        response = await async_client.put(
            f"/api/v1/lands/{land.id}",
            json={"isExclusive": True},
            headers=auth_headers(admin_user)
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["isExclusive"] is True
        assert data["userId"] == str(provider_user.id)

    @pytest.mark.asyncio
    async def test_update_missing_listing(self, async_client: AsyncClient, provider_user):
        response = await async_client.put(
            f"{ROOMS_URL}/{uuid.uuid4()}",
            json={"fare": 100},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 404


class TestDeleteListing:

    @pytest.mark.asyncio
    async def test_delete_removes_images_best_effort(
        self, async_client: AsyncClient, provider_user, session_factory, fake_storage
    ):
        room = await ListingFactory.create_listing(
            session_factory,
            Room,
            provider_user.id,
            space_images_url=[f"{PUBLIC_BASE_URL}/room-images/a.jpg", f"{PUBLIC_BASE_URL}/room-images/b.jpg"]
        )
        fake_storage.failing_keys.add("room-images/b.jpg")

        response = await async_client.delete(f"{ROOMS_URL}/{room.id}", headers=auth_headers(provider_user))

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Room deleted successfully", "data": None}
        assert fake_storage.deleted == ["room-images/a.jpg"]
        assert (await async_client.get(f"{ROOMS_URL}/{room.id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_non_owner_cannot_delete(self, async_client: AsyncClient, provider_user, other_provider, session_factory):
        flat = await ListingFactory.create_listing(session_factory, Flat, provider_user.id)

        response = await async_client.delete(f"/api/v1/flats/{flat.id}", headers=auth_headers(other_provider))

        assert response.status_code == 403
        assert (await async_client.get(f"/api/v1/flats/{flat.id}")).status_code == 200

    @pytest.mark.asyncio
    async def test_admin_can_delete(self, async_client: AsyncClient, provider_user, admin_user, session_factory):
        house = await ListingFactory.create_listing(session_factory, House, provider_user.id)

        response = await async_client.delete(f"/api/v1/houses/{house.id}", headers=auth_headers(admin_user))

        assert response.status_code == 200


class TestListingImageUploads:

    @pytest.mark.asyncio
    async def test_signed_urls_use_collection_folder(self, async_client: AsyncClient, provider_user, fake_storage):
        response = await async_client.post(
            "/api/v1/flats/get-signed-url",
            json={"files": [
                {"fileName": "kitchen.png", "fileType": "image/png", "fileSize": 2048},
                {"fileName": "hall.jpg", "fileType": "image/jpeg", "fileSize": 4096},
            ]},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 200
        uploads = response.json()["data"]
        assert [upload["fileName"] for upload in uploads] == ["kitchen.png", "hall.jpg"]
        assert uploads[0]["key"].startswith("flat-images/")
        assert uploads[0]["key"].endswith(".png")
        assert uploads[1]["key"].endswith(".jpg")
        assert uploads[0]["publicUrl"] == f"{PUBLIC_BASE_URL}/{uploads[0]['key']}"
        assert uploads[0]["fields"]["Content-Type"] == "image/png"
        assert len(fake_storage.presigned) == 2

