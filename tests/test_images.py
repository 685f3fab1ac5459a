"""
Tests for presigned uploads, image deletion and storage key handling.
"""

import pytest
from httpx import AsyncClient

from cityhom.schemas.image import FileDescriptor
from cityhom.services.image import ImageService
from cityhom.utils.exceptions import BadRequestError, ResourceLimitExceededError
from cityhom.utils.storage import ObjectStorage, extension_for
from tests.conftest import FakeStorage, PUBLIC_BASE_URL, auth_headers

IMAGES_URL = "/api/v1/images"


def file_entry(name: str = "photo.jpg", file_type: str = "image/jpeg", size: int = 1024) -> dict:
    return {"fileName": name, "fileType": file_type, "fileSize": size}


class TestUploadEndpoint:
    """Tests for POST /images/upload."""

    @pytest.mark.asyncio
    async def test_upload_into_folder(self, async_client: AsyncClient, provider_user, fake_storage):
        response = await async_client.post(
            f"{IMAGES_URL}/upload",
            json={"folder": "room-images", "files": [file_entry(), file_entry("plan.png", "image/png")]},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 200
        uploads = response.json()["data"]
        assert len(uploads) == 2
        assert all(upload["key"].startswith("room-images/") for upload in uploads)
        assert uploads[0]["url"] == "https://cityhom-test.s3.amazonaws.com/"
        assert [entry["content_type"] for entry in fake_storage.presigned] == ["image/jpeg", "image/png"]

    @pytest.mark.asyncio
    async def test_default_folder(self, async_client: AsyncClient, provider_user):
        response = await async_client.post(
            f"{IMAGES_URL}/upload",
            json={"files": [file_entry()]},
            headers=auth_headers(provider_user)
        )

        assert response.json()["data"][0]["key"].startswith("images/")

    @pytest.mark.asyncio
    async def test_too_many_files(self, async_client: AsyncClient, provider_user, fake_storage):
        response = await async_client.post(
            f"{IMAGES_URL}/upload",
            json={"files": [file_entry(f"{i}.jpg") for i in range(21)]},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Files per upload limit exceeded (maximum: 20)"
        assert fake_storage.presigned == []

    @pytest.mark.asyncio
    async def test_unsupported_type(self, async_client: AsyncClient, provider_user):
        response = await async_client.post(
            f"{IMAGES_URL}/upload",
            json={"files": [file_entry("anim.gif", "image/gif")]},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 400
        assert response.json()["errors"][0].startswith("files.0.fileType: Unsupported file type 'image/gif'")

    @pytest.mark.asyncio
    async def test_file_too_large(self, async_client: AsyncClient, provider_user):
        response = await async_client.post(
            f"{IMAGES_URL}/upload",
            json={"files": [file_entry(size=10 * 1024 * 1024 + 1)]},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 400
        assert response.json()["errors"][0].startswith("files.0.fileSize:")

    @pytest.mark.asyncio
    async def test_empty_batch(self, async_client: AsyncClient, provider_user):
        response = await async_client.post(
            f"{IMAGES_URL}/upload",
            json={"files": []},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_folder_name(self, async_client: AsyncClient, provider_user):
        response = await async_client.post(
            f"{IMAGES_URL}/upload",
            json={"folder": "../secrets", "files": [file_entry()]},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_requires_token(self, async_client: AsyncClient):
        response = await async_client.post(f"{IMAGES_URL}/upload", json={"files": [file_entry()]})

        assert response.status_code == 401


class TestDeleteEndpoints:

    @pytest.mark.asyncio
    async def test_delete_single_image(self, async_client: AsyncClient, provider_user, fake_storage):
        response = await async_client.request(
            "DELETE",
            f"{IMAGES_URL}/delete",
            json={"url": f"{PUBLIC_BASE_URL}/room-images/abc.jpg"},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Image deleted successfully"
        assert fake_storage.deleted == ["room-images/abc.jpg"]

    @pytest.mark.asyncio
    async def test_delete_single_failure_is_reported(self, async_client: AsyncClient, provider_user, fake_storage):
        fake_storage.failing_keys.add("room-images/abc.jpg")

        response = await async_client.request(
            "DELETE",
            f"{IMAGES_URL}/delete",
            json={"url": f"{PUBLIC_BASE_URL}/room-images/abc.jpg"},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal Server Error"}

    @pytest.mark.asyncio
    async def test_delete_multiple_partial_failure(self, async_client: AsyncClient, provider_user, fake_storage):
        urls = [
            f"{PUBLIC_BASE_URL}/room-images/1.jpg",
            f"{PUBLIC_BASE_URL}/room-images/2.jpg",
            f"{PUBLIC_BASE_URL}/room-images/3.jpg",
        ]
        fake_storage.failing_keys.add("room-images/2.jpg")

        response = await async_client.request(
            "DELETE",
            f"{IMAGES_URL}/delete-multiple",
            json={"urls": urls},
            headers=auth_headers(provider_user)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Deleted 2 of 3 images"
        assert body["data"]["deleted"] == [urls[0], urls[2]]
        assert body["data"]["failed"] == [urls[1]]


class TestObjectStorageKeys:
    """Tests for key and URL handling on ObjectStorage."""

    def setup_method(self):
        self.storage = ObjectStorage(client=None, bucket="cityhom", public_base_url="https://cdn.example.com/")

    def test_build_key(self):
        key = self.storage.build_key("land-images", "image/png")
        folder, name = key.split("/")
        assert folder == "land-images"
        assert name.endswith(".png")
        assert len(name) == len("00000000-0000-0000-0000-000000000000.png")

    def test_public_url_round_trip(self):
        url = self.storage.public_url("room-images/a.jpg")
        assert url == "https://cdn.example.com/room-images/a.jpg"
        assert self.storage.key_from_url(url) == "room-images/a.jpg"

    def test_key_from_foreign_url(self):
        url = "https://cityhom.s3.ap-south-1.amazonaws.com/house-images/b.webp?X-Amz-Signature=abc"
        assert self.storage.key_from_url(url) == "house-images/b.webp"

    def test_key_from_url_without_path(self):
        with pytest.raises(ValueError):
            self.storage.key_from_url("https://cityhom.s3.amazonaws.com/")

    def test_extension_for(self):
        assert extension_for("image/jpeg") == "jpg"
        assert extension_for("image/webp") == "webp"


class TestImageService:

    @pytest.mark.asyncio
    async def test_issue_uploads_preserves_order(self):
        service = ImageService(FakeStorage())
        files = [
            FileDescriptor(file_name=f"{i}.png", file_type="image/png", file_size=10) for i in range(3)
        ]

        uploads = await service.issue_uploads(files, "flat-images")

        assert [upload.file_name for upload in uploads] == ["0.png", "1.png", "2.png"]

    @pytest.mark.asyncio
    async def test_issue_uploads_rejects_empty_batch(self):
        with pytest.raises(BadRequestError):
            await ImageService(FakeStorage()).issue_uploads([], "flat-images")

    @pytest.mark.asyncio
    async def test_issue_uploads_limit(self):
        files = [FileDescriptor(file_name="a.png", file_type="image/png", file_size=10)] * 21

        with pytest.raises(ResourceLimitExceededError):
            await ImageService(FakeStorage()).issue_uploads(files, "flat-images")

    @pytest.mark.asyncio
    async def test_delete_image_with_underivable_key(self):
        with pytest.raises(BadRequestError):
            await ImageService(FakeStorage()).delete_image("https://elsewhere.example.com")
