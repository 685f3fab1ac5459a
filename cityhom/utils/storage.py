"""
Object storage client for listing and avatar images.
Wraps a boto3 S3 client; works with AWS S3 and S3-compatible endpoints such as R2.
"""

from functools import lru_cache
from typing import Any, Dict, Optional
from urllib.parse import urlparse
import logging
import mimetypes
import uuid

import boto3
from starlette.concurrency import run_in_threadpool

from cityhom.config import settings

logger = logging.getLogger(__name__)

# Extensions for the allowed MIME types; mimetypes maps image/jpeg to .jpg only on some platforms
MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def extension_for(mime_type: str) -> str:
    if mime_type in MIME_EXTENSIONS:
        return MIME_EXTENSIONS[mime_type]
    guessed = mimetypes.guess_extension(mime_type) or ""
    return guessed.lstrip(".") or "bin"


class ObjectStorage:
    """
    Issues presigned POST credentials and deletes stored objects.
    boto3 is blocking, so calls run in the threadpool.
    """

    def __init__(self, client: Any, bucket: str, public_base_url: str):
        self.client = client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")

    def build_key(self, folder: str, mime_type: str) -> str:
        return f"{folder}/{uuid.uuid4()}.{extension_for(mime_type)}"

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def key_from_url(self, url: str) -> str:
        """
        Derive the storage key of a public URL.

        URLs under the configured public base map to the remainder of the path;
        any other URL maps to its last two path segments (folder/file).
        """
        if url.startswith(self.public_base_url + "/"):
            return url[len(self.public_base_url) + 1:]
        segments = [segment for segment in urlparse(url).path.split("/") if segment]
        if not segments:
            raise ValueError(f"Cannot derive a storage key from '{url}'")
        return "/".join(segments[-2:])

    async def presigned_post(self, key: str, content_type: str) -> Dict[str, Any]:
        """Presigned POST limited to the size ceiling and the declared content type."""
        return await run_in_threadpool(
            self.client.generate_presigned_post,
            Bucket=self.bucket,
            Key=key,
            Fields={"Content-Type": content_type},
            Conditions=[
                ["content-length-range", 0, settings.max_file_size],
                {"Content-Type": content_type},
            ],
            ExpiresIn=settings.presigned_post_expires_seconds,
        )

    async def delete(self, key: str) -> None:
        await run_in_threadpool(self.client.delete_object, Bucket=self.bucket, Key=key)


@lru_cache()
def get_object_storage() -> ObjectStorage:
    """Storage dependency built once from settings."""
    client_kwargs: Dict[str, Optional[str]] = {
        "region_name": settings.aws_region,
        "aws_access_key_id": settings.aws_access_key_id,
        "aws_secret_access_key": settings.aws_secret_access_key,
    }
    if settings.storage_endpoint_url:
        client_kwargs["endpoint_url"] = settings.storage_endpoint_url

    client = boto3.client("s3", **client_kwargs)
    logger.info(f"Object storage configured for bucket {settings.storage_bucket_name}")
    return ObjectStorage(client, settings.storage_bucket_name, settings.storage_public_base)
