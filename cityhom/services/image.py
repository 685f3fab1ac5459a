"""
Image service for issuing direct-upload credentials and removing stored images.
Files never pass through the API; clients POST them straight to object storage.
"""

import asyncio
import logging
from typing import List, Sequence, Tuple

from cityhom.config import settings
from cityhom.schemas.image import FileDescriptor, PresignedUpload
from cityhom.utils.exceptions import BadRequestError, ResourceLimitExceededError
from cityhom.utils.storage import ObjectStorage

logger = logging.getLogger(__name__)


class ImageService:
    """Service for presigned uploads and best-effort deletions."""

    def __init__(self, storage: ObjectStorage):
        self.storage = storage
        self.max_files = settings.max_upload_files

    async def issue_uploads(self, files: Sequence[FileDescriptor], folder: str) -> List[PresignedUpload]:
        """
        Create one presigned POST per file.

        Args:
            files: Validated file descriptors
            folder: Key prefix, e.g. "room-images"

        Returns:
            Upload credentials in the order the files were given

        Raises:
            BadRequestError: If the batch is empty
            ResourceLimitExceededError: If the batch holds too many files
        """
        if not files:
            raise BadRequestError("At least one file is required")
        if len(files) > self.max_files:
            raise ResourceLimitExceededError("Files per upload", self.max_files)

        async def presign(descriptor: FileDescriptor) -> PresignedUpload:
            key = self.storage.build_key(folder, descriptor.file_type)
            post = await self.storage.presigned_post(key, descriptor.file_type)
            return PresignedUpload(
                file_name=descriptor.file_name,
                key=key,
                url=post["url"],
                fields=post["fields"],
                public_url=self.storage.public_url(key),
            )

        uploads = await asyncio.gather(*(presign(descriptor) for descriptor in files))
        logger.info(f"Issued {len(uploads)} presigned uploads in {folder}")
        return list(uploads)

    async def delete_image(self, url: str) -> str:
        """
        Delete the object behind a public URL.

        Returns:
            The deleted storage key
        """
        try:
            key = self.storage.key_from_url(url)
        except ValueError as e:
            raise BadRequestError(str(e))

        await self.storage.delete(key)
        logger.info(f"Deleted image {key}")
        return key

    async def delete_images(self, urls: Sequence[str]) -> Tuple[List[str], List[str]]:
        """
        Delete several images concurrently. Failures are logged, never raised.

        Returns:
            Tuple of (deleted urls, failed urls)
        """
        results = await asyncio.gather(*(self.delete_image(url) for url in urls), return_exceptions=True)

        deleted, failed = [], []
        for url, result in zip(urls, results):
            if isinstance(result, Exception):
                logger.warning(f"Failed to delete image {url}: {result}")
                failed.append(url)
            else:
                deleted.append(url)
        return deleted, failed
