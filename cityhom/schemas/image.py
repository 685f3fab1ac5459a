"""
Pydantic schemas for presigned image uploads and deletions.
"""

from pydantic import Field, field_validator
from typing import Dict, List, Optional

from cityhom.config import settings
from cityhom.schemas.base import CamelModel


class FileDescriptor(CamelModel):
    """A file the client intends to upload directly to object storage."""

    file_name: str = Field(..., min_length=1, max_length=255, examples=["bedroom.jpg"])
    file_type: str = Field(..., description="MIME type", examples=["image/jpeg"])
    file_size: int = Field(..., gt=0, description="Size in bytes")

    @field_validator("file_type")
    @classmethod
    def validate_file_type(cls, v):
        v = v.strip().lower()
        if v not in settings.allowed_file_types:
            supported = ", ".join(settings.allowed_file_types)
            raise ValueError(f"Unsupported file type '{v}'. Supported types: {supported}")
        return v

    @field_validator("file_size")
    @classmethod
    def validate_file_size(cls, v):
        if v > settings.max_file_size:
            raise ValueError(
                f"File size {v} bytes exceeds maximum allowed size {settings.max_file_size} bytes"
            )
        return v


class SignedUrlRequest(CamelModel):
    """Batch of files for a listing or avatar upload."""

    files: List[FileDescriptor] = Field(..., min_length=1)


class ImageUploadRequest(SignedUrlRequest):
    """Batch of files uploaded into a caller-chosen folder."""

    folder: str = Field("images", pattern=r"^[a-z0-9][a-z0-9-]*$", max_length=50)


class PresignedUpload(CamelModel):
    """Credentials for a single direct upload."""

    file_name: str
    key: str
    url: str = Field(..., description="Form POST target")
    fields: Dict[str, str] = Field(..., description="Form fields to send with the file")
    public_url: str = Field(..., description="Where the object is readable after upload")


class DeleteImageRequest(CamelModel):
    url: str = Field(..., min_length=1)


class DeleteImagesRequest(CamelModel):
    urls: List[str] = Field(..., min_length=1)


class DeleteImagesResult(CamelModel):
    """Outcome of a best-effort batch deletion."""

    deleted: List[str]
    failed: List[str]
    message: Optional[str] = None
