"""
Image management API endpoints.
Issues presigned uploads and deletes stored images by public URL.
"""

from typing import List
from fastapi import APIRouter, Depends

from cityhom.schemas.base import APIResponse
from cityhom.schemas.error import get_error_responses
from cityhom.schemas.image import (
    DeleteImageRequest,
    DeleteImagesRequest,
    DeleteImagesResult,
    ImageUploadRequest,
    PresignedUpload
)
from cityhom.services.image import ImageService
from cityhom.utils.dependencies import get_current_user, get_image_service

router = APIRouter(
    prefix="/images",
    tags=["Images"],
    dependencies=[Depends(get_current_user)],
    responses=get_error_responses(400, 401, 403, 500)
)


@router.post(
    "/upload",
    response_model=APIResponse[List[PresignedUpload]],
    summary="Presigned uploads",
    description="One presigned POST per file. Supports JPEG, PNG and WebP up to 10MB, at most 20 files."
)
async def upload_images(
    upload_request: ImageUploadRequest,
    image_service: ImageService = Depends(get_image_service)
) -> APIResponse[List[PresignedUpload]]:
    uploads = await image_service.issue_uploads(upload_request.files, upload_request.folder)
    return APIResponse[List[PresignedUpload]](message="Signed URLs generated successfully", data=uploads)


@router.delete("/delete", response_model=APIResponse[None], summary="Delete one image")
async def delete_image(
    delete_request: DeleteImageRequest,
    image_service: ImageService = Depends(get_image_service)
) -> APIResponse[None]:
    await image_service.delete_image(delete_request.url)
    return APIResponse[None](message="Image deleted successfully")


@router.delete(
    "/delete-multiple",
    response_model=APIResponse[DeleteImagesResult],
    summary="Delete several images",
    description="Deletions run concurrently; failures are reported, not raised."
)
async def delete_images(
    delete_request: DeleteImagesRequest,
    image_service: ImageService = Depends(get_image_service)
) -> APIResponse[DeleteImagesResult]:
    deleted, failed = await image_service.delete_images(delete_request.urls)
    message = f"Deleted {len(deleted)} of {len(delete_request.urls)} images"
    return APIResponse[DeleteImagesResult](
        message=message,
        data=DeleteImagesResult(deleted=deleted, failed=failed, message=message)
    )
