# =============================================================================
# app/routers/upload.py - Image Upload Endpoints
# =============================================================================
# Admin-only image handling for project and team forms:
#   POST   /admin/upload   multipart (file, folder) -> {url, path, bucket}
#   DELETE /admin/upload   {path, bucket?|folder?}  -> {success}
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.auth import AdminRoute, require_admin
from app.config import settings
from app.exceptions import FileTooLargeError, StorageDeleteError, UnknownBucketError
from core.models import DeleteUploadRequest, SuccessResponse, UploadResponse
from core.services.storage_service import DEFAULT_FOLDER, StorageService

logger = logging.getLogger(__name__)

router = APIRouter(route_class=AdminRoute, dependencies=[Depends(require_admin)])


@router.post("", response_model=UploadResponse)
async def upload_image(
    file: Annotated[UploadFile, File(description="Image file to upload")],
    folder: Annotated[str, Form(description="Logical folder, e.g. 'projects' or 'team'")] = DEFAULT_FOLDER,
):
    """
    Upload an image.

    This endpoint:
    1. Rejects non-image content types and files over MAX_UPLOAD_SIZE_MB
    2. Stores the file under "<folder>/<timestamp>-<random>.<ext>"
       (folders mentioning "team" go to the team bucket)
    3. Returns the public URL and storage path
    """
    filename = file.filename or "upload"

    # Reject oversized files before reading them when the size is known
    if file.size is not None and file.size > settings.max_upload_size_bytes:
        raise FileTooLargeError(file.size / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

    content = await file.read()
    logger.info(f"Processing upload: {filename} ({len(content)} bytes, {file.content_type})")

    result = StorageService.upload_image(
        content=content,
        folder=folder,
        filename=filename,
        content_type=file.content_type,
    )

    return UploadResponse(url=result.url, path=result.path, bucket=result.bucket)


@router.delete("", response_model=SuccessResponse)
async def delete_image(request: DeleteUploadRequest):
    """
    Remove an uploaded image, e.g. after it was replaced in a form.

    The bucket defaults to the one the path's folder routes to.
    """
    allowed = [settings.PROJECTS_BUCKET, settings.TEAM_BUCKET]

    if request.bucket:
        bucket = request.bucket
    else:
        bucket = StorageService.bucket_for_folder(request.folder or request.path.split("/", 1)[0])

    if bucket not in allowed:
        raise UnknownBucketError(bucket, allowed)

    if not StorageService.delete_file(bucket, request.path):
        raise StorageDeleteError()

    return SuccessResponse()
