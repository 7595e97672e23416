# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles image upload/removal with Supabase Storage.
#
# Uploads are validated (image content type, size ceiling) before the
# storage API is called, stored under a collision-resistant name and
# returned with their public URL.
# =============================================================================

import base64
import binascii
import logging
import mimetypes
import secrets
import time
from dataclasses import dataclass
from pathlib import PurePosixPath

from lib.supabase_client import SupabaseClient
from app.config import settings
from app.exceptions import (
    EmptyFileError,
    FileTooLargeError,
    InvalidFileTypeError,
    InvalidImageContentError,
    StorageUploadError,
)

logger = logging.getLogger(__name__)

DEFAULT_FOLDER = "general"


@dataclass(frozen=True)
class UploadResult:
    """Where an uploaded image ended up."""
    url: str
    path: str
    bucket: str


class StorageService:
    """
    Service for Supabase Storage operations.

    Handles uploading and removing project and team images.
    """

    @staticmethod
    def bucket_for_folder(folder: str) -> str:
        """
        Pick the bucket for an upload folder.

        Folders mentioning "team" go to the team bucket; everything else
        is a project asset.
        """
        return settings.TEAM_BUCKET if "team" in folder.lower() else settings.PROJECTS_BUCKET

    @staticmethod
    def normalize_folder(folder: str | None) -> str:
        """Strip slashes and dot segments so the folder stays one level deep."""
        parts = [p for p in (folder or "").replace("\\", "/").split("/") if p not in ("", ".", "..")]
        return "-".join(parts) or DEFAULT_FOLDER

    @staticmethod
    def generate_file_name(filename: str | None, content_type: str | None = None) -> str:
        """
        Build a collision-resistant file name.

        Format: "<epoch milliseconds>-<12 random hex chars>.<ext>", e.g.
        "1718000000000-9f86d081884c.png". The extension comes from the
        original name, else from the content type.
        """
        timestamp = time.time_ns() // 1_000_000
        random_part = secrets.token_hex(6)

        ext = PurePosixPath(filename or "").suffix.lstrip(".").lower()
        if not ext and content_type:
            guessed = mimetypes.guess_extension(content_type)
            ext = guessed.lstrip(".") if guessed else ""

        return f"{timestamp}-{random_part}.{ext or 'bin'}"

    @staticmethod
    def validate_image(content: bytes, filename: str, content_type: str | None) -> None:
        """
        Reject anything that isn't a reasonably sized image.

        Raises:
            InvalidFileTypeError: Content type is not image/*
            EmptyFileError: No content
            FileTooLargeError: Larger than MAX_UPLOAD_SIZE_MB
        """
        if not content_type or not content_type.lower().startswith("image/"):
            raise InvalidFileTypeError(filename, content_type)

        if not content:
            raise EmptyFileError(filename)

        if len(content) > settings.max_upload_size_bytes:
            size_mb = len(content) / (1024 * 1024)
            raise FileTooLargeError(size_mb, settings.MAX_UPLOAD_SIZE_MB)

    @staticmethod
    def decode_content(content: bytes | str, filename: str = "upload") -> bytes:
        """
        Accept raw bytes, a base64 string or a data URL ("data:image/png;base64,...").

        Raises:
            InvalidImageContentError: If a string isn't valid base64
        """
        if isinstance(content, bytes):
            return content

        encoded = content.split(",", 1)[1] if content.startswith("data:") else content
        try:
            return base64.b64decode(encoded, validate=True)
        except binascii.Error as e:
            logger.warning(f"Rejected upload {filename}: invalid base64 ({e})")
            raise InvalidImageContentError(filename)

    @staticmethod
    def upload_image(
        content: bytes | str,
        folder: str | None,
        filename: str,
        content_type: str | None,
    ) -> UploadResult:
        """
        Validate and upload an image.

        Args:
            content: Image bytes (or base64 / data URL string)
            folder: Logical folder, e.g. "projects/hero" or "team"
            filename: Original filename (for the extension)
            content_type: MIME type reported by the client

        Returns:
            UploadResult with the public URL and storage path

        Raises:
            InvalidImageContentError / InvalidFileTypeError / EmptyFileError /
            FileTooLargeError:
                Before anything is sent to storage
            StorageUploadError: If the upload fails
        """
        data = StorageService.decode_content(content, filename)
        StorageService.validate_image(data, filename, content_type)

        folder_name = StorageService.normalize_folder(folder)
        bucket = StorageService.bucket_for_folder(folder_name)
        path = f"{folder_name}/{StorageService.generate_file_name(filename, content_type)}"

        client = SupabaseClient.get_client()

        try:
            client.storage.from_(bucket).upload(
                path=path,
                file=data,
                file_options={"content-type": content_type, "upsert": "true"}
            )
            url = client.storage.from_(bucket).get_public_url(path)

        except Exception as e:
            logger.error(f"Storage upload failed for {bucket}/{path}: {e}")
            raise StorageUploadError()

        logger.info(f"Uploaded image to storage: {bucket}/{path} ({len(data)} bytes)")
        return UploadResult(url=url, path=path, bucket=bucket)

    @staticmethod
    def delete_file(bucket: str, storage_path: str) -> bool:
        """
        Delete a file from storage.

        Returns:
            True if deleted successfully
        """
        client = SupabaseClient.get_client()

        try:
            client.storage.from_(bucket).remove([storage_path])
            logger.info(f"Deleted file from storage: {bucket}/{storage_path}")
            return True

        except Exception as e:
            logger.error(f"Failed to delete file {bucket}/{storage_path}: {e}")
            return False
