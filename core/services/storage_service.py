# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles photo and report uploads to Supabase Storage buckets.
# Uploaded files are served back through their public URL.
# =============================================================================

import logging
import time

from lib.supabase_client import SupabaseClient
from lib.utils import file_extension
from app.config import settings
from app.exceptions import FileTooLargeError, InvalidFileTypeError, StorageUploadError

logger = logging.getLogger(__name__)


class StorageService:
    """
    Service for Supabase Storage operations.

    Handles validating, uploading and resolving public URLs for files.
    """

    @staticmethod
    def validate_upload(filename: str, size: int) -> str:
        """
        Check an upload against the configured extension and size limits.

        Args:
            filename: Original filename
            size: File size in bytes

        Returns:
            The lower-cased extension including the dot

        Raises:
            InvalidFileTypeError: If the extension is not allowed
            FileTooLargeError: If the file is over the size limit
        """
        extension = file_extension(filename or "")
        allowed = settings.allowed_extensions_list
        if extension not in allowed:
            raise InvalidFileTypeError(filename, allowed)

        if size > settings.max_upload_size_bytes:
            raise FileTooLargeError(size / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

        return extension

    @staticmethod
    def build_path(folder: str, parts: list[str], extension: str) -> str:
        """
        Build a storage path like `hygiene/<w>_<area>_<date>_<ms>.jpg`.

        The millisecond suffix keeps repeated uploads from colliding.
        """
        stem = "_".join(str(p) for p in parts)
        return f"{folder}/{stem}_{int(time.time() * 1000)}{extension}"

    @staticmethod
    def upload_file(
        bucket: str,
        path: str,
        content: bytes,
        content_type: str | None = None,
    ) -> str:
        """
        Upload raw file content to storage.

        Args:
            bucket: Storage bucket name
            path: Path inside the bucket
            content: File bytes
            content_type: MIME type (defaults to application/octet-stream)

        Returns:
            Public URL of the uploaded file

        Raises:
            StorageUploadError: If upload fails
        """
        client = SupabaseClient.get_client()

        try:
            client.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options={
                    "content-type": content_type or "application/octet-stream",
                    "cache-control": "3600",
                    "upsert": "false",
                },
            )
            logger.info(f"Uploaded file to storage: {bucket}/{path}")

        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageUploadError(str(e))

        return StorageService.get_public_url(bucket, path)

    @staticmethod
    def get_public_url(bucket: str, path: str) -> str:
        """
        Get a public URL for a storage file.

        Raises:
            StorageUploadError: If the URL cannot be resolved
        """
        client = SupabaseClient.get_client()

        try:
            return client.storage.from_(bucket).get_public_url(path)
        except Exception as e:
            logger.error(f"Failed to get public URL: {e}")
            raise StorageUploadError(str(e))
