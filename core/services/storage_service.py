# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles document upload/delete operations with Supabase Storage.
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient
from lib.utils import storage_path_from_public_url
from app.config import settings
from app.exceptions import StorageUploadError

logger = logging.getLogger(__name__)


class StorageService:
    """
    Service for Supabase Storage operations.

    All objects live in the documents bucket (DOCUMENTS_BUCKET).
    """

    @staticmethod
    def upload_file(
        path: str,
        content: bytes,
        content_type: str | None = None,
    ) -> str:
        """
        Upload raw file content to storage.

        Objects are never overwritten: an existing key makes the upload fail.

        Args:
            path: Object key inside the bucket
            content: File bytes
            content_type: MIME type (defaults to application/octet-stream)

        Returns:
            Storage path

        Raises:
            StorageUploadError: If upload fails
        """
        client = SupabaseClient.get_client()

        try:
            client.storage.from_(settings.DOCUMENTS_BUCKET).upload(
                path=path,
                file=content,
                file_options={
                    "content-type": content_type or "application/octet-stream",
                    "cache-control": "3600",
                    "upsert": "false",
                }
            )

            logger.info(f"Uploaded file to storage: {path}")
            return path

        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageUploadError(str(e))

    @staticmethod
    def get_public_url(storage_path: str) -> str:
        """
        Get a public URL for a storage file.

        Args:
            storage_path: Path in storage bucket

        Returns:
            Public URL string
        """
        client = SupabaseClient.get_client()

        try:
            result = client.storage.from_(settings.DOCUMENTS_BUCKET).get_public_url(storage_path)
            return result
        except Exception as e:
            logger.error(f"Failed to get public URL: {e}")
            raise

    @staticmethod
    def delete_file(storage_path: str) -> bool:
        """
        Delete a file from storage.

        Best-effort: failures are logged, never raised or retried.

        Returns:
            True if deleted successfully
        """
        client = SupabaseClient.get_client()

        try:
            client.storage.from_(settings.DOCUMENTS_BUCKET).remove([storage_path])
            logger.info(f"Deleted file from storage: {storage_path}")
            return True

        except Exception as e:
            logger.error(f"Failed to delete file {storage_path}: {e}")
            return False

    @staticmethod
    def path_from_url(file_url: str) -> str:
        """Object key of a file given its public URL."""
        return storage_path_from_public_url(file_url, settings.DOCUMENTS_BUCKET)
