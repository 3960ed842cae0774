# =============================================================================
# core/services/document_service.py - Document Upload & Removal
# =============================================================================
# Documents are rows in the `documents` table pointing at files in
# Supabase Storage. The two systems aren't transactional, so:
# - upload writes the object first, then inserts the row; if the insert
#   fails the object is deleted again (best-effort, logged, not retried)
# - delete removes the object first (best-effort), then the row
# =============================================================================

import logging
import time
from pathlib import PurePosixPath
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from app.config import settings
from app.exceptions import DatabaseError, FileTooLargeError, MissingFieldError
from core.services.record_service import RecordService
from core.services.storage_service import StorageService

logger = logging.getLogger(__name__)


def build_storage_path(user_id: UUID | str, filename: str, timestamp_ms: int | None = None) -> str:
    """
    Object key for an uploaded file: ``{user_id}/{epoch_ms}_{filename}``.

    Only the base name of `filename` is kept, so a client can't write
    outside its own folder.
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    name = PurePosixPath(filename.replace("\\", "/")).name or "file"
    return f"{normalize_uuid(user_id)}/{timestamp_ms}_{name}"


class DocumentService(RecordService):
    """Documents are owned records with a file attached."""

    TABLE = "documents"
    RESOURCE = "Document"
    ORDER_BY = "issue_date"

    @classmethod
    def upload_document(
        cls,
        user_id: UUID | str,
        filename: str,
        content: bytes,
        metadata: dict[str, Any],
        content_type: str | None = None,
    ) -> dict[str, Any]:
        """
        Store a file and record its metadata.

        Steps:
        1. Reject files over MAX_DOCUMENT_SIZE_MB
        2. Write the object under the user's folder
        3. Insert a row referencing the object's public URL
        4. If step 3 fails, delete the object from step 2

        Args:
            user_id: Owner (auth user id)
            filename: Original client filename
            content: File bytes
            metadata: Validated document fields (title, issuer, ...)
            content_type: MIME type reported by the client

        Returns:
            The inserted document row

        Raises:
            MissingFieldError: If the file is empty
            FileTooLargeError: If the file exceeds the size limit
            StorageUploadError: If the storage write fails (nothing inserted)
            DatabaseError: If the row insert fails (object rolled back)
        """
        if not filename:
            raise MissingFieldError("file", "File and title are required")

        size_bytes = len(content)
        if size_bytes > settings.max_document_size_bytes:
            raise FileTooLargeError(size_bytes / (1024 * 1024), settings.MAX_DOCUMENT_SIZE_MB)

        storage_path = build_storage_path(user_id, filename)
        logger.info(f"Uploading document: {storage_path} ({size_bytes} bytes)")

        StorageService.upload_file(storage_path, content, content_type)

        try:
            file_url = StorageService.get_public_url(storage_path)
            row = {
                **metadata,
                "file_url": file_url,
                cls.OWNER_COLUMN: normalize_uuid(user_id),
            }
            document = SupabaseClient.insert_row(cls.TABLE, row)

        except Exception as e:
            logger.error(f"Document insert failed, rolling back {storage_path}: {e}")
            if not StorageService.delete_file(storage_path):
                logger.error(f"Rollback failed, orphaned storage object: {storage_path}")
            raise DatabaseError("Database insert failed", str(e))

        logger.info(f"Document inserted: {document.get('id')}")
        return document

    @classmethod
    def delete_document(
        cls,
        record_id: str,
        user_id: UUID | str,
    ) -> dict[str, Any]:
        """
        Delete a document row and its stored file.

        The file removal is best-effort; the row is deleted even if the
        object is already gone.

        Raises:
            RecordNotFoundError: If the document doesn't exist
            ForbiddenError: If the document belongs to another profile
        """
        document = cls.get_owned_record(record_id, user_id)

        file_url = document.get("file_url")
        if file_url:
            StorageService.delete_file(StorageService.path_from_url(file_url))

        SupabaseClient.delete_rows(
            cls.TABLE,
            {"id": record_id, cls.OWNER_COLUMN: user_id},
        )

        logger.info(f"Deleted document {record_id}")
        return document
