# =============================================================================
# app/routers/documents.py - Document Endpoints
# =============================================================================
# Documents are metadata rows plus a file in Supabase Storage.
# - /documents: metadata CRUD (DELETE also removes the stored file)
# - /documents/upload: multipart upload of file + metadata in one request
# All endpoints require authentication; there is no public listing.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Body, File, Form, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.dependencies import CurrentUser, IdPayload, RecordIdQuery, resolve_record_id
from app.exceptions import MissingFieldError
from core.models.document import (
    DocumentCreate,
    DocumentResponse,
    DocumentUpdate,
    DocumentUploadResponse,
)
from core.services.document_service import DocumentService

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Metadata CRUD
# =============================================================================

@router.get("", response_model=list[DocumentResponse])
async def list_documents(user: CurrentUser):
    """List the caller's documents, most recently issued first."""
    return DocumentService.list_records(profile_id=user.id)


@router.post("", response_model=DocumentResponse, status_code=201)
async def create_document(request: DocumentCreate, user: CurrentUser):
    """
    Create a document record without uploading a file.

    Use this when the file is hosted elsewhere and only `file_url` is known.
    """
    return DocumentService.create_record(user.id, request.model_dump(mode="json"))


@router.put("", response_model=DocumentResponse)
async def update_document(
    request: DocumentUpdate,
    user: CurrentUser,
    id: RecordIdQuery = None,
):
    """Update one of the caller's document records."""
    record_id = resolve_record_id(id, request.id)
    return DocumentService.update_record(record_id, user.id, request.to_update_data())


@router.delete("")
async def delete_document(
    user: CurrentUser,
    id: RecordIdQuery = None,
    payload: Annotated[IdPayload | None, Body()] = None,
):
    """
    Delete a document and its stored file.

    Returns 404 if the document doesn't exist and 403 if it belongs to
    someone else.
    """
    record_id = resolve_record_id(id, payload.id if payload else None)
    DocumentService.delete_document(record_id, user.id)

    return {
        "message": "Document deleted successfully",
        "id": record_id,
    }


# =============================================================================
# Upload
# =============================================================================

@router.post("/upload", response_model=DocumentUploadResponse, status_code=201)
async def upload_document(
    user: CurrentUser,
    file: Annotated[UploadFile | None, File(description="Document file (max 10MB)")] = None,
    title: Annotated[str | None, Form()] = None,
    issuer: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    issue_date: Annotated[str | None, Form(description="YYYY-MM-DD")] = None,
    description: Annotated[str | None, Form()] = None,
):
    """
    Upload a document file and create its record.

    This endpoint:
    1. Validates the form (file and title required, issue_date format)
    2. Rejects files over the size limit
    3. Stores the file under the caller's folder in the documents bucket
    4. Inserts a document row pointing at the file's public URL

    If step 4 fails the stored file is deleted again and 500 is returned.
    """
    if file is None or not file.filename or not (title or "").strip():
        raise MissingFieldError("file", "File and title are required")

    try:
        metadata = DocumentCreate(
            title=title,
            issuer=issuer,
            category=category,
            issue_date=issue_date,
            description=description,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    content = await file.read()

    logger.info(
        f"Form data received: title={metadata.title!r}, file={file.filename}, "
        f"size={len(content)}, type={file.content_type}, user={user.id}"
    )

    document = DocumentService.upload_document(
        user_id=user.id,
        filename=file.filename,
        content=content,
        metadata=metadata.model_dump(mode="json", exclude={"file_url"}),
        content_type=file.content_type,
    )

    return DocumentUploadResponse(message="Upload successful", document=document)
