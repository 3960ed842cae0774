# =============================================================================
# core/models/document.py - Document Schemas
# =============================================================================
# Certificates, diplomas and other files shown in the portfolio.
# The file itself lives in Supabase Storage; the row keeps its public URL.
# =============================================================================

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .common import OptionalDate, OptionalText, RecordUpdate, RequiredText


class DocumentCreate(BaseModel):
    """
    Schema for document metadata.

    Used directly by POST /documents (metadata only, file_url supplied by the
    client) and by the upload flow after the file is stored.

    Example:
        {
            "title": "AWS Solutions Architect",
            "issuer": "Amazon Web Services",
            "category": "certificate",
            "issue_date": "2023-06-30"
        }
    """

    model_config = ConfigDict(extra="ignore")

    title: RequiredText = Field(..., max_length=255)
    issuer: OptionalText = None
    category: OptionalText = None
    issue_date: OptionalDate = Field(default=None, description="YYYY-MM-DD")
    description: OptionalText = None
    file_url: OptionalText = Field(default=None, description="Public URL of the stored file")


class DocumentUpdate(RecordUpdate):
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("title",)

    title: OptionalText = None
    issuer: OptionalText = None
    category: OptionalText = None
    issue_date: OptionalDate = None
    description: OptionalText = None
    file_url: OptionalText = None


class DocumentResponse(BaseModel):
    id: str
    profile_id: str | None = None
    title: str
    issuer: str | None = None
    category: str | None = None
    issue_date: str | None = None
    description: str | None = None
    file_url: str | None = None
    created_at: str | None = None


class DocumentUploadResponse(BaseModel):
    """Returned by POST /documents/upload."""
    message: str = "Upload successful"
    document: DocumentResponse
