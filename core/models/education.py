# =============================================================================
# core/models/education.py - Education Schemas
# =============================================================================

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .common import OptionalDate, OptionalText, RecordUpdate, RequiredDate, RequiredText


class EducationCreate(BaseModel):
    """
    Schema for adding an education record.

    Example:
        {
            "institution": "University of London",
            "degree": "BSc",
            "field_of_study": "Mathematics",
            "start_date": "2019-09-01",
            "end_date": null
        }
    """

    model_config = ConfigDict(extra="ignore")

    institution: RequiredText = Field(..., max_length=255)
    degree: RequiredText = Field(..., max_length=255)
    field_of_study: OptionalText = None

    start_date: RequiredDate = Field(..., description="YYYY-MM-DD")

    # Null while still studying
    end_date: OptionalDate = Field(default=None, description="YYYY-MM-DD, null if ongoing")

    description: OptionalText = None


class EducationUpdate(RecordUpdate):
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("institution", "degree", "start_date")

    institution: OptionalText = None
    degree: OptionalText = None
    field_of_study: OptionalText = None
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    description: OptionalText = None


class EducationResponse(BaseModel):
    id: str
    profile_id: str | None = None
    institution: str
    degree: str | None = None
    field_of_study: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None
    created_at: str | None = None
