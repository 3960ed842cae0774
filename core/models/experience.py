# =============================================================================
# core/models/experience.py - Experience Schemas
# =============================================================================
# Work history entries. An experience with end_date = null is current
# ("Present"). Dates are validated as YYYY-MM-DD on the way in.
# =============================================================================

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .common import OptionalDate, OptionalText, RecordUpdate, RequiredDate, RequiredText


class ExperienceCreate(BaseModel):
    """
    Schema for adding a job to the work history.

    `position`, `company` and `start_date` are required.

    Example:
        {
            "position": "Backend Engineer",
            "company": "Acme",
            "start_date": "2021-03-01",
            "end_date": "",
            "location": "Remote"
        }
    """

    model_config = ConfigDict(extra="ignore")

    position: RequiredText = Field(..., max_length=255)
    company: RequiredText = Field(..., max_length=255)

    start_date: RequiredDate = Field(..., description="YYYY-MM-DD")

    # Blank or missing means the job is ongoing
    end_date: OptionalDate = Field(default=None, description="YYYY-MM-DD, null for Present")

    location: OptionalText = None
    description: OptionalText = None


class ExperienceUpdate(RecordUpdate):
    """
    Partial update of an experience.

    Sending `end_date` as null or "" marks the job as current.
    """

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("position", "company", "start_date")

    position: OptionalText = None
    company: OptionalText = None
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    location: OptionalText = None
    description: OptionalText = None


class ExperienceResponse(BaseModel):
    id: str
    profile_id: str | None = None
    position: str
    company: str
    start_date: str | None = None
    end_date: str | None = None
    location: str | None = None
    description: str | None = None
    created_at: str | None = None
