# =============================================================================
# core/models/project.py - Project Schemas
# =============================================================================
# Portfolio projects: what was built, with which technologies, and where
# to see it (repository / live demo / thumbnail).
# =============================================================================

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .common import OptionalDate, OptionalText, RecordUpdate, RequiredText


class ProjectCreate(BaseModel):
    """
    Schema for adding a project.

    Example:
        {
            "title": "Portfolio CMS",
            "technologies": ["FastAPI", "Supabase"],
            "repo_url": "https://github.com/me/portfolio"
        }
    """

    model_config = ConfigDict(extra="ignore")

    title: RequiredText = Field(..., max_length=255)
    description: OptionalText = None

    technologies: list[str] | None = Field(
        default=None,
        description="Technologies used, e.g. ['Python', 'PostgreSQL']"
    )

    repo_url: OptionalText = None
    live_url: OptionalText = None
    thumbnail_url: OptionalText = None

    start_date: OptionalDate = None
    end_date: OptionalDate = None


class ProjectUpdate(RecordUpdate):
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("title",)

    title: OptionalText = None
    description: OptionalText = None
    technologies: list[str] | None = None
    repo_url: OptionalText = None
    live_url: OptionalText = None
    thumbnail_url: OptionalText = None
    start_date: OptionalDate = None
    end_date: OptionalDate = None


class ProjectResponse(BaseModel):
    id: str
    profile_id: str | None = None
    title: str
    description: str | None = None
    technologies: list[str] | None = None
    repo_url: str | None = None
    live_url: str | None = None
    thumbnail_url: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    created_at: str | None = None
