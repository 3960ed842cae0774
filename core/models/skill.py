# =============================================================================
# core/models/skill.py - Skill Schemas
# =============================================================================

from enum import Enum
from typing import Annotated, ClassVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from lib.utils import blank_to_none

from .common import OptionalText, RecordUpdate, RequiredText


class SkillLevel(str, Enum):
    """Self-assessed proficiency."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"


OptionalLevel = Annotated[SkillLevel | None, BeforeValidator(blank_to_none)]


class SkillCreate(BaseModel):
    """
    Schema for adding a skill.

    Example:
        {"name": "Python", "level": "expert", "category": "Languages"}
    """

    model_config = ConfigDict(extra="ignore")

    name: RequiredText = Field(..., max_length=100)
    level: OptionalLevel = Field(default=None, description="beginner, intermediate or expert")
    category: OptionalText = None
    icon_url: OptionalText = None


class SkillUpdate(RecordUpdate):
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("name",)

    name: OptionalText = None
    level: OptionalLevel = None
    category: OptionalText = None
    icon_url: OptionalText = None


class SkillResponse(BaseModel):
    id: str
    profile_id: str | None = None
    name: str
    level: SkillLevel | None = None
    category: str | None = None
    icon_url: str | None = None
    created_at: str | None = None
