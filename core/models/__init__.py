# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: Shared field types (dates, blank handling, partial updates)
# - profile.py: The owner's profile
# - education.py, experience.py, skill.py, project.py: Portfolio sections
# - document.py: Uploaded documents and their metadata
#
# These models define the "contract" between API and clients.
# =============================================================================

from .common import RecordUpdate, check_date_format
from .document import (
    DocumentCreate,
    DocumentResponse,
    DocumentUpdate,
    DocumentUploadResponse,
)
from .education import EducationCreate, EducationResponse, EducationUpdate
from .experience import ExperienceCreate, ExperienceResponse, ExperienceUpdate
from .profile import ProfileCreate, ProfileResponse, ProfileUpdate
from .project import ProjectCreate, ProjectResponse, ProjectUpdate
from .skill import SkillCreate, SkillLevel, SkillResponse, SkillUpdate

__all__ = [
    # Common
    "RecordUpdate",
    "check_date_format",
    # Profile
    "ProfileCreate",
    "ProfileResponse",
    "ProfileUpdate",
    # Education
    "EducationCreate",
    "EducationResponse",
    "EducationUpdate",
    # Experience
    "ExperienceCreate",
    "ExperienceResponse",
    "ExperienceUpdate",
    # Skills
    "SkillCreate",
    "SkillLevel",
    "SkillResponse",
    "SkillUpdate",
    # Projects
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    # Documents
    "DocumentCreate",
    "DocumentResponse",
    "DocumentUpdate",
    "DocumentUploadResponse",
]
