# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .record_service import (
    RecordService,
    EducationService,
    ExperienceService,
    SkillService,
    ProjectService,
)
from .profile_service import ProfileService
from .storage_service import StorageService
from .document_service import DocumentService, build_storage_path

__all__ = [
    "RecordService",
    "EducationService",
    "ExperienceService",
    "SkillService",
    "ProjectService",
    "ProfileService",
    "StorageService",
    "DocumentService",
    "build_storage_path",
]
