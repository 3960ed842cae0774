# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by resource:
# - health.py: Health check endpoints
# - profile.py: The owner's profile (+ public view)
# - education.py, experience.py, skills.py, projects.py: Portfolio sections
# - documents.py: Document metadata and file upload
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import profile
from . import education
from . import experience
from . import skills
from . import projects
from . import documents

__all__ = [
    "health",
    "profile",
    "education",
    "experience",
    "skills",
    "projects",
    "documents",
]
