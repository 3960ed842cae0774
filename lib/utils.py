# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from typing import Any
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        profile_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        profile_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Text Utilities
# =============================================================================

def blank_to_none(value: Any) -> Any:
    """Map blank or whitespace-only strings to None, pass everything else through."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def storage_path_from_public_url(file_url: str, bucket: str) -> str:
    """
    Recover the object key from a Supabase Storage public URL.

    Public URLs look like:
        https://<ref>.supabase.co/storage/v1/object/public/<bucket>/<user_id>/<file>

    Falls back to the last two path segments (``<user_id>/<file>``) when the
    URL doesn't follow that shape.
    """
    marker = f"/storage/v1/object/public/{bucket}/"
    if marker in file_url:
        return file_url.split(marker, 1)[1]
    return "/".join(file_url.rstrip("/").split("/")[-2:])


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        result: dict[str, Any] = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result
