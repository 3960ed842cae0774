# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error reaches the client as JSON: {"detail", "code", ...}.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.utils import ApplicationError


class PortfolioException(Exception):
    """
    Base exception for the Portfolio API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "PORTFOLIO_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class MissingFieldError(PortfolioException):
    """Raised when a required field or identifier is absent."""

    def __init__(self, field: str, message: str | None = None):
        super().__init__(
            message=message or f"{field} is required",
            code="MISSING_FIELD",
            status_code=400,
            details={"field": field}
        )


class InvalidFieldError(PortfolioException):
    """Raised when a field is present but malformed."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=message,
            code="INVALID_FIELD",
            status_code=400,
            details={"field": field}
        )


# =============================================================================
# Record Exceptions
# =============================================================================

class RecordNotFoundError(PortfolioException):
    """Raised when a record ID doesn't exist."""

    def __init__(self, resource: str, record_id: str | None = None):
        super().__init__(
            message=f"{resource} not found",
            code="NOT_FOUND",
            status_code=404,
            suggestion="Check that the id is correct",
            details={"id": record_id} if record_id else None
        )


class ForbiddenError(PortfolioException):
    """Raised when the record belongs to another profile."""

    def __init__(self, resource: str, record_id: str):
        super().__init__(
            message=f"Forbidden: you don't own this {resource.lower()}",
            code="FORBIDDEN",
            status_code=403,
            details={"id": record_id}
        )


class ProfileExistsError(PortfolioException):
    """Raised when creating a second profile for the same user."""

    def __init__(self, profile_id: str):
        super().__init__(
            message="Profile already exists. Use PUT to update.",
            code="PROFILE_EXISTS",
            status_code=409,
            suggestion="Send PUT /api/profile to change the existing profile",
            details={"id": profile_id}
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class FileTooLargeError(PortfolioException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=400,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": round(size_mb, 2), "max_mb": max_mb}
        )


class StorageUploadError(PortfolioException):
    """Raised when file upload to storage fails."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Upload failed: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error}
        )


class DatabaseError(PortfolioException):
    """Raised when a database write fails after side effects were attempted."""

    def __init__(self, message: str, error: str):
        super().__init__(
            message=f"{message}: {error}",
            code="DATABASE_ERROR",
            status_code=500,
            details={"error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def portfolio_exception_handler(
    request: Request,
    exc: PortfolioException
) -> JSONResponse:
    """Convert PortfolioException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError
) -> JSONResponse:
    """Backend (Supabase) failures surface as 500."""
    return JSONResponse(
        status_code=500,
        content=exc.to_dict()
    )


def _describe_validation_error(error: dict[str, Any]) -> str:
    """Turn one pydantic error into a message naming the field."""
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
    field = loc[-1] if loc else "request"
    error_type = error.get("type", "")

    if error_type in ("missing", "string_too_short"):
        return f"{field} is required"

    message = error.get("msg", "Invalid value")
    if message.startswith("Value error, "):
        return f"{field} {message[len('Value error, '):]}"
    return f"{field}: {message}"


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Returns 400 with the first problem spelled out in `detail`
    and the full list under `errors`.
    """
    errors = exc.errors()
    detail = _describe_validation_error(errors[0]) if errors else "Invalid request body"
    return JSONResponse(
        status_code=400,
        content={
            "detail": detail,
            "code": "VALIDATION_ERROR",
            "errors": [_describe_validation_error(e) for e in errors],
        }
    )
