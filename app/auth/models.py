# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None


class MeResponse(BaseModel):
    """
    Response for GET /auth/me.

    `profile` is the user's portfolio profile row, or None if they
    haven't created one yet.
    """
    id: UUID
    email: Optional[str] = None
    profile: Optional[dict[str, Any]] = None
