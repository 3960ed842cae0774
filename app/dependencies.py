# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection and request helpers shared by the routers.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Query
from pydantic import BaseModel, ConfigDict

from app.auth import AuthUser, get_current_user
from app.exceptions import MissingFieldError
from lib.supabase_client import SupabaseClient


def get_supabase_client() -> type[SupabaseClient]:
    """
    Get Supabase client instance.

    Returns the singleton client wrapper.
    """
    return SupabaseClient


# Type aliases for dependency injection
SupabaseDep = Annotated[type[SupabaseClient], Depends(get_supabase_client)]
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]

# PUT/DELETE accept the record id as ?id=... or as {"id": ...} in the body
RecordIdQuery = Annotated[str | None, Query(description="Record id (alternatively sent as `id` in the body)")]


class IdPayload(BaseModel):
    """Optional JSON body carrying the record id for DELETE."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None


def resolve_record_id(query_id: str | None, body_id: str | None) -> str:
    """
    Pick the record id from the query string, falling back to the body.

    Raises:
        MissingFieldError: If neither carries an id
    """
    record_id = (query_id or body_id or "").strip()
    if not record_id:
        raise MissingFieldError("id", "Missing id")
    return record_id
