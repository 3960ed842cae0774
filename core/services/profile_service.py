# =============================================================================
# core/services/profile_service.py - Profile Business Logic
# =============================================================================
# The profile row is keyed by the auth user id itself (one per user),
# so it doesn't fit the profile_id-owned RecordService shape.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from app.exceptions import ProfileExistsError, RecordNotFoundError

logger = logging.getLogger(__name__)

TABLE = "profile"


class ProfileService:
    """
    Service for profile operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def get_profile(user_id: UUID | str) -> dict[str, Any]:
        """
        Get the caller's profile.

        Raises:
            RecordNotFoundError: If the user hasn't created a profile yet
        """
        profile = SupabaseClient.fetch_row(TABLE, {"id": user_id})

        if not profile:
            raise RecordNotFoundError("Profile")

        return profile

    @staticmethod
    def get_public_profile(profile_id: str | None = None) -> dict[str, Any]:
        """
        Get the profile shown on the public site.

        Args:
            profile_id: Specific profile to show. When omitted, the first
                profile is returned (single-user portfolio).

        Raises:
            RecordNotFoundError: If no matching profile exists
        """
        if profile_id:
            profile = SupabaseClient.fetch_row(TABLE, {"id": profile_id})
        else:
            rows = SupabaseClient.select_rows(TABLE, limit=1)
            profile = rows[0] if rows else None

        if not profile:
            raise RecordNotFoundError("Profile", profile_id)

        return profile

    @staticmethod
    def create_profile(
        user_id: UUID | str,
        data: dict[str, Any],
        auth_email: str | None = None,
    ) -> dict[str, Any]:
        """
        Create the caller's profile.

        Args:
            user_id: Auth user id (becomes the profile id)
            data: Validated profile fields
            auth_email: Used when `data` has no email

        Raises:
            ProfileExistsError: If the user already has a profile
        """
        user_id_str = normalize_uuid(user_id)

        if SupabaseClient.fetch_row(TABLE, {"id": user_id_str}):
            raise ProfileExistsError(user_id_str)

        row = {**data, "id": user_id_str}
        if not row.get("email"):
            row["email"] = auth_email

        profile = SupabaseClient.insert_row(TABLE, row)
        logger.info(f"Created profile: {profile.get('id')}")
        return profile

    @staticmethod
    def update_profile(
        user_id: UUID | str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Partially update the caller's profile.

        Always stamps updated_at, even when no other field changes.

        Raises:
            RecordNotFoundError: If the user has no profile
        """
        update_data = {k: v for k, v in data.items() if k != "id"}
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

        rows = SupabaseClient.update_rows(TABLE, update_data, {"id": user_id})

        if not rows:
            raise RecordNotFoundError("Profile")

        logger.info(f"Updated profile: {user_id}")
        return rows[0]

    @staticmethod
    def delete_profile(user_id: UUID | str) -> None:
        """Delete the caller's profile (no-op if there is none)."""
        SupabaseClient.delete_rows(TABLE, {"id": user_id})
        logger.info(f"Deleted profile: {user_id}")
