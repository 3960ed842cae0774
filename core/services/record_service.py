# =============================================================================
# core/services/record_service.py - Owned Record Business Logic
# =============================================================================
# Every portfolio section (education, experience, skills, projects,
# documents) is a flat table of rows owned by a profile. RecordService
# implements that lifecycle once; subclasses only name the table.
#
# Ownership is an equality filter: profile_id must equal the caller's
# user id. Writes always filter on both id and profile_id.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from app.exceptions import ForbiddenError, RecordNotFoundError

logger = logging.getLogger(__name__)


class RecordService:
    """
    Base service for tables of profile-owned rows.

    Subclasses set:
        TABLE: Supabase table name
        RESOURCE: Human-readable name used in messages ("Skill")
        ORDER_BY: Column lists are sorted on, newest first
    """

    TABLE: str = ""
    RESOURCE: str = "Record"
    ORDER_BY: str = "created_at"
    OWNER_COLUMN: str = "profile_id"

    @classmethod
    def list_records(
        cls,
        profile_id: UUID | str | None = None,
    ) -> list[dict[str, Any]]:
        """
        List rows, newest first.

        Args:
            profile_id: Only return rows owned by this profile (optional)

        Returns:
            List of row dicts
        """
        filters = {cls.OWNER_COLUMN: profile_id} if profile_id else None
        return SupabaseClient.select_rows(
            cls.TABLE,
            filters=filters,
            order_by=cls.ORDER_BY,
            desc=True,
        )

    @classmethod
    def get_owned_record(
        cls,
        record_id: str,
        user_id: UUID | str,
    ) -> dict[str, Any]:
        """
        Fetch a row and verify the caller owns it.

        Raises:
            RecordNotFoundError: If the row doesn't exist
            ForbiddenError: If the row belongs to another profile
        """
        record = SupabaseClient.fetch_row(cls.TABLE, {"id": record_id})

        if not record:
            raise RecordNotFoundError(cls.RESOURCE, record_id)

        if str(record.get(cls.OWNER_COLUMN)) != normalize_uuid(user_id):
            logger.warning(f"User {user_id} tried to access {cls.TABLE} {record_id} they don't own")
            raise ForbiddenError(cls.RESOURCE, record_id)

        return record

    @classmethod
    def create_record(
        cls,
        user_id: UUID | str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Insert a row owned by the caller.

        The owner column always comes from the session, never from `data`.
        """
        row = {**data, cls.OWNER_COLUMN: normalize_uuid(user_id)}
        record = SupabaseClient.insert_row(cls.TABLE, row)
        logger.info(f"Created {cls.TABLE} {record.get('id')} for user: {user_id}")
        return record

    @classmethod
    def update_record(
        cls,
        record_id: str,
        user_id: UUID | str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Update a row the caller owns.

        Returns:
            Updated row dict (unchanged row if `data` is empty)

        Raises:
            RecordNotFoundError: If the row doesn't exist
            ForbiddenError: If the row belongs to another profile
        """
        record = cls.get_owned_record(record_id, user_id)

        # Never let a client move a row to another owner
        data = {k: v for k, v in data.items() if k not in ("id", cls.OWNER_COLUMN)}
        if not data:
            return record

        rows = SupabaseClient.update_rows(
            cls.TABLE,
            data,
            {"id": record_id, cls.OWNER_COLUMN: user_id},
        )

        if not rows:
            # Deleted between the ownership check and the update
            raise RecordNotFoundError(cls.RESOURCE, record_id)

        logger.info(f"Updated {cls.TABLE} {record_id}")
        return rows[0]

    @classmethod
    def delete_record(
        cls,
        record_id: str,
        user_id: UUID | str,
    ) -> dict[str, Any]:
        """
        Delete a row the caller owns.

        Returns:
            The row as it was before deletion

        Raises:
            RecordNotFoundError: If the row doesn't exist
            ForbiddenError: If the row belongs to another profile
        """
        record = cls.get_owned_record(record_id, user_id)

        SupabaseClient.delete_rows(
            cls.TABLE,
            {"id": record_id, cls.OWNER_COLUMN: user_id},
        )

        logger.info(f"Deleted {cls.TABLE} {record_id}")
        return record


# =============================================================================
# Portfolio Sections
# =============================================================================

class EducationService(RecordService):
    TABLE = "education"
    RESOURCE = "Education"
    ORDER_BY = "start_date"


class ExperienceService(RecordService):
    TABLE = "experience"
    RESOURCE = "Experience"
    ORDER_BY = "start_date"


class SkillService(RecordService):
    TABLE = "skills"
    RESOURCE = "Skill"


class ProjectService(RecordService):
    TABLE = "projects"
    RESOURCE = "Project"
