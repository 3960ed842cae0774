# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides generic table helpers used by every record service:
# - select_rows / fetch_row for reads
# - insert_row / update_rows / delete_rows for writes
# - exchange_code_for_session / refresh_session for the auth routes
#
# Ownership is enforced by the callers through equality filters; the
# service-role key used here bypasses Row Level Security.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   rows = SupabaseClient.select_rows("skills", {"profile_id": user_id})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import Client, ClientOptions, create_client

from app.config import settings
from lib.utils import ApplicationError, normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST / Postgres error codes
NO_ROWS = "PGRST116"
INVALID_TEXT_REPRESENTATION = "22P02"  # e.g. invalid input syntax for type uuid


class SupabaseClientError(ApplicationError):
    """Error during Supabase operations."""

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        # Everything a profile owns in one table
        skills = SupabaseClient.select_rows(
            "skills",
            filters={"profile_id": "550e8400-..."},
            order_by="created_at",
        )

        # A single row, or None
        profile = SupabaseClient.fetch_row("profile", {"id": user_id})
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _apply_filters(cls, query: Any, filters: dict[str, Any] | None) -> Any:
        """Chain one .eq() per filter column."""
        for column, value in (filters or {}).items():
            query = query.eq(column, normalize_uuid(value))
        return query

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def select_rows(
        cls,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        desc: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows from a table.

        Args:
            table: Table name
            filters: Column -> value equality filters
            order_by: Column to sort on (optional)
            desc: Sort descending (default: True, newest first)
            limit: Maximum number of rows (optional)

        Returns:
            List of row dicts (empty if nothing matches)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).select("*"), filters)
            if order_by:
                query = query.order(order_by, desc=desc)
            if limit:
                query = query.limit(limit)

            response = query.execute()
            rows = response.data or []

            logger.debug(f"Fetched {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            if INVALID_TEXT_REPRESENTATION in str(e):
                logger.debug(f"Malformed filter value for {table}, no rows match: {filters}")
                return []
            raise SupabaseClientError(
                message=f"Failed to fetch {table}: {e}",
                code="FETCH_ROWS_FAILED",
                details={"table": table}
            )

    @classmethod
    def fetch_row(
        cls,
        table: str,
        filters: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Fetch a single row matching the filters.

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).select("*"), filters)
            response = query.limit(1).maybe_single().execute()

            # Older postgrest clients return None instead of an empty response
            if response is None:
                return None
            return response.data

        except Exception as e:
            # No row, or an id that isn't a valid uuid: either way not found
            if NO_ROWS in str(e) or INVALID_TEXT_REPRESENTATION in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_ROW_FAILED",
                details={"table": table}
            )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return it with generated id and created_at.

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(data).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table}
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table}
            )

    @classmethod
    def update_rows(
        cls,
        table: str,
        data: dict[str, Any],
        filters: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """
        Update the rows matching the filters.

        Returns:
            The updated rows (empty if nothing matched)

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).update(data), filters)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table}
            )

    @classmethod
    def delete_rows(
        cls,
        table: str,
        filters: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """
        Delete the rows matching the filters.

        Returns:
            The deleted rows

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).delete(), filters)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table}
            )

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------
    # Sign-in calls run on a fresh anon-key client. A successful sign-in makes
    # supabase-py swap the client's Authorization header for the user's token,
    # which must never happen to the shared service-role singleton.

    @classmethod
    def _auth_client(cls) -> Client:
        """Throwaway anon-key client with no stored or refreshed session."""
        try:
            return create_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_ANON_KEY,
                options=ClientOptions(persist_session=False, auto_refresh_token=False),
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase auth client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )

    @staticmethod
    def _session_dict(response: Any, code: str) -> dict[str, Any]:
        session = getattr(response, "session", None)
        if session is None:
            raise SupabaseClientError(
                message="Auth provider returned no session",
                code=code,
            )
        return {
            "access_token": session.access_token,
            "refresh_token": session.refresh_token,
            "expires_in": session.expires_in,
        }

    @classmethod
    def exchange_code_for_session(
        cls,
        auth_code: str,
        code_verifier: str | None = None,
    ) -> dict[str, Any]:
        """
        Exchange an OAuth/PKCE code for a session with Supabase Auth.

        Returns:
            Dict with access_token, refresh_token, expires_in

        Raises:
            SupabaseClientError: If the provider rejects the code
        """
        client = cls._auth_client()

        try:
            response = client.auth.exchange_code_for_session({
                "auth_code": auth_code,
                "code_verifier": code_verifier or "",
                "redirect_to": f"{settings.SITE_URL.rstrip('/')}/dashboard",
            })
        except Exception as e:
            raise SupabaseClientError(
                message=str(e),
                code="CODE_EXCHANGE_FAILED",
                suggestion="Restart the login flow to get a fresh code",
            )

        return cls._session_dict(response, "CODE_EXCHANGE_FAILED")

    @classmethod
    def refresh_session(cls, refresh_token: str) -> dict[str, Any]:
        """
        Trade a refresh token for a new session.

        Returns:
            Dict with access_token, refresh_token (rotated), expires_in

        Raises:
            SupabaseClientError: If the refresh token is invalid or revoked
        """
        client = cls._auth_client()

        try:
            response = client.auth.refresh_session(refresh_token)
        except Exception as e:
            raise SupabaseClientError(
                message=str(e),
                code="SESSION_REFRESH_FAILED",
                suggestion="Log in again",
            )

        return cls._session_dict(response, "SESSION_REFRESH_FAILED")
