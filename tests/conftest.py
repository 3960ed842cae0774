# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Swaps the Supabase wrapper for an in-memory table store
# - Provides API clients with and without an authenticated user
# =============================================================================

import os
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock
from uuid import uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.auth import AuthUser, get_current_user
from app.config import settings
from app.main import app
from core.services.storage_service import StorageService


# =============================================================================
# In-memory Supabase
# =============================================================================

class FakeSupabase:
    """
    Table store with the same helper surface as lib.supabase_client.SupabaseClient.

    Set `insert_error` to make the next inserts raise.
    """

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.insert_error: Exception | None = None

    @staticmethod
    def _matches(row: dict[str, Any], filters: dict[str, Any] | None) -> bool:
        return all(str(row.get(k)) == str(v) for k, v in (filters or {}).items())

    def seed(self, table: str, **row: Any) -> dict[str, Any]:
        """Insert a row directly, bypassing insert_error."""
        record = {
            "id": str(uuid4()),
            "created_at": datetime.now(timezone.utc).isoformat(),
            **row,
        }
        self.tables[table].append(record)
        return dict(record)

    def select_rows(self, table, filters=None, order_by=None, desc=True, limit=None):
        rows = [dict(r) for r in self.tables[table] if self._matches(r, filters)]
        if order_by:
            rows.sort(key=lambda r: r.get(order_by) or "", reverse=desc)
        if limit:
            rows = rows[:limit]
        return rows

    def fetch_row(self, table, filters):
        rows = self.select_rows(table, filters)
        return rows[0] if rows else None

    def insert_row(self, table, data):
        if self.insert_error:
            raise self.insert_error
        return self.seed(table, **data)

    def update_rows(self, table, data, filters):
        updated = []
        for row in self.tables[table]:
            if self._matches(row, filters):
                row.update(data)
                updated.append(dict(row))
        return updated

    def delete_rows(self, table, filters):
        kept, deleted = [], []
        for row in self.tables[table]:
            (deleted if self._matches(row, filters) else kept).append(row)
        self.tables[table] = kept
        return deleted

    def exchange_code_for_session(self, auth_code, code_verifier=None):
        return {"access_token": f"token-for-{auth_code}", "refresh_token": "refresh", "expires_in": 3600}

    def refresh_session(self, refresh_token):
        return {"access_token": "renewed", "refresh_token": f"{refresh_token}-next", "expires_in": 3600}


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db(monkeypatch):
    """In-memory tables wired into every module that talks to Supabase."""
    db = FakeSupabase()
    for target in (
        "core.services.record_service.SupabaseClient",
        "core.services.profile_service.SupabaseClient",
        "core.services.document_service.SupabaseClient",
        "app.auth.routes.SupabaseClient",
    ):
        monkeypatch.setattr(target, db)
    return db


@pytest.fixture
def fake_storage(monkeypatch):
    """
    Replace the storage calls with mocks.

    Public URLs follow the real Supabase shape so path derivation works.
    """
    base = f"{settings.SUPABASE_URL}/storage/v1/object/public/{settings.DOCUMENTS_BUCKET}"
    storage = MagicMock()
    storage.upload_file.side_effect = lambda path, content, content_type=None: path
    storage.get_public_url.side_effect = lambda path: f"{base}/{path}"
    storage.delete_file.return_value = True

    monkeypatch.setattr(StorageService, "upload_file", storage.upload_file)
    monkeypatch.setattr(StorageService, "get_public_url", storage.get_public_url)
    monkeypatch.setattr(StorageService, "delete_file", storage.delete_file)
    return storage


@pytest.fixture
def user_id():
    return uuid4()


@pytest.fixture
def other_user_id():
    return uuid4()


@pytest.fixture
def auth_user(user_id):
    return AuthUser(id=user_id, email="owner@example.com")


@pytest.fixture
def client(fake_db, auth_user):
    """API client authenticated as `auth_user`."""
    app.dependency_overrides[get_current_user] = lambda: auth_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client(fake_db):
    """API client without credentials."""
    app.dependency_overrides.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()
