# =============================================================================
# tests/test_routers.py - REST Endpoint Tests
# =============================================================================
# Exercises the HTTP surface through FastAPI's TestClient:
# - authentication is required outside the /public endpoints
# - validation failures are 400 with a message naming the field
# - PUT/DELETE take the id from the query string or the body
# - every error body carries `detail` and `code`
#
# Run with: pytest tests/test_routers.py -v
# =============================================================================

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.auth import get_current_user
from app.config import settings
from app.dependencies import get_supabase_client
from app.main import app
from lib.supabase_client import SupabaseClient, SupabaseClientError

SECTIONS = ["/api/education", "/api/experience", "/api/skills", "/api/projects", "/api/documents"]


# =============================================================================
# Health & Root
# =============================================================================

class TestHealth:

    def test_health(self, anon_client):
        response = anon_client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_liveness(self, anon_client):
        assert anon_client.get("/api/health/live").json()["status"] == "alive"

    def test_root(self, anon_client):
        assert anon_client.get("/").json()["docs"] == "/docs"

    def test_ready(self, anon_client):
        backend = MagicMock()
        backend.select_rows.return_value = []
        app.dependency_overrides[get_supabase_client] = lambda: backend

        response = anon_client.get("/api/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"]["database"] == "ok"
        backend.get_client().storage.get_bucket.assert_called_with(settings.DOCUMENTS_BUCKET)

    def test_not_ready_without_bucket(self, anon_client):
        backend = MagicMock()
        backend.select_rows.return_value = []
        backend.get_client.return_value.storage.get_bucket.side_effect = Exception("Bucket not found")
        app.dependency_overrides[get_supabase_client] = lambda: backend

        response = anon_client.get("/api/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"
        assert "Bucket not found" in response.json()["checks"]["storage"]


# =============================================================================
# Authentication
# =============================================================================

class TestAuthRequired:
    """Dashboard endpoints reject anonymous callers."""

    @pytest.mark.parametrize("path", ["/api/profile", *SECTIONS])
    def test_list_requires_auth(self, anon_client, path):
        response = anon_client.get(path)

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"

    def test_upload_requires_auth(self, anon_client):
        response = anon_client.post("/api/documents/upload", data={"title": "Cert"})
        assert response.status_code == 401

    @pytest.mark.parametrize("path", ["/api/education", "/api/experience", "/api/skills", "/api/projects"])
    def test_public_lists_are_open(self, anon_client, fake_db, user_id, path):
        table = path.rsplit("/", 1)[1]
        fake_db.seed(table, profile_id=str(user_id), name="n", title="t", institution="i",
                     position="p", company="c", start_date="2020-01-01")

        response = anon_client.get(f"{path}/public")

        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_public_list_filtered_by_profile(self, anon_client, fake_db, user_id, other_user_id):
        fake_db.seed("skills", name="Mine", profile_id=str(user_id))
        fake_db.seed("skills", name="Theirs", profile_id=str(other_user_id))

        response = anon_client.get("/api/skills/public", params={"profile_id": str(user_id)})

        assert [s["name"] for s in response.json()] == ["Mine"]


# =============================================================================
# Profile
# =============================================================================

class TestProfileEndpoints:

    def test_get_before_create(self, client):
        response = client.get("/api/profile")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_create_and_get(self, client, user_id):
        response = client.post("/api/profile", json={"name": "Ada", "headline": "Programmer"})

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == str(user_id)
        assert body["email"] == "owner@example.com"

        assert client.get("/api/profile").json()["headline"] == "Programmer"

    def test_create_requires_name(self, client):
        response = client.post("/api/profile", json={"headline": "No name"})

        assert response.status_code == 400
        assert response.json()["detail"] == "name is required"
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_create_twice(self, client):
        client.post("/api/profile", json={"name": "Ada"})
        response = client.post("/api/profile", json={"name": "Ada"})

        assert response.status_code == 409

    def test_update_ignores_blank_name(self, client):
        client.post("/api/profile", json={"name": "Ada"})

        response = client.put("/api/profile", json={"name": "", "location": "London"})

        assert response.status_code == 200
        assert response.json()["name"] == "Ada"
        assert response.json()["location"] == "London"
        assert response.json()["updated_at"]

    def test_public_profile(self, anon_client, fake_db, user_id):
        fake_db.seed("profile", id=str(user_id), name="Ada")

        response = anon_client.get("/api/profile/public")

        assert response.status_code == 200
        assert response.json()["name"] == "Ada"

    def test_delete_profile(self, client, fake_db):
        client.post("/api/profile", json={"name": "Ada"})

        response = client.delete("/api/profile")

        assert response.json()["message"] == "Profile deleted successfully"
        assert fake_db.tables["profile"] == []


# =============================================================================
# Section CRUD
# =============================================================================

class TestSectionValidation:

    def test_missing_required_field(self, client):
        response = client.post("/api/education", json={"degree": "BSc", "start_date": "2019-09-01"})

        assert response.status_code == 400
        assert response.json()["detail"] == "institution is required"

    def test_blank_required_field(self, client):
        response = client.post(
            "/api/experience", json={"position": "  ", "company": "Acme", "start_date": "2021-01-01"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "position is required"

    def test_bad_date_format(self, client):
        response = client.post(
            "/api/experience", json={"position": "Dev", "company": "Acme", "start_date": "01/02/2021"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "start_date must be in YYYY-MM-DD format"

    def test_impossible_date(self, client):
        response = client.post(
            "/api/education",
            json={"institution": "UCL", "degree": "BSc", "start_date": "2019-02-30"},
        )

        assert response.json()["detail"] == "start_date must be a valid calendar date"

    def test_bad_skill_level(self, client):
        response = client.post("/api/skills", json={"name": "Python", "level": "guru"})

        assert response.status_code == 400
        assert response.json()["detail"].startswith("level")


class TestSectionCrud:

    def test_create_is_owned(self, client, fake_db, user_id):
        response = client.post("/api/skills", json={"name": "Python", "level": "expert"})

        assert response.status_code == 201
        assert response.json()["profile_id"] == str(user_id)
        assert fake_db.tables["skills"][0]["level"] == "expert"

    def test_list_only_own(self, client, fake_db, user_id, other_user_id):
        fake_db.seed("projects", title="Mine", profile_id=str(user_id))
        fake_db.seed("projects", title="Theirs", profile_id=str(other_user_id))

        response = client.get("/api/projects")

        assert [p["title"] for p in response.json()] == ["Mine"]

    def test_update_with_query_id(self, client, fake_db, user_id):
        row = fake_db.seed("skills", name="Python", profile_id=str(user_id))

        response = client.put("/api/skills", params={"id": row["id"]}, json={"category": "Languages"})

        assert response.status_code == 200
        assert response.json()["category"] == "Languages"

    def test_update_with_body_id(self, client, fake_db, user_id):
        row = fake_db.seed("projects", title="CMS", profile_id=str(user_id))

        response = client.put("/api/projects", json={"id": row["id"], "title": "Portfolio CMS"})

        assert response.status_code == 200
        assert response.json()["title"] == "Portfolio CMS"

    def test_update_without_id(self, client):
        response = client.put("/api/skills", json={"name": "Python"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing id"

    def test_update_foreign_record(self, client, fake_db, other_user_id):
        row = fake_db.seed("skills", name="Theirs", profile_id=str(other_user_id))

        response = client.put("/api/skills", params={"id": row["id"]}, json={"name": "Mine now"})

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"
        assert fake_db.tables["skills"][0]["name"] == "Theirs"

    def test_update_missing_record(self, client):
        response = client.put("/api/education", params={"id": "nope"}, json={"degree": "PhD"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Education not found"

    def test_delete_with_body_id(self, client, fake_db, user_id):
        row = fake_db.seed("experience", position="Dev", company="Acme", profile_id=str(user_id))

        response = client.request("DELETE", "/api/experience", json={"id": row["id"]})

        assert response.status_code == 200
        assert response.json() == {"message": "Experience deleted successfully", "id": row["id"]}
        assert fake_db.tables["experience"] == []

    def test_delete_with_query_id(self, client, fake_db, user_id):
        row = fake_db.seed("education", institution="UCL", profile_id=str(user_id))

        response = client.delete("/api/education", params={"id": row["id"]})

        assert response.json()["message"] == "Education record deleted successfully"

    def test_delete_without_id(self, client):
        response = client.delete("/api/projects")

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing id"

    def test_backend_failure_is_500(self, client, fake_db, monkeypatch):
        def broken(*args, **kwargs):
            raise SupabaseClientError("connection refused", code="FETCH_ROWS_FAILED")

        monkeypatch.setattr(fake_db, "select_rows", broken)

        response = client.get("/api/skills")

        assert response.status_code == 500
        assert response.json()["code"] == "FETCH_ROWS_FAILED"


# =============================================================================
# Documents
# =============================================================================

class TestDocumentUpload:

    def test_upload(self, client, fake_db, fake_storage, user_id):
        response = client.post(
            "/api/documents/upload",
            files={"file": ("cert.pdf", b"%PDF-1.4", "application/pdf")},
            data={"title": "AWS SA", "issuer": "AWS", "issue_date": "2023-06-30"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Upload successful"
        assert body["document"]["title"] == "AWS SA"
        assert body["document"]["file_url"].endswith("_cert.pdf")
        assert fake_storage.upload_file.call_args.args[2] == "application/pdf"

    def test_upload_requires_title(self, client, fake_storage):
        response = client.post(
            "/api/documents/upload",
            files={"file": ("cert.pdf", b"data", "application/pdf")},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "File and title are required"
        fake_storage.upload_file.assert_not_called()

    def test_upload_requires_file(self, client, fake_storage):
        response = client.post("/api/documents/upload", data={"title": "Cert"})

        assert response.status_code == 400
        assert response.json()["detail"] == "File and title are required"

    def test_upload_bad_issue_date(self, client, fake_storage):
        response = client.post(
            "/api/documents/upload",
            files={"file": ("cert.pdf", b"data", "application/pdf")},
            data={"title": "Cert", "issue_date": "June 2023"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "issue_date must be in YYYY-MM-DD format"

    def test_upload_too_large(self, client, fake_storage, monkeypatch):
        monkeypatch.setattr(settings, "MAX_DOCUMENT_SIZE_MB", 1)

        response = client.post(
            "/api/documents/upload",
            files={"file": ("big.pdf", b"x" * (1024 * 1024 + 1), "application/pdf")},
            data={"title": "Big"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "FILE_TOO_LARGE"
        fake_storage.upload_file.assert_not_called()

    def test_upload_insert_failure(self, client, fake_db, fake_storage):
        fake_db.insert_error = SupabaseClientError("insert exploded")

        response = client.post(
            "/api/documents/upload",
            files={"file": ("cert.pdf", b"data", "application/pdf")},
            data={"title": "Cert"},
        )

        assert response.status_code == 500
        assert response.json()["code"] == "DATABASE_ERROR"
        fake_storage.delete_file.assert_called_once()

    def test_delete_removes_file(self, client, fake_db, fake_storage, user_id):
        url = (
            f"{settings.SUPABASE_URL}/storage/v1/object/public/"
            f"{settings.DOCUMENTS_BUCKET}/{user_id}/1_cert.pdf"
        )
        row = fake_db.seed("documents", title="Cert", file_url=url, profile_id=str(user_id))

        response = client.request("DELETE", "/api/documents", json={"id": row["id"]})

        assert response.status_code == 200
        assert response.json()["message"] == "Document deleted successfully"
        fake_storage.delete_file.assert_called_once_with(f"{user_id}/1_cert.pdf")

    def test_metadata_only_create(self, client, fake_storage):
        response = client.post(
            "/api/documents",
            json={"title": "Hosted elsewhere", "file_url": "https://example.com/cert.pdf"},
        )

        assert response.status_code == 201
        assert response.json()["file_url"] == "https://example.com/cert.pdf"
        fake_storage.upload_file.assert_not_called()


# =============================================================================
# Malformed ids
# =============================================================================

@pytest.fixture
def uuid_rejecting_db(monkeypatch):
    """Real wrapper over a client whose queries fail like Postgres does on a bad uuid."""
    query = MagicMock()
    for method in ("select", "eq", "order", "limit", "maybe_single", "delete"):
        getattr(query, method).return_value = query
    query.execute.side_effect = Exception(
        "{'code': '22P02', 'message': 'invalid input syntax for type uuid: \"abc\"'}"
    )
    supabase = MagicMock()
    supabase.table.return_value = query
    monkeypatch.setattr(SupabaseClient, "_instance", supabase)
    return query


@pytest.fixture
def real_db_client(uuid_rejecting_db, auth_user):
    app.dependency_overrides[get_current_user] = lambda: auth_user
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestMalformedIds:

    def test_delete_document_with_bad_id(self, real_db_client, fake_storage):
        response = real_db_client.delete("/api/documents", params={"id": "abc"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Document not found"
        assert "22P02" not in response.text
        fake_storage.delete_file.assert_not_called()

    def test_update_skill_with_bad_id(self, real_db_client):
        response = real_db_client.put("/api/skills", params={"id": "abc"}, json={"name": "Go"})

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_public_profile_with_bad_id(self, real_db_client):
        response = real_db_client.get("/api/profile/public", params={"id": "abc"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Profile not found"
        assert "invalid input syntax" not in response.text

    def test_public_section_with_bad_profile_id(self, real_db_client):
        response = real_db_client.get("/api/skills/public", params={"profile_id": "abc"})

        assert response.status_code == 200
        assert response.json() == []
