# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# /health        - process is up, reports environment and version
# /health/live   - liveness probe
# /health/ready  - profile table reachable, documents bucket present and a
#                  way to verify tokens configured; 503 otherwise
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from app.config import settings
from app.dependencies import SupabaseDep

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    version: str


class ReadinessChecks(BaseModel):
    """One entry per backend dependency: "ok" or the failure reason."""
    database: str = "unknown"
    storage: str = "unknown"
    auth: str = "unknown"


class ReadinessResponse(BaseModel):
    status: str
    checks: ReadinessChecks
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _reason(e: Exception) -> str:
    return f"failed: {str(e)[:80]}"


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic status for load balancers and monitoring."""
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/live")
async def liveness_check():
    return {"status": "alive", "timestamp": _now()}


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness_check(supabase: SupabaseDep, response: Response):
    """
    Check everything a dashboard request needs.

    - database: the profile table answers a one-row select
    - storage: the documents bucket exists
    - auth: "ok" with an HS256 secret, "jwks" when only ES256 keys can be
      used (informational, doesn't affect readiness)
    """
    checks = ReadinessChecks()

    try:
        supabase.select_rows("profile", limit=1)
        checks.database = "ok"
    except Exception as e:
        logger.error(f"Readiness: database check failed: {e}")
        checks.database = _reason(e)

    try:
        supabase.get_client().storage.get_bucket(settings.DOCUMENTS_BUCKET)
        checks.storage = "ok"
    except Exception as e:
        logger.error(f"Readiness: bucket '{settings.DOCUMENTS_BUCKET}' unavailable: {e}")
        checks.storage = _reason(e)

    # Without a secret, tokens can still be verified through JWKS (ES256)
    checks.auth = "ok" if settings.SUPABASE_JWT_SECRET else "jwks"
    ready = checks.database == "ok" and checks.storage == "ok"

    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status="ready" if ready else "degraded",
        checks=checks,
        timestamp=_now(),
    )
