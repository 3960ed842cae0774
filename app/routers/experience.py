# =============================================================================
# app/routers/experience.py - Work Experience Endpoints
# =============================================================================
# Dashboard endpoints act on the caller's own records only.
# GET /public serves the visitor-facing site without authentication.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Query

from app.dependencies import CurrentUser, IdPayload, RecordIdQuery, resolve_record_id
from core.models.experience import ExperienceCreate, ExperienceResponse, ExperienceUpdate
from core.services.record_service import ExperienceService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/public", response_model=list[ExperienceResponse])
async def list_public_experience(
    profile_id: Annotated[str | None, Query(description="Only this profile's records")] = None,
):
    """
    List work experience for the public portfolio, latest job first.

    Returns everything when no profile_id is given (single-user site).
    """
    experiences = ExperienceService.list_records(profile_id=profile_id)
    logger.debug(f"Experience data fetched: {len(experiences)} records")
    return experiences


@router.get("", response_model=list[ExperienceResponse])
async def list_experience(user: CurrentUser):
    """List the caller's experience, latest job first."""
    return ExperienceService.list_records(profile_id=user.id)


@router.post("", response_model=ExperienceResponse, status_code=201)
async def create_experience(request: ExperienceCreate, user: CurrentUser):
    """
    Add a job to the caller's work history.

    `position`, `company` and `start_date` (YYYY-MM-DD) are required;
    leave `end_date` empty for a current job.
    """
    return ExperienceService.create_record(user.id, request.model_dump(mode="json"))


@router.put("", response_model=ExperienceResponse)
async def update_experience(
    request: ExperienceUpdate,
    user: CurrentUser,
    id: RecordIdQuery = None,
):
    """
    Update one of the caller's experiences.

    Blank `position`/`company`/`start_date` are ignored; blank `end_date`,
    `location` or `description` clear the field.
    """
    record_id = resolve_record_id(id, request.id)
    return ExperienceService.update_record(record_id, user.id, request.to_update_data())


@router.delete("")
async def delete_experience(
    user: CurrentUser,
    id: RecordIdQuery = None,
    payload: Annotated[IdPayload | None, Body()] = None,
):
    """Delete one of the caller's experiences."""
    record_id = resolve_record_id(id, payload.id if payload else None)
    ExperienceService.delete_record(record_id, user.id)

    return {
        "message": "Experience deleted successfully",
        "id": record_id,
    }
