# =============================================================================
# app/routers/skills.py - Skills Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Body, Query

from app.dependencies import CurrentUser, IdPayload, RecordIdQuery, resolve_record_id
from core.models.skill import SkillCreate, SkillResponse, SkillUpdate
from core.services.record_service import SkillService

router = APIRouter()


@router.get("/public", response_model=list[SkillResponse])
async def list_public_skills(
    profile_id: Annotated[str | None, Query(description="Only this profile's skills")] = None,
):
    """List skills for the public portfolio, newest first."""
    return SkillService.list_records(profile_id=profile_id)


@router.get("", response_model=list[SkillResponse])
async def list_skills(user: CurrentUser):
    """List the caller's skills, newest first."""
    return SkillService.list_records(profile_id=user.id)


@router.post("", response_model=SkillResponse, status_code=201)
async def create_skill(request: SkillCreate, user: CurrentUser):
    """
    Add a skill.

    `level` must be one of beginner, intermediate or expert. Empty optional
    fields are stored as null.
    """
    return SkillService.create_record(user.id, request.model_dump(mode="json"))


@router.put("", response_model=SkillResponse)
async def update_skill(
    request: SkillUpdate,
    user: CurrentUser,
    id: RecordIdQuery = None,
):
    """Update one of the caller's skills. Send `level: ""` to remove the level."""
    record_id = resolve_record_id(id, request.id)
    return SkillService.update_record(record_id, user.id, request.to_update_data())


@router.delete("")
async def delete_skill(
    user: CurrentUser,
    id: RecordIdQuery = None,
    payload: Annotated[IdPayload | None, Body()] = None,
):
    record_id = resolve_record_id(id, payload.id if payload else None)
    SkillService.delete_record(record_id, user.id)

    return {
        "message": "Skill deleted successfully",
        "id": record_id,
    }
