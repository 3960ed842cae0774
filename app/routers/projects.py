# =============================================================================
# app/routers/projects.py - Portfolio Project Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Body, Query

from app.dependencies import CurrentUser, IdPayload, RecordIdQuery, resolve_record_id
from core.models.project import ProjectCreate, ProjectResponse, ProjectUpdate
from core.services.record_service import ProjectService

router = APIRouter()


@router.get("/public", response_model=list[ProjectResponse])
async def list_public_projects(
    profile_id: Annotated[str | None, Query(description="Only this profile's projects")] = None,
):
    """List projects for the public portfolio, newest first."""
    return ProjectService.list_records(profile_id=profile_id)


@router.get("", response_model=list[ProjectResponse])
async def list_projects(user: CurrentUser):
    return ProjectService.list_records(profile_id=user.id)


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(request: ProjectCreate, user: CurrentUser):
    """Add a project. Only `title` is required."""
    return ProjectService.create_record(user.id, request.model_dump(mode="json"))


@router.put("", response_model=ProjectResponse)
async def update_project(
    request: ProjectUpdate,
    user: CurrentUser,
    id: RecordIdQuery = None,
):
    """Update one of the caller's projects."""
    record_id = resolve_record_id(id, request.id)
    return ProjectService.update_record(record_id, user.id, request.to_update_data())


@router.delete("")
async def delete_project(
    user: CurrentUser,
    id: RecordIdQuery = None,
    payload: Annotated[IdPayload | None, Body()] = None,
):
    """Delete one of the caller's projects."""
    record_id = resolve_record_id(id, payload.id if payload else None)
    ProjectService.delete_record(record_id, user.id)

    return {
        "message": "Project deleted successfully",
        "id": record_id,
    }
