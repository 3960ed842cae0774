# =============================================================================
# app/routers/education.py - Education CRUD Endpoints
# =============================================================================
# Dashboard endpoints act on the caller's own records only.
# GET /public serves the visitor-facing site without authentication.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Body, Query

from app.dependencies import CurrentUser, IdPayload, RecordIdQuery, resolve_record_id
from core.models.education import EducationCreate, EducationResponse, EducationUpdate
from core.services.record_service import EducationService

router = APIRouter()


@router.get("/public", response_model=list[EducationResponse])
async def list_public_education(
    profile_id: Annotated[str | None, Query(description="Only this profile's records")] = None,
):
    """
    List education for the public portfolio, most recent first.

    Returns everything when no profile_id is given (single-user site).
    """
    return EducationService.list_records(profile_id=profile_id)


@router.get("", response_model=list[EducationResponse])
async def list_education(user: CurrentUser):
    """List the caller's education records, most recent first."""
    return EducationService.list_records(profile_id=user.id)


@router.post("", response_model=EducationResponse, status_code=201)
async def create_education(request: EducationCreate, user: CurrentUser):
    """Add an education record owned by the caller."""
    return EducationService.create_record(user.id, request.model_dump(mode="json"))


@router.put("", response_model=EducationResponse)
async def update_education(
    request: EducationUpdate,
    user: CurrentUser,
    id: RecordIdQuery = None,
):
    """
    Update one of the caller's education records.

    Only the fields present in the body are changed.
    """
    record_id = resolve_record_id(id, request.id)
    return EducationService.update_record(record_id, user.id, request.to_update_data())


@router.delete("")
async def delete_education(
    user: CurrentUser,
    id: RecordIdQuery = None,
    payload: Annotated[IdPayload | None, Body()] = None,
):
    """Delete one of the caller's education records."""
    record_id = resolve_record_id(id, payload.id if payload else None)
    EducationService.delete_record(record_id, user.id)

    return {
        "message": "Education record deleted successfully",
        "id": record_id,
    }
