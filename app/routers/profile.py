# =============================================================================
# app/routers/profile.py - Profile Endpoints
# =============================================================================
# The owner's profile. The profile id is always the authenticated user's
# id; any id sent in the body is ignored.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import CurrentUser
from core.models.profile import ProfileCreate, ProfileResponse, ProfileUpdate
from core.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/public", response_model=ProfileResponse)
async def get_public_profile(
    id: Annotated[str | None, Query(description="Profile id (defaults to the first profile)")] = None,
):
    """
    Get the profile shown on the public portfolio.

    No authentication required. Without `id`, the first profile is
    returned, which is the site owner on a single-user deployment.
    """
    return ProfileService.get_public_profile(id)


@router.get("", response_model=ProfileResponse)
async def get_profile(user: CurrentUser):
    """
    Get the caller's profile.

    Returns 404 until the profile has been created with POST.
    """
    return ProfileService.get_profile(user.id)


@router.post("", response_model=ProfileResponse, status_code=201)
async def create_profile(request: ProfileCreate, user: CurrentUser):
    """
    Create the caller's profile.

    `name` is required. `email` defaults to the login email.
    Returns 409 if the profile already exists.
    """
    return ProfileService.create_profile(
        user.id,
        request.model_dump(mode="json"),
        auth_email=user.email,
    )


@router.put("", response_model=ProfileResponse)
async def update_profile(request: ProfileUpdate, user: CurrentUser):
    """
    Update the caller's profile.

    Only the fields present in the body are changed; `updated_at` is
    always refreshed.
    """
    logger.info(f"Updating profile for user: {user.id}")
    return ProfileService.update_profile(user.id, request.to_update_data())


@router.delete("")
async def delete_profile(user: CurrentUser):
    """Delete the caller's profile."""
    ProfileService.delete_profile(user.id)
    return {"message": "Profile deleted successfully", "id": str(user.id)}
