# =============================================================================
# core/models/profile.py - Profile Schemas
# =============================================================================
# These models define the API contract for the owner's profile:
# - ProfileCreate: Input for POST /profile
# - ProfileUpdate: Input for PUT /profile (partial)
# - ProfileResponse: Output when returning the profile to clients
#
# There is exactly one profile per user and its id IS the auth user id.
# =============================================================================

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .common import OptionalText, RecordUpdate, RequiredText


class ProfileCreate(BaseModel):
    """
    Schema for creating the owner's profile.

    Example:
        {
            "name": "Ada Lovelace",
            "headline": "Analyst & Programmer",
            "social_links": {"github": "https://github.com/ada"}
        }
    """

    model_config = ConfigDict(extra="ignore")

    # Display name - the only required field
    name: RequiredText = Field(
        ...,
        max_length=255,
        description="Full display name"
    )

    headline: OptionalText = Field(default=None, description="One-line tagline")
    bio: OptionalText = Field(default=None, description="Longer free-form biography")

    # Falls back to the auth email when omitted
    email: OptionalText = Field(default=None, description="Public contact email")

    phone: OptionalText = None
    location: OptionalText = None
    profile_image: OptionalText = Field(default=None, description="URL of the avatar image")

    # Free-form map, e.g. {"github": "...", "linkedin": "..."}
    social_links: dict[str, str] | None = Field(
        default=None,
        description="Social network name -> URL"
    )


class ProfileUpdate(RecordUpdate):
    """Partial update of the profile. `name` can't be blanked out."""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("name",)

    name: OptionalText = None
    headline: OptionalText = None
    bio: OptionalText = None
    email: OptionalText = None
    phone: OptionalText = None
    location: OptionalText = None
    profile_image: OptionalText = None
    social_links: dict[str, str] | None = None


class ProfileResponse(BaseModel):
    """Schema for returning the profile to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    headline: str | None = None
    bio: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    profile_image: str | None = None
    social_links: dict[str, str] | None = None
    created_at: str | None = None
    updated_at: str | None = None
