"""
Profile module data models.

UserProfile is the private, denormalised record kept for UI convenience.
It is never a source of truth for roles. PublicProfile is the minimal
projection anyone may read, used to show leader names.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    """Private profile record (users table)."""

    id: str = Field(..., description="User ID (UUID)")
    phone_number: Optional[str] = Field(None, description="Phone number (E.164)")
    email: Optional[str] = Field(None, description="Email address")
    display_name: Optional[str] = Field(None, description="Display name")
    created_at: Optional[datetime] = Field(None, description="Record creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")


class PublicProfile(BaseModel):
    """Non-sensitive projection (public_profiles table)."""

    id: str
    display_name: str


class UpdateDisplayNameRequest(BaseModel):
    """Change the caller's display name."""

    display_name: str = Field(..., min_length=1, max_length=200)


class ProfileListResponse(BaseModel):
    """Profiles for the leader picker."""

    profiles: list[UserProfile]
    total: int
