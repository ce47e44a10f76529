"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """Roles an identity can hold."""

    ADMIN = "admin"
    LEADER = "leader"
    USER = "user"

    @classmethod
    def parse(cls, value: Optional[str]) -> "UserRole":
        """Parse a claim value, falling back to USER for missing or unknown roles."""
        try:
            return cls(value)
        except ValueError:
            return cls.USER


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from verified JWT claims and made available
    to route handlers via dependency injection. The role comes from the
    token's app_metadata claim, which only the service role can write.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: Optional[str] = Field(None, description="User's email address")
    phone: Optional[str] = Field(None, description="User's phone number (E.164)")
    display_name: Optional[str] = Field(None, description="Display name")
    email_verified: bool = Field(default=False, description="Whether email is verified")
    phone_verified: bool = Field(default=False, description="Whether phone is verified")

    created_at: Optional[datetime] = Field(None, description="Account creation time")
    last_sign_in: Optional[datetime] = Field(None, description="Last sign-in time")

    role: UserRole = Field(default=UserRole.USER, description="Role from signed claims")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
