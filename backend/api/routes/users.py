"""
User-related endpoints.

Provides the signed-in user's identity, role and permissions.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.models import AuthenticatedUser, UserRole
from modules.auth.permissions import RolePermissions, get_permissions
from ..middleware.auth import get_current_user

router = APIRouter()


class CurrentUserResponse(BaseModel):
    """Current user response model."""

    id: str
    email: Optional[str] = None
    phone: Optional[str] = None
    display_name: Optional[str] = None
    email_verified: bool
    phone_verified: bool
    role: UserRole
    permissions: RolePermissions


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
) -> CurrentUserResponse:
    """
    Get the current user with role and permission flags.

    The role comes from the token's signed claims only.
    """
    return CurrentUserResponse(
        id=user.id,
        email=user.email,
        phone=user.phone,
        display_name=user.display_name,
        email_verified=user.email_verified,
        phone_verified=user.phone_verified,
        role=user.role,
        permissions=get_permissions(user.role),
    )
