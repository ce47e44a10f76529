"""
Admin API endpoints.

User management for admins, plus the webhook Supabase calls when a new
identity is created.
"""

import hmac
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from api.middleware.auth import get_current_user
from api.dependencies import get_admin_service
from shared.config import get_settings
from shared.models import AuthenticatedUser

from .interfaces import IAdminService
from .models import (
    AdminActionResult,
    AuthUserCreatedEvent,
    CreateUserRequest,
    SetRoleRequest,
    UserListResponse,
)

router = APIRouter()
hooks_router = APIRouter()


@router.get("", response_model=UserListResponse)
async def list_users(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAdminService = Depends(get_admin_service),
) -> UserListResponse:
    """List every user with their role, sorted by email."""
    users = await service.get_all_users_with_roles(user)
    return UserListResponse(users=users)


@router.post("", response_model=AdminActionResult, status_code=201)
async def create_user(
    request: CreateUserRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAdminService = Depends(get_admin_service),
) -> AdminActionResult:
    """Create an unverified user from a phone number and display name."""
    return await service.create_user(user, request.phone_number, request.display_name)


@router.delete("/{uid}", response_model=AdminActionResult)
async def delete_user(
    uid: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAdminService = Depends(get_admin_service),
) -> AdminActionResult:
    return await service.delete_user(user, uid)


@router.put("/{uid}/role", response_model=AdminActionResult)
async def set_user_role(
    uid: str,
    request: SetRoleRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAdminService = Depends(get_admin_service),
) -> AdminActionResult:
    return await service.set_user_role(user, uid, request.role)


@hooks_router.post("/auth-user-created", status_code=204)
async def auth_user_created(
    event: AuthUserCreatedEvent,
    x_webhook_secret: Optional[str] = Header(default=None),
    service: IAdminService = Depends(get_admin_service),
) -> None:
    """
    Assign the default role to a newly created identity.

    Requests must carry the configured shared secret in X-Webhook-Secret.
    """
    expected = get_settings().auth_webhook_secret
    if not expected or not x_webhook_secret or not hmac.compare_digest(x_webhook_secret, expected):
        raise HTTPException(status_code=401, detail="Invalid webhook secret")

    if event.user_id is None:
        raise HTTPException(status_code=400, detail="Event record has no user id")

    await service.assign_default_role(event.user_id)
