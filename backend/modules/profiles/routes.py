"""
Profile API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.middleware.auth import get_current_user, require_permission
from api.dependencies import get_profile_service
from shared.models import AuthenticatedUser
from modules.verification.exceptions import InvalidNameError
from modules.verification.validators import validate_full_name

from .exceptions import ProfileNotFoundError
from .interfaces import IProfileService
from .models import ProfileListResponse, PublicProfile, UpdateDisplayNameRequest, UserProfile

router = APIRouter()


@router.get("/public", response_model=list[PublicProfile])
async def get_public_profiles(
    ids: list[str] = Query(default=[], description="User IDs to resolve"),
    service: IProfileService = Depends(get_profile_service),
) -> list[PublicProfile]:
    """
    Resolve display names for a set of users.

    Needs no authentication; unknown IDs are left out.
    """
    if not ids:
        return []
    profiles = await service.get_public_profiles(ids)
    return [profiles[i] for i in ids if i in profiles]


@router.get("", response_model=ProfileListResponse)
async def list_profiles(
    q: Optional[str] = Query(default=None, description="Search email or display name"),
    user: AuthenticatedUser = Depends(require_permission("can_create_groups")),
    service: IProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """
    List profiles for picking group leaders.

    With q, returns up to 10 matches; terms under two characters match nothing.
    """
    if q is not None:
        profiles = await service.search_profiles(q)
    else:
        profiles = await service.list_profiles()
    return ProfileListResponse(profiles=profiles, total=len(profiles))


@router.get("/me", response_model=UserProfile)
async def get_my_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProfileService = Depends(get_profile_service),
) -> UserProfile:
    profile = await service.get_profile(user.id)
    if profile is None:
        raise ProfileNotFoundError(user.id)
    return profile


@router.put("/me", response_model=UserProfile)
async def update_my_display_name(
    request: UpdateDisplayNameRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProfileService = Depends(get_profile_service),
) -> UserProfile:
    """Change the caller's display name in both profile records."""
    try:
        display_name = validate_full_name(request.display_name)
    except InvalidNameError as e:
        raise HTTPException(status_code=422, detail=e.message)
    return await service.set_display_name(user.id, display_name, phone_number=user.phone)
