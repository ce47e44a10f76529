"""
Bible study group API endpoints.

Any signed-in user can browse, join and leave groups. Creating, editing
and deleting groups needs the matching role permission.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.middleware.auth import get_current_user
from api.dependencies import get_group_service
from shared.models import AuthenticatedUser
from modules.auth.exceptions import InsufficientPermissionsError

from .interfaces import IGroupService
from .models import (
    BibleStudyGroup,
    CreateGroupRequest,
    GroupListResponse,
    LeaderName,
    UpdateGroupRequest,
)
from .exceptions import GroupNotFoundError

router = APIRouter()


@router.get("", response_model=GroupListResponse)
async def list_groups(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IGroupService = Depends(get_group_service),
) -> GroupListResponse:
    """List all groups, ordered by name."""
    groups = await service.list_groups()
    return GroupListResponse(items=groups, total=len(groups))


@router.post("", response_model=BibleStudyGroup, status_code=201)
async def create_group(
    request: CreateGroupRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IGroupService = Depends(get_group_service),
) -> BibleStudyGroup:
    """
    Create a group.

    At least one meeting time is required. Members start empty.
    """
    try:
        return await service.create_group(user, request)
    except InsufficientPermissionsError as e:
        raise HTTPException(status_code=403, detail=e.message)


@router.get("/{group_id}", response_model=BibleStudyGroup)
async def get_group(
    group_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IGroupService = Depends(get_group_service),
) -> BibleStudyGroup:
    try:
        return await service.get_group(group_id)
    except GroupNotFoundError:
        raise HTTPException(status_code=404, detail="Bible study group not found")


@router.patch("/{group_id}", response_model=BibleStudyGroup)
async def update_group(
    group_id: str,
    request: UpdateGroupRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IGroupService = Depends(get_group_service),
) -> BibleStudyGroup:
    """Update a group's details, leaders or meeting times."""
    try:
        return await service.update_group(user, group_id, request)
    except InsufficientPermissionsError as e:
        raise HTTPException(status_code=403, detail=e.message)
    except GroupNotFoundError:
        raise HTTPException(status_code=404, detail="Bible study group not found")


@router.delete("/{group_id}", status_code=204)
async def delete_group(
    group_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IGroupService = Depends(get_group_service),
) -> None:
    try:
        await service.delete_group(user, group_id)
    except InsufficientPermissionsError as e:
        raise HTTPException(status_code=403, detail=e.message)
    except GroupNotFoundError:
        raise HTTPException(status_code=404, detail="Bible study group not found")


@router.post("/{group_id}/join", response_model=BibleStudyGroup)
async def join_group(
    group_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IGroupService = Depends(get_group_service),
) -> BibleStudyGroup:
    """Join a group. Joining a group you already belong to changes nothing."""
    try:
        return await service.join_group(user, group_id)
    except GroupNotFoundError:
        raise HTTPException(status_code=404, detail="Bible study group not found")


@router.post("/{group_id}/leave", response_model=BibleStudyGroup)
async def leave_group(
    group_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IGroupService = Depends(get_group_service),
) -> BibleStudyGroup:
    try:
        return await service.leave_group(user, group_id)
    except GroupNotFoundError:
        raise HTTPException(status_code=404, detail="Bible study group not found")


@router.get("/{group_id}/leaders", response_model=list[LeaderName])
async def get_leader_names(
    group_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IGroupService = Depends(get_group_service),
) -> list[LeaderName]:
    try:
        return await service.get_leader_names(group_id)
    except GroupNotFoundError:
        raise HTTPException(status_code=404, detail="Bible study group not found")
