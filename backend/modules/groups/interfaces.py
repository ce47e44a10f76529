"""
Groups module interface.

Routes and other modules depend on IGroupService, not the concrete class.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import (
    BibleStudyGroup,
    CreateGroupRequest,
    LeaderName,
    UpdateGroupRequest,
)


@runtime_checkable
class IGroupService(Protocol):
    """
    Interface for bible study group operations.

    Every mutation patches the cached group list optimistically, then
    invalidates it on success or restores it on failure.
    """

    async def list_groups(self) -> list[BibleStudyGroup]:
        """All groups ordered by name."""
        ...

    async def get_group(self, group_id: str) -> BibleStudyGroup:
        """
        Raises:
            GroupNotFoundError: If the group doesn't exist
        """
        ...

    async def create_group(
        self, user: AuthenticatedUser, request: CreateGroupRequest
    ) -> BibleStudyGroup:
        """
        Raises:
            InsufficientPermissionsError: Without can_create_groups
            GroupMutationError: If the write fails
        """
        ...

    async def update_group(
        self, user: AuthenticatedUser, group_id: str, request: UpdateGroupRequest
    ) -> BibleStudyGroup:
        """
        Raises:
            InsufficientPermissionsError: Without can_update_groups
            GroupNotFoundError: If the group doesn't exist
            GroupMutationError: If the write fails
        """
        ...

    async def delete_group(self, user: AuthenticatedUser, group_id: str) -> None:
        """
        Raises:
            InsufficientPermissionsError: Without can_delete_groups
            GroupNotFoundError: If the group doesn't exist
            GroupMutationError: If the write fails
        """
        ...

    async def join_group(self, user: AuthenticatedUser, group_id: str) -> BibleStudyGroup:
        """Add the user to the group's members. Joining twice is a no-op."""
        ...

    async def leave_group(self, user: AuthenticatedUser, group_id: str) -> BibleStudyGroup:
        """Remove the user from the group's members. Leaving twice is a no-op."""
        ...

    async def get_leader_names(self, group_id: str) -> list[LeaderName]:
        """Leader display names, preferring public profiles over the embedded snapshot."""
        ...
