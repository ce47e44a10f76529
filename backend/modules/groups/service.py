"""
Group service implementation.

Reads go through the shared query cache. Every write runs as a
PendingMutation against the cached group list: patch first, write to the
store, then invalidate everything under the groups prefix on success or
restore the snapshot on failure.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from shared.exceptions import HubError
from shared.models import AuthenticatedUser
from shared.query_cache import PendingMutation, QueryCache
from modules.auth.exceptions import InsufficientPermissionsError
from modules.auth.permissions import has_permission
from modules.profiles.interfaces import IProfileService

from .interfaces import IGroupService
from .models import (
    BibleStudyGroup,
    CreateGroupRequest,
    LeaderName,
    UpdateGroupRequest,
)
from .repository import GroupRepository
from .exceptions import EmptyUpdateError, GroupMutationError, GroupNotFoundError

logger = logging.getLogger(__name__)

GROUPS_KEY = ("biblestudygroups",)


def group_key(group_id: str) -> tuple[str, str]:
    return (*GROUPS_KEY, group_id)


def check_group_id(group_id: str) -> None:
    """
    Group IDs are UUIDs; anything else cannot name a group.

    Raises:
        GroupNotFoundError: If group_id is not a UUID
    """
    try:
        uuid.UUID(group_id)
    except (ValueError, TypeError, AttributeError):
        raise GroupNotFoundError(group_id)


class GroupService(IGroupService):
    """Group operations over the bible_study_groups table."""

    def __init__(
        self,
        repository: GroupRepository,
        profiles: Optional[IProfileService] = None,
        cache: Optional[QueryCache] = None,
    ):
        self._repo = repository
        self._profiles = profiles
        self._cache = cache if cache is not None else QueryCache()

    @property
    def cache(self) -> QueryCache:
        return self._cache

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_groups(self) -> list[BibleStudyGroup]:
        return self._cache.fetch(GROUPS_KEY, self._repo.list_groups)

    async def get_group(self, group_id: str) -> BibleStudyGroup:
        check_group_id(group_id)
        key = group_key(group_id)
        group = self._cache.get(key)
        if group is None:
            group = self._repo.get_group(group_id)
            if group is None:
                raise GroupNotFoundError(group_id)
            self._cache.set(key, group)
        return group

    async def get_leader_names(self, group_id: str) -> list[LeaderName]:
        group = await self.get_group(group_id)
        profiles = {}
        if self._profiles is not None and group.leaders:
            profiles = await self._profiles.get_public_profiles([l.id for l in group.leaders])

        names = []
        for leader in group.leaders:
            profile = profiles.get(leader.id)
            name = profile.display_name if profile and profile.display_name else leader.name
            names.append(LeaderName(id=leader.id, name=name))
        return names

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create_group(
        self, user: AuthenticatedUser, request: CreateGroupRequest
    ) -> BibleStudyGroup:
        self._require(user, "can_create_groups")

        data = request.model_dump(mode="json")
        provisional = BibleStudyGroup(id=f"pending-{uuid.uuid4().hex}", **request.model_dump())

        def add_provisional(groups: list[BibleStudyGroup]) -> list[BibleStudyGroup]:
            return sorted([*groups, provisional], key=lambda g: g.name)

        group = self._mutate(
            "create bible study group",
            None,
            add_provisional,
            lambda: self._repo.create_group(data),
        )
        logger.info(f"User {user.id} created group {group.id} ({group.name})")
        return group

    async def update_group(
        self, user: AuthenticatedUser, group_id: str, request: UpdateGroupRequest
    ) -> BibleStudyGroup:
        self._require(user, "can_update_groups")
        check_group_id(group_id)

        changes = request.model_dump(mode="json", exclude_unset=True)
        changes = {k: v for k, v in changes.items() if v is not None}
        if not changes:
            raise EmptyUpdateError()

        def patch(groups: list[BibleStudyGroup]) -> list[BibleStudyGroup]:
            return [
                BibleStudyGroup.model_validate({**g.model_dump(), **changes})
                if g.id == group_id else g
                for g in groups
            ]

        def write() -> BibleStudyGroup:
            group = self._repo.update_group(group_id, changes)
            if group is None:
                raise GroupNotFoundError(group_id)
            return group

        return self._mutate("update bible study group", group_id, patch, write)

    async def delete_group(self, user: AuthenticatedUser, group_id: str) -> None:
        self._require(user, "can_delete_groups")
        check_group_id(group_id)

        def remove(groups: list[BibleStudyGroup]) -> list[BibleStudyGroup]:
            return [g for g in groups if g.id != group_id]

        def write() -> None:
            if not self._repo.delete_group(group_id):
                raise GroupNotFoundError(group_id)

        self._mutate("delete bible study group", group_id, remove, write)
        logger.info(f"User {user.id} deleted group {group_id}")

    async def join_group(self, user: AuthenticatedUser, group_id: str) -> BibleStudyGroup:
        check_group_id(group_id)
        joined_at = datetime.now(timezone.utc)

        def add_member(groups: list[BibleStudyGroup]) -> list[BibleStudyGroup]:
            return [g.with_member(user.id, joined_at) if g.id == group_id else g for g in groups]

        def write() -> BibleStudyGroup:
            group = self._repo.add_member(group_id, user.id)
            if group is None:
                raise GroupNotFoundError(group_id)
            return group

        return self._mutate("join group", group_id, add_member, write)

    async def leave_group(self, user: AuthenticatedUser, group_id: str) -> BibleStudyGroup:
        check_group_id(group_id)
        def remove_member(groups: list[BibleStudyGroup]) -> list[BibleStudyGroup]:
            return [g.without_member(user.id) if g.id == group_id else g for g in groups]

        def write() -> BibleStudyGroup:
            group = self._repo.remove_member(group_id, user.id)
            if group is None:
                raise GroupNotFoundError(group_id)
            return group

        return self._mutate("leave group", group_id, remove_member, write)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _mutate(
        self,
        action: str,
        group_id: Optional[str],
        transform: Callable[[list[BibleStudyGroup]], list[BibleStudyGroup]],
        write: Callable[[], Any],
    ) -> Any:
        """
        Run write as an optimistic mutation of the cached group list.

        Application errors (e.g. not found) pass through after the rollback;
        anything else is reported as a GroupMutationError.
        """
        mutation = PendingMutation(self._cache, GROUPS_KEY, transform, invalidate=GROUPS_KEY)
        try:
            return mutation.run(write)
        except HubError:
            raise
        except Exception as e:
            logger.error(f"Failed to {action} ({group_id}): {e}")
            raise GroupMutationError(action, group_id) from e

    @staticmethod
    def _require(user: AuthenticatedUser, permission: str) -> None:
        if not has_permission(user.role, permission):
            raise InsufficientPermissionsError(permission, user.role.value)
