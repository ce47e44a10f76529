"""
Group repository for document store access.

Encapsulates all Supabase queries for the bible_study_groups table.
Membership changes go through two Postgres functions so that join is an
atomic add-to-set and leave an atomic remove-by-value:
- join_bible_study_group(p_group_id, p_user_id)
- leave_bible_study_group(p_group_id, p_user_id)
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .models import BibleStudyGroup

GROUPS_TABLE = "bible_study_groups"
JOIN_FUNCTION = "join_bible_study_group"
LEAVE_FUNCTION = "leave_bible_study_group"


class GroupRepository(BaseRepository[BibleStudyGroup]):
    """
    Repository for group data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying permissions.
    """

    def list_groups(self) -> list[BibleStudyGroup]:
        """All groups ordered by name ascending."""
        result = self._db.table(GROUPS_TABLE).select("*").order("name").execute()
        return [self._map_to_group(row) for row in result.data or []]

    def get_group(self, group_id: str) -> Optional[BibleStudyGroup]:
        result = self._db.table(GROUPS_TABLE).select("*").eq("id", group_id).execute()
        row = self._first_row(result.data)
        return self._map_to_group(row) if row else None

    def create_group(self, data: dict[str, Any]) -> BibleStudyGroup:
        """
        Insert a group.

        Args:
            data: JSON-ready columns (name, description, location, leaders,
                meeting_times). Members always start empty.

        Returns:
            The created group with its generated ID and timestamps.
        """
        now = self._timestamp()
        row = {**data, "members": [], "created_at": now, "updated_at": now}
        result = self._db.table(GROUPS_TABLE).insert(row).execute()
        return self._map_to_group(result.data[0])

    def update_group(self, group_id: str, data: dict[str, Any]) -> Optional[BibleStudyGroup]:
        """
        Returns:
            The updated group, or None if no row matched.
        """
        data = {**data, "updated_at": self._timestamp()}
        result = self._db.table(GROUPS_TABLE).update(data).eq("id", group_id).execute()
        row = self._first_row(result.data)
        return self._map_to_group(row) if row else None

    def delete_group(self, group_id: str) -> bool:
        """
        Returns:
            True if a row was deleted.
        """
        result = self._db.table(GROUPS_TABLE).delete().eq("id", group_id).execute()
        return bool(result.data)

    def add_member(self, group_id: str, user_id: str) -> Optional[BibleStudyGroup]:
        """
        Add user_id to the group's members unless already present.

        Returns:
            The group after the change, or None if it doesn't exist.
        """
        return self._call_membership_function(JOIN_FUNCTION, group_id, user_id)

    def remove_member(self, group_id: str, user_id: str) -> Optional[BibleStudyGroup]:
        """
        Remove every member entry for user_id.

        Returns:
            The group after the change, or None if it doesn't exist.
        """
        return self._call_membership_function(LEAVE_FUNCTION, group_id, user_id)

    def _call_membership_function(
        self, function: str, group_id: str, user_id: str
    ) -> Optional[BibleStudyGroup]:
        result = self._db.rpc(
            function, {"p_group_id": group_id, "p_user_id": user_id}
        ).execute()
        rows = result.data
        if isinstance(rows, dict):
            rows = [rows]
        row = self._first_row(rows)
        return self._map_to_group(row) if row else None

    def _map_to_group(self, row: dict[str, Any]) -> BibleStudyGroup:
        """Map a table row to the group model, defaulting missing optional columns."""
        return BibleStudyGroup(
            id=str(row["id"]),
            name=row["name"],
            description=row.get("description") or "",
            location=row.get("location") or "",
            leaders=row.get("leaders") or [],
            meeting_times=row.get("meeting_times") or [],
            members=row.get("members") or [],
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )
