"""
Profile repository for document store access.

Encapsulates all Supabase queries for the profile tables:
- users (private profile)
- public_profiles (display name only)
"""

from typing import Any, Iterable, Optional

from shared.repository import BaseRepository
from .models import UserProfile, PublicProfile

USERS_TABLE = "users"
PUBLIC_PROFILES_TABLE = "public_profiles"


class ProfileRepository(BaseRepository[UserProfile]):
    """
    Repository for profile data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for that.
    """

    # -------------------------------------------------------------------------
    # Private profile
    # -------------------------------------------------------------------------

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        result = self._db.table(USERS_TABLE).select("*").eq("id", user_id).execute()
        row = self._first_row(result.data)
        return self._map_to_profile(row) if row else None

    def upsert_profile(self, user_id: str, data: dict[str, Any]) -> UserProfile:
        """
        Create or merge a private profile record.

        Args:
            user_id: The identity ID.
            data: Columns to write (phone_number, email, display_name).

        Returns:
            The stored profile.
        """
        now = self._timestamp()
        row = {"id": user_id, **data, "updated_at": now}
        result = self._db.table(USERS_TABLE).upsert(row).execute()
        stored = self._first_row(result.data) or row
        return self._map_to_profile(stored)

    def delete_profile(self, user_id: str) -> None:
        self._db.table(USERS_TABLE).delete().eq("id", user_id).execute()

    def list_profiles(self) -> list[UserProfile]:
        """All private profiles, ordered by email."""
        result = self._db.table(USERS_TABLE).select("*").order("email").execute()
        return [self._map_to_profile(row) for row in result.data]

    # -------------------------------------------------------------------------
    # Public profile
    # -------------------------------------------------------------------------

    def upsert_public_profile(self, user_id: str, display_name: str) -> PublicProfile:
        row = {"id": user_id, "display_name": display_name}
        self._db.table(PUBLIC_PROFILES_TABLE).upsert(row).execute()
        return PublicProfile(id=user_id, display_name=display_name)

    def delete_public_profile(self, user_id: str) -> None:
        self._db.table(PUBLIC_PROFILES_TABLE).delete().eq("id", user_id).execute()

    def get_public_profiles(self, user_ids: Iterable[str]) -> list[PublicProfile]:
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return []
        result = (
            self._db.table(PUBLIC_PROFILES_TABLE)
            .select("id, display_name")
            .in_("id", ids)
            .execute()
        )
        return [
            PublicProfile(id=str(row["id"]), display_name=row.get("display_name") or "")
            for row in result.data
        ]

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_profile(self, data: dict[str, Any]) -> UserProfile:
        """Map database row to UserProfile model. The legacy role column is ignored."""
        return UserProfile(
            id=str(data["id"]),
            phone_number=data.get("phone_number"),
            email=data.get("email"),
            display_name=data.get("display_name"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
