"""
Profile service implementation.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from .interfaces import IProfileService
from .models import UserProfile, PublicProfile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 2


class ProfileService(IProfileService):
    """
    Profile service backed by the Supabase profile tables.

    Display names are written to both records so the public projection
    never lags behind the private one.
    """

    def __init__(self, repository: ProfileRepository):
        self._repo = repository

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        return self._repo.get_profile(user_id)

    async def create_profile(
        self,
        user_id: str,
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> UserProfile:
        data = {
            "email": email,
            "phone_number": phone_number,
            "display_name": display_name,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        profile = self._repo.upsert_profile(user_id, data)
        if display_name:
            self._repo.upsert_public_profile(user_id, display_name)
        logger.info(f"Created profile for {user_id}")
        return profile

    async def set_display_name(
        self,
        user_id: str,
        display_name: str,
        phone_number: Optional[str] = None,
    ) -> UserProfile:
        data: dict = {"display_name": display_name}
        if phone_number:
            data["phone_number"] = phone_number
        profile = self._repo.upsert_profile(user_id, data)
        self._repo.upsert_public_profile(user_id, display_name)
        return profile

    async def get_public_profiles(self, user_ids: Iterable[str]) -> dict[str, PublicProfile]:
        return {p.id: p for p in self._repo.get_public_profiles(user_ids)}

    async def list_profiles(self) -> list[UserProfile]:
        return self._repo.list_profiles()

    async def search_profiles(self, term: str, limit: int = 10) -> list[UserProfile]:
        """
        Case-insensitive substring search over email and display name.

        Terms shorter than two characters return nothing.
        """
        needle = (term or "").strip().lower()
        if len(needle) < MIN_SEARCH_LENGTH:
            return []

        matches = [
            profile
            for profile in self._repo.list_profiles()
            if needle in (profile.email or "").lower()
            or needle in (profile.display_name or "").lower()
        ]
        return matches[:limit]

    async def delete_profiles(self, user_id: str) -> None:
        self._repo.delete_profile(user_id)
        self._repo.delete_public_profile(user_id)
