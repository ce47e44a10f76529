"""
Profiles module interface.
"""

from typing import Iterable, Optional, Protocol, runtime_checkable

from .models import UserProfile, PublicProfile


@runtime_checkable
class IProfileService(Protocol):
    """
    Interface for profile operations.

    Used by the auth, verification, groups and admin modules.
    """

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get a private profile, or None if the user has none."""
        ...

    async def create_profile(
        self,
        user_id: str,
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> UserProfile:
        """
        Create the private profile, and the public one when a display name is known.
        """
        ...

    async def set_display_name(
        self,
        user_id: str,
        display_name: str,
        phone_number: Optional[str] = None,
    ) -> UserProfile:
        """Write the display name to both the private and the public profile."""
        ...

    async def get_public_profiles(self, user_ids: Iterable[str]) -> dict[str, "PublicProfile"]:
        """Public profiles keyed by user ID; unknown IDs are omitted."""
        ...

    async def list_profiles(self) -> list[UserProfile]:
        """All private profiles ordered by email."""
        ...

    async def search_profiles(self, term: str, limit: int = 10) -> list[UserProfile]:
        """Profiles whose email or display name contains term (case-insensitive)."""
        ...

    async def delete_profiles(self, user_id: str) -> None:
        """Remove both the private and the public profile."""
        ...
