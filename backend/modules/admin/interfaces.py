"""
Admin module interface.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import AdminActionResult, ManagedUser


@runtime_checkable
class IAdminService(Protocol):
    """
    Interface for privileged user management.

    Every operation except assign_default_role requires the caller's
    role claim to be admin and raises AdminError otherwise.
    """

    async def set_user_role(
        self, caller: AuthenticatedUser, uid: str, role: str
    ) -> AdminActionResult:
        """Set the role claim of another identity."""
        ...

    async def create_user(
        self, caller: AuthenticatedUser, phone_number: str, display_name: str
    ) -> AdminActionResult:
        """Create an unverified phone identity with the default role and its profiles."""
        ...

    async def delete_user(self, caller: AuthenticatedUser, uid: str) -> AdminActionResult:
        """Delete an identity and both of its profile records."""
        ...

    async def get_all_users_with_roles(self, caller: AuthenticatedUser) -> list[ManagedUser]:
        """All identities with their roles, sorted by email."""
        ...

    async def assign_default_role(self, uid: str) -> None:
        """Give a newly created identity the user role. Never raises."""
        ...
