"""
Role-based permissions.

Permissions are a pure function of the role claim. They gate API
affordances; the document store's row level security and the admin
operations re-check on their side.
"""

from pydantic import BaseModel

from shared.models import UserRole


class RolePermissions(BaseModel):
    """What a role is allowed to do."""

    can_create_groups: bool = False
    can_update_groups: bool = False
    can_delete_groups: bool = False
    can_manage_users: bool = False

    model_config = {"frozen": True}


ROLE_PERMISSIONS: dict[UserRole, RolePermissions] = {
    UserRole.ADMIN: RolePermissions(
        can_create_groups=True,
        can_update_groups=True,
        can_delete_groups=True,
        can_manage_users=True,
    ),
    UserRole.LEADER: RolePermissions(
        can_create_groups=True,
        can_update_groups=True,
        can_delete_groups=True,
    ),
    UserRole.USER: RolePermissions(),
}

PERMISSION_NAMES = tuple(RolePermissions.model_fields)


def get_permissions(role: UserRole) -> RolePermissions:
    """Permissions for a role; unknown roles get nothing."""
    return ROLE_PERMISSIONS.get(role, ROLE_PERMISSIONS[UserRole.USER])


def has_permission(role: UserRole, permission: str) -> bool:
    """Check a single named permission for a role."""
    if permission not in PERMISSION_NAMES:
        raise ValueError(f"Unknown permission: {permission}")
    return getattr(get_permissions(role), permission)
