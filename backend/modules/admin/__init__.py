"""
Admin module.

Privileged user management: role assignment, user creation and
deletion, the user table, and the default role for new identities.

Public API:
- IAdminService: Interface for admin operations
- AdminError / AdminErrorCode: Failure conditions
- describe_admin_error: User-facing text for an AdminError
"""

from .interfaces import IAdminService
from .models import (
    AdminErrorCode,
    AdminActionResult,
    ManagedUser,
    UserListResponse,
    SetRoleRequest,
    CreateUserRequest,
    AuthUserCreatedEvent,
)
from .exceptions import AdminError, ADMIN_ERROR_STATUS, describe_admin_error

__all__ = [
    "IAdminService",
    "AdminErrorCode",
    "AdminActionResult",
    "ManagedUser",
    "UserListResponse",
    "SetRoleRequest",
    "CreateUserRequest",
    "AuthUserCreatedEvent",
    "AdminError",
    "ADMIN_ERROR_STATUS",
    "describe_admin_error",
]
