"""
Admin module exceptions.

Every failure of a privileged operation is an AdminError carrying one of
the AdminErrorCode conditions and a short message.
"""

from typing import Any, Optional

from shared.exceptions import HubError

from .models import AdminErrorCode

ADMIN_ERROR_STATUS: dict[AdminErrorCode, int] = {
    AdminErrorCode.PERMISSION_DENIED: 403,
    AdminErrorCode.INVALID_ARGUMENT: 400,
    AdminErrorCode.FAILED_PRECONDITION: 412,
    AdminErrorCode.ALREADY_EXISTS: 409,
    AdminErrorCode.NOT_FOUND: 404,
    AdminErrorCode.INTERNAL: 500,
}

# Messages shown to the admin for conditions the UI handles specially
ADMIN_ERROR_MESSAGES: dict[AdminErrorCode, str] = {
    AdminErrorCode.FAILED_PRECONDITION: "You cannot delete your own account",
    AdminErrorCode.ALREADY_EXISTS: "A user with this phone number already exists",
}


class AdminError(HubError):
    """Raised by privileged operations."""

    def __init__(
        self,
        condition: AdminErrorCode,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code=condition.value, details=details)
        self.condition = condition

    @property
    def status_code(self) -> int:
        return ADMIN_ERROR_STATUS[self.condition]


def describe_admin_error(error: AdminError) -> str:
    """User-facing text for an admin error."""
    return ADMIN_ERROR_MESSAGES.get(error.condition, error.message)
