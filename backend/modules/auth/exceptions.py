"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Any, Optional

from supabase import AuthRetryableError

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
    ExternalServiceError,
)

from .messages import get_auth_error_message, normalize_provider_code

# Provider conditions that are not the caller's fault; everything else is a 400
PROVIDER_CONDITION_STATUS: dict[str, int] = {
    "too-many-requests": 429,
    "network-request-failed": 503,
}


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, permission: str, user_role: str):
        super().__init__(
            f"Insufficient permissions. Required: {permission}, has role: {user_role}",
            code="INSUFFICIENT_PERMISSIONS",
            details={"permission": permission, "user_role": user_role},
        )


class PasswordMismatchError(ValidationError):
    """Raised when the password confirmation does not match."""

    def __init__(self):
        super().__init__("Passwords do not match", code="PASSWORD_MISMATCH")


class PasswordTooShortError(ValidationError):
    """Raised when a password is shorter than the minimum length."""

    def __init__(self, min_length: int):
        super().__init__(
            f"Password must be at least {min_length} characters",
            code="PASSWORD_TOO_SHORT",
            details={"min_length": min_length},
        )


class ProviderAuthError(ExternalServiceError):
    """
    Raised when the identity provider rejects a request.

    The message is always the fixed user-facing string for the
    normalised condition; the raw provider message stays in details.
    """

    def __init__(
        self,
        condition: Optional[str],
        provider_message: Optional[str] = None,
        status: Optional[int] = None,
    ):
        details: dict[str, Any] = {"provider_message": provider_message}
        if status is not None:
            details["status"] = status
        super().__init__(
            get_auth_error_message(condition),
            service="supabase-auth",
            code=condition or "auth-error",
            details=details,
        )
        self.condition = condition

    @property
    def status_code(self) -> int:
        return PROVIDER_CONDITION_STATUS.get(self.code, 400)

    @classmethod
    def from_provider(cls, error: Exception) -> "ProviderAuthError":
        """Build from a supabase auth exception."""
        raw_code = getattr(error, "code", None)
        status = getattr(error, "status", None)
        condition = normalize_provider_code(raw_code)
        if condition is None and isinstance(error, AuthRetryableError):
            condition = "network-request-failed"
        if condition is None and status == 429:
            condition = "too-many-requests"
        return cls(condition, getattr(error, "message", str(error)), status)
