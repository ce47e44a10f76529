"""
Base exception classes for the Bible Study Hub backend.

Each module defines its own exceptions on top of these bases. Every
error knows the HTTP status it maps to, so the API layer can turn any
HubError into a response without knowing the module it came from.
"""

from typing import Optional, Any


class HubError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 400

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(HubError):
    """Resource not found."""

    status_code = 404


class ValidationError(HubError):
    """Input validation failed. The message is safe to show to the user."""

    status_code = 422


class ConflictError(HubError):
    """The request is valid but clashes with the current state."""

    status_code = 409


class AuthenticationError(HubError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(HubError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class ExternalServiceError(HubError):
    """Error communicating with an external service (Supabase Auth or the database)."""

    status_code = 502

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
