"""
Authentication module.

Handles JWT validation, role resolution from signed claims, permissions,
sessions and the email/password and magic-link sign-in flows.

Public API:
- IAuthService: Interface for auth operations
- SessionManager: Holder for one signed-in session
- AuthSession: Tokens plus identity handed back to callers
- ROLE_PERMISSIONS / get_permissions: Role -> permission table
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from shared.models import AuthenticatedUser, UserRole

from .interfaces import IAuthService
from .models import (
    AuthSession,
    JWTPayload,
    SignupRequest,
    LoginRequest,
    MagicLinkRequest,
    MagicLinkVerifyRequest,
    VerificationEmailRequest,
)
from .permissions import RolePermissions, ROLE_PERMISSIONS, get_permissions, has_permission
from .messages import get_auth_error_message
from .session import SessionManager
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InsufficientPermissionsError,
    PasswordMismatchError,
    PasswordTooShortError,
    ProviderAuthError,
)

__all__ = [
    # Interface
    "IAuthService",
    "SessionManager",
    # Models
    "AuthenticatedUser",
    "UserRole",
    "AuthSession",
    "JWTPayload",
    "SignupRequest",
    "LoginRequest",
    "MagicLinkRequest",
    "MagicLinkVerifyRequest",
    "VerificationEmailRequest",
    # Permissions
    "RolePermissions",
    "ROLE_PERMISSIONS",
    "get_permissions",
    "has_permission",
    "get_auth_error_message",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InsufficientPermissionsError",
    "PasswordMismatchError",
    "PasswordTooShortError",
    "ProviderAuthError",
]
