"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and swapping the identity provider.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import AuthSession, SignupRequest, LoginRequest


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        The role is taken from the token's signed claims only.

        Args:
            token: JWT access token from Supabase Auth

        Returns:
            AuthenticatedUser with user ID, contact info and role

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        ...

    async def signup(self, request: SignupRequest) -> AuthSession:
        """
        Create an email/password identity.

        Raises:
            ValidationError: If the passwords don't match or are too short
            ProviderAuthError: If the provider rejects the signup
        """
        ...

    async def login(self, request: LoginRequest) -> AuthSession:
        """
        Sign in with email and password.

        Raises:
            ProviderAuthError: If the credentials are rejected
        """
        ...

    async def send_magic_link(self, email: str, redirect_url: Optional[str] = None) -> None:
        """Email a passwordless sign-in link."""
        ...

    async def complete_magic_link(self, email: str, token: str) -> AuthSession:
        """Redeem the token from a sign-in link."""
        ...

    async def resend_verification_email(self, email: str) -> None:
        """Resend the signup confirmation email."""
        ...
