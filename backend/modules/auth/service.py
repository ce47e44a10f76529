"""
Authentication service implementation.

Validates Supabase JWT tokens and drives the email/password and
magic-link sign-in flows against Supabase Auth.
"""

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

import jwt
from postgrest.exceptions import APIError
from supabase import AuthError

from shared.config import get_settings
from shared.database import get_supabase_auth_client
from shared.exceptions import HubError
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import (
    AuthSession,
    JWTPayload,
    LoginRequest,
    SignupRequest,
    phone_to_e164,
    session_from_provider,
)
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    PasswordMismatchError,
    PasswordTooShortError,
    ProviderAuthError,
)

if TYPE_CHECKING:
    from modules.profiles.interfaces import IProfileService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def validate_new_password(password: str, confirm_password: str) -> None:
    """
    Check a new password before any network call.

    Raises:
        PasswordMismatchError: If the confirmation differs
        PasswordTooShortError: If the password is too short
    """
    if password != confirm_password:
        raise PasswordMismatchError()
    if len(password) < MIN_PASSWORD_LENGTH:
        raise PasswordTooShortError(MIN_PASSWORD_LENGTH)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase JWT tokens for authentication. Sign-in calls run on a
    fresh anon client per call so no session state is shared.
    """

    def __init__(self, profiles: "Optional[IProfileService]" = None):
        self._settings = get_settings()
        self._profiles = profiles

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        if not token:
            raise MissingTokenError()

        try:
            # Decode and validate the JWT
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )

            jwt_payload = JWTPayload(**payload)

            # Convert iat timestamp to datetime for last_sign_in
            last_sign_in = datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc)

            return AuthenticatedUser(
                id=jwt_payload.sub,
                email=jwt_payload.email or None,
                phone=phone_to_e164(jwt_payload.phone),
                display_name=jwt_payload.display_name,
                email_verified=jwt_payload.email_confirmed_at is not None,
                phone_verified=jwt_payload.phone_confirmed_at is not None,
                last_sign_in=last_sign_in,
                role=jwt_payload.app_role,
            )

        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

    async def signup(self, request: SignupRequest) -> AuthSession:
        """
        Create an email/password identity and its profile records.

        Profile creation is best-effort: the identity is usable even if
        the profile write fails, so that failure is only logged.
        """
        validate_new_password(request.password, request.confirm_password)

        display_name = (request.display_name or "").strip() or None
        credentials: dict = {"email": request.email, "password": request.password}
        if display_name:
            credentials["options"] = {"data": {"display_name": display_name}}

        client = get_supabase_auth_client()
        try:
            response = client.auth.sign_up(credentials)
        except AuthError as e:
            logger.info(f"Signup rejected for {request.email}: {e}")
            raise ProviderAuthError.from_provider(e)

        session = session_from_provider(response)

        if self._profiles is not None:
            try:
                await self._profiles.create_profile(
                    session.user.id,
                    email=request.email,
                    display_name=display_name,
                )
            except (HubError, APIError) as e:
                logger.warning(f"Could not create profile for {session.user.id}: {e}")

        return session

    async def login(self, request: LoginRequest) -> AuthSession:
        """Sign in with email and password."""
        client = get_supabase_auth_client()
        try:
            response = client.auth.sign_in_with_password(
                {"email": request.email, "password": request.password}
            )
        except AuthError as e:
            raise ProviderAuthError.from_provider(e)
        return session_from_provider(response)

    async def send_magic_link(self, email: str, redirect_url: Optional[str] = None) -> None:
        """Email a passwordless sign-in link."""
        client = get_supabase_auth_client()
        try:
            client.auth.sign_in_with_otp(
                {
                    "email": email,
                    "options": {
                        "email_redirect_to": redirect_url or self._settings.magic_link_redirect_url,
                    },
                }
            )
        except AuthError as e:
            raise ProviderAuthError.from_provider(e)

    async def complete_magic_link(self, email: str, token: str) -> AuthSession:
        """Redeem the token from a sign-in link."""
        client = get_supabase_auth_client()
        try:
            response = client.auth.verify_otp(
                {"email": email, "token": token, "type": "magiclink"}
            )
        except AuthError as e:
            raise ProviderAuthError.from_provider(e)
        return session_from_provider(response)

    async def resend_verification_email(self, email: str) -> None:
        """Resend the signup confirmation email."""
        client = get_supabase_auth_client()
        try:
            client.auth.resend({"type": "signup", "email": email})
        except AuthError as e:
            raise ProviderAuthError.from_provider(e)


# Module-level instance getter
_service_instance: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get the auth service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AuthService()
    return _service_instance


def reset_auth_service() -> None:
    """Reset the auth service singleton (for testing)."""
    global _service_instance
    _service_instance = None
