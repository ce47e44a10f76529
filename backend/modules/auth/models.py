"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from typing import Any, Optional
from pydantic import BaseModel, EmailStr, Field

from shared.models import AuthenticatedUser, UserRole


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs. The application
    role lives in app_metadata, which end users cannot write.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    phone: Optional[str] = Field(None, description="User's phone number")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="Postgres role")
    email_confirmed_at: Optional[str] = Field(None, description="Email confirmation time")
    phone_confirmed_at: Optional[str] = Field(None, description="Phone confirmation time")

    # Supabase-specific claims
    app_metadata: dict[str, Any] = Field(default_factory=dict)
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def app_role(self) -> UserRole:
        """Application role from the signed app_metadata claim."""
        return UserRole.parse(self.app_metadata.get("role"))

    @property
    def display_name(self) -> Optional[str]:
        return display_name_from_metadata(self.user_metadata)


def display_name_from_metadata(metadata: Optional[dict[str, Any]]) -> Optional[str]:
    """Pick the display name out of provider user metadata."""
    if not metadata:
        return None
    for key in ("display_name", "full_name", "name"):
        value = metadata.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def phone_to_e164(phone: Optional[str]) -> Optional[str]:
    """
    Supabase stores and signs phone numbers without the leading '+';
    add it back so phones are always E.164 on our side.
    """
    if not phone:
        return None
    return phone if phone.startswith("+") else f"+{phone}"


class AuthSession(BaseModel):
    """
    A signed-in session handed back to the caller.

    Tokens are absent when the provider requires a confirmation step
    before issuing a session (e.g. email signup with confirmation on).
    """

    user: AuthenticatedUser
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.access_token is not None


class SignupRequest(BaseModel):
    """Email/password signup form."""

    email: EmailStr
    password: str = Field(..., description="Account password")
    confirm_password: str = Field(..., description="Password confirmation")
    display_name: Optional[str] = Field(None, max_length=200)


class LoginRequest(BaseModel):
    """Email/password login form."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class MagicLinkRequest(BaseModel):
    """Request a passwordless sign-in link."""

    email: EmailStr
    redirect_url: Optional[str] = None


class MagicLinkVerifyRequest(BaseModel):
    """Complete a passwordless sign-in."""

    email: EmailStr
    token: str = Field(..., min_length=1, description="Token from the emailed link")


class VerificationEmailRequest(BaseModel):
    """Ask the provider to resend the signup confirmation email."""

    email: EmailStr


def user_from_provider(user: Any) -> AuthenticatedUser:
    """Map a Supabase Auth user record to AuthenticatedUser."""
    app_metadata = getattr(user, "app_metadata", None) or {}
    phone = phone_to_e164(getattr(user, "phone", None))

    return AuthenticatedUser(
        id=str(user.id),
        email=getattr(user, "email", None) or None,
        phone=phone,
        display_name=display_name_from_metadata(getattr(user, "user_metadata", None)),
        email_verified=getattr(user, "email_confirmed_at", None) is not None,
        phone_verified=getattr(user, "phone_confirmed_at", None) is not None,
        created_at=getattr(user, "created_at", None),
        last_sign_in=getattr(user, "last_sign_in_at", None),
        role=UserRole.parse(app_metadata.get("role")),
    )


def session_from_provider(response: Any) -> AuthSession:
    """Map a Supabase AuthResponse (user + optional session) to AuthSession."""
    session = getattr(response, "session", None)
    user = getattr(response, "user", None) or getattr(session, "user", None)
    return AuthSession(
        user=user_from_provider(user),
        access_token=getattr(session, "access_token", None),
        refresh_token=getattr(session, "refresh_token", None),
        expires_in=getattr(session, "expires_in", None),
    )
