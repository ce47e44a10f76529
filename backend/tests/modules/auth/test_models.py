import pytest
from datetime import datetime, timezone
from types import SimpleNamespace

from pydantic import ValidationError

from modules.auth.models import (
    AuthenticatedUser,
    AuthSession,
    JWTPayload,
    SignupRequest,
    UserRole,
    display_name_from_metadata,
    phone_to_e164,
    session_from_provider,
    user_from_provider,
)


def provider_user(**overrides):
    fields = {
        "id": "user-123",
        "email": "test@example.com",
        "phone": "15551234567",
        "user_metadata": {"display_name": "Jane Doe"},
        "app_metadata": {"role": "leader"},
        "email_confirmed_at": None,
        "phone_confirmed_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "last_sign_in_at": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestAuthenticatedUser:
    def test_create_user(self):
        """Should create an authenticated user."""
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
            role="leader",
        )
        assert user.id == "user-123"
        assert user.email == "test@example.com"
        assert user.role == UserRole.LEADER

    def test_user_is_immutable(self):
        """AuthenticatedUser should be immutable."""
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        with pytest.raises(Exception):  # Pydantic ValidationError
            user.id = "different-id"

    def test_default_role(self):
        """AuthenticatedUser should have default role 'user'."""
        user = AuthenticatedUser(id="user-123", email="test@example.com")
        assert user.role == UserRole.USER
        assert not user.is_admin


class TestJWTPayload:
    def test_parse_jwt_payload(self):
        """Should parse JWT payload from dict."""
        data = {
            "sub": "user-123",
            "email": "test@example.com",
            "exp": 1704067200,
            "iat": 1704063600,
            "aud": "authenticated",
            "role": "authenticated",
        }
        payload = JWTPayload(**data)
        assert payload.sub == "user-123"
        assert payload.email == "test@example.com"

    def test_jwt_defaults(self):
        """JWTPayload should have sensible defaults."""
        data = {
            "sub": "user-123",
            "exp": 1704067200,
            "iat": 1704063600,
        }
        payload = JWTPayload(**data)
        assert payload.aud == "authenticated"
        assert payload.role == "authenticated"
        assert payload.app_metadata == {}
        assert payload.user_metadata == {}
        assert payload.app_role == UserRole.USER
        assert payload.display_name is None

    def test_app_role_from_app_metadata(self):
        payload = JWTPayload(
            sub="user-123", exp=1704067200, iat=1704063600,
            app_metadata={"role": "admin"},
        )
        assert payload.app_role == UserRole.ADMIN

    def test_postgres_role_is_not_app_role(self):
        """The top-level role claim is the Postgres role, never the app role."""
        payload = JWTPayload(sub="user-123", exp=1704067200, iat=1704063600, role="admin")
        assert payload.app_role == UserRole.USER


class TestDisplayNameFromMetadata:
    def test_prefers_display_name(self):
        metadata = {"display_name": "Jane", "full_name": "Jane Doe"}
        assert display_name_from_metadata(metadata) == "Jane"

    def test_falls_back_to_full_name_then_name(self):
        assert display_name_from_metadata({"full_name": " Jane Doe "}) == "Jane Doe"
        assert display_name_from_metadata({"name": "J"}) == "J"

    def test_blank_values_skipped(self):
        assert display_name_from_metadata({"display_name": "  ", "name": "Jane"}) == "Jane"

    def test_empty(self):
        assert display_name_from_metadata(None) is None
        assert display_name_from_metadata({}) is None


class TestPhoneToE164:
    def test_adds_plus(self):
        assert phone_to_e164("15551234567") == "+15551234567"

    def test_keeps_plus(self):
        assert phone_to_e164("+15551234567") == "+15551234567"

    def test_blank(self):
        assert phone_to_e164("") is None
        assert phone_to_e164(None) is None


class TestUserFromProvider:
    def test_maps_record(self):
        user = user_from_provider(provider_user())
        assert user.id == "user-123"
        assert user.phone == "+15551234567"
        assert user.display_name == "Jane Doe"
        assert user.role == UserRole.LEADER
        assert user.phone_verified is True
        assert user.email_verified is False

    def test_keeps_existing_plus(self):
        user = user_from_provider(provider_user(phone="+15551234567"))
        assert user.phone == "+15551234567"

    def test_blank_contact_becomes_none(self):
        user = user_from_provider(provider_user(phone="", email="", app_metadata=None))
        assert user.phone is None
        assert user.email is None
        assert user.role == UserRole.USER


class TestSessionFromProvider:
    def test_with_session(self):
        user = provider_user()
        response = SimpleNamespace(
            user=user,
            session=SimpleNamespace(access_token="a", refresh_token="r", expires_in=3600, user=user),
        )
        session = session_from_provider(response)
        assert isinstance(session, AuthSession)
        assert session.is_active
        assert session.refresh_token == "r"

    def test_without_session(self):
        session = session_from_provider(SimpleNamespace(user=provider_user(), session=None))
        assert session.access_token is None
        assert not session.is_active


class TestSignupRequest:
    def test_rejects_invalid_email(self):
        with pytest.raises(ValidationError):
            SignupRequest(email="not-an-email", password="secret1", confirm_password="secret1")
