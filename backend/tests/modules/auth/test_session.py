import pytest
from unittest.mock import AsyncMock

from shared.models import AuthenticatedUser, UserRole
from modules.auth.models import AuthSession
from modules.auth.session import SessionManager
from modules.auth.exceptions import InvalidTokenError


def make_session(access_token="token", **user_fields):
    user = AuthenticatedUser(id="user-123", **user_fields)
    return AuthSession(user=user, access_token=access_token)


@pytest.fixture
def auth():
    service = AsyncMock()
    service.validate_token.return_value = AuthenticatedUser(id="user-123", role=UserRole.LEADER)
    return service


class TestSessionManager:
    def test_starts_empty(self, auth):
        manager = SessionManager(auth)
        assert manager.current is None
        assert manager.user is None
        assert manager.role == UserRole.USER
        assert not manager.permissions.can_create_groups

    @pytest.mark.asyncio
    async def test_establish_uses_token_claims(self, auth):
        manager = SessionManager(auth)
        user = await manager.establish(
            make_session(role=UserRole.ADMIN, phone="+15551234567", display_name="Jane Doe")
        )

        auth.validate_token.assert_awaited_once_with("token")
        # Role comes from the validated token, not the provider record
        assert user.role == UserRole.LEADER
        assert user.phone == "+15551234567"
        assert user.display_name == "Jane Doe"
        assert manager.permissions.can_create_groups

    @pytest.mark.asyncio
    async def test_establish_without_token(self, auth):
        manager = SessionManager(auth)
        with pytest.raises(ValueError):
            await manager.establish(make_session(access_token=None))
        auth.validate_token.assert_not_called()

    @pytest.mark.asyncio
    async def test_establish_invalid_token(self, auth):
        auth.validate_token.side_effect = InvalidTokenError()
        manager = SessionManager(auth)
        with pytest.raises(InvalidTokenError):
            await manager.establish(make_session())
        assert manager.current is None

    @pytest.mark.asyncio
    async def test_listeners(self, auth):
        manager = SessionManager(auth)
        seen = []
        unsubscribe = manager.on_change(seen.append)

        await manager.establish(make_session())
        manager.update_user(display_name="Jane Doe")
        assert manager.user.display_name == "Jane Doe"

        unsubscribe()
        manager.clear()

        assert len(seen) == 2
        assert seen[1].user.display_name == "Jane Doe"
        assert manager.current is None

    def test_update_user_without_session_is_noop(self, auth):
        manager = SessionManager(auth)
        manager.update_user(display_name="Jane Doe")
        assert manager.current is None

    @pytest.mark.asyncio
    async def test_close(self, auth):
        seen = []
        with SessionManager(auth) as manager:
            manager.on_change(seen.append)
            await manager.establish(make_session())

        assert manager.closed
        assert manager.current is None
        assert seen[-1] is None
        manager.close()

        with pytest.raises(RuntimeError):
            await manager.establish(make_session())
