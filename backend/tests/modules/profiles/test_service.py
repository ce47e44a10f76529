"""Tests for the profile service."""

import pytest
from unittest.mock import MagicMock

from modules.profiles.interfaces import IProfileService
from modules.profiles.models import PublicProfile, UserProfile
from modules.profiles.service import ProfileService


@pytest.fixture
def repo():
    repo = MagicMock()
    repo.upsert_profile.side_effect = lambda user_id, data: UserProfile(id=user_id, **{
        k: v for k, v in data.items() if k in ("email", "phone_number", "display_name")
    })
    return repo


@pytest.fixture
def service(repo):
    return ProfileService(repo)


class TestCreateProfile:
    @pytest.mark.asyncio
    async def test_with_display_name_writes_both(self, service, repo):
        profile = await service.create_profile(
            "user-123", phone_number="+15551234567", display_name="Jane Doe"
        )

        data = repo.upsert_profile.call_args[0][1]
        assert data["phone_number"] == "+15551234567"
        assert "created_at" in data
        repo.upsert_public_profile.assert_called_once_with("user-123", "Jane Doe")
        assert profile.display_name == "Jane Doe"

    @pytest.mark.asyncio
    async def test_without_display_name_skips_public(self, service, repo):
        await service.create_profile("user-123", email="test@example.com")

        repo.upsert_public_profile.assert_not_called()


class TestSetDisplayName:
    @pytest.mark.asyncio
    async def test_writes_both_records(self, service, repo):
        await service.set_display_name("user-123", "Jane Doe", phone_number="+15551234567")

        repo.upsert_profile.assert_called_once_with(
            "user-123", {"display_name": "Jane Doe", "phone_number": "+15551234567"}
        )
        repo.upsert_public_profile.assert_called_once_with("user-123", "Jane Doe")

    @pytest.mark.asyncio
    async def test_without_phone(self, service, repo):
        await service.set_display_name("user-123", "Jane Doe")

        repo.upsert_profile.assert_called_once_with("user-123", {"display_name": "Jane Doe"})


class TestReads:
    @pytest.mark.asyncio
    async def test_public_profiles_keyed_by_id(self, service, repo):
        repo.get_public_profiles.return_value = [PublicProfile(id="u1", display_name="Jane Doe")]

        profiles = await service.get_public_profiles(["u1", "u2"])

        assert list(profiles) == ["u1"]

    @pytest.mark.asyncio
    async def test_search(self, service, repo):
        repo.list_profiles.return_value = [
            UserProfile(id="u1", email="jane@example.com", display_name="Jane Doe"),
            UserProfile(id="u2", email="bob@example.com", display_name="Bob Smith"),
            UserProfile(id="u3", email=None, display_name=None),
        ]

        assert [p.id for p in await service.search_profiles("JANE")] == ["u1"]
        assert [p.id for p in await service.search_profiles("example", limit=1)] == ["u1"]
        assert [p.id for p in await service.search_profiles("smith")] == ["u2"]

    @pytest.mark.asyncio
    async def test_search_short_term(self, service, repo):
        assert await service.search_profiles(" j ") == []
        repo.list_profiles.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_removes_both(self, service, repo):
        await service.delete_profiles("user-123")

        repo.delete_profile.assert_called_once_with("user-123")
        repo.delete_public_profile.assert_called_once_with("user-123")

    def test_implements_interface(self, service):
        assert isinstance(service, IProfileService)
