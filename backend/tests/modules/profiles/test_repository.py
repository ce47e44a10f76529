"""Tests for profiles repository."""

from unittest.mock import MagicMock

from modules.profiles.repository import ProfileRepository


def create_mock_profile_data(user_id="user-123", email="test@example.com", **fields) -> dict:
    return {
        "id": user_id,
        "email": email,
        "phone_number": "+15551234567",
        "display_name": "Jane Doe",
        "role": "admin",
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
        **fields,
    }


class TestPrivateProfile:
    def test_get_profile(self):
        mock_db = MagicMock()
        repo = ProfileRepository(mock_db)
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [
            create_mock_profile_data()
        ]

        profile = repo.get_profile("user-123")

        assert profile.id == "user-123"
        assert profile.display_name == "Jane Doe"
        # The legacy role column never reaches the model
        assert not hasattr(profile, "role")
        mock_db.table.assert_called_with("users")

    def test_get_profile_missing(self):
        mock_db = MagicMock()
        repo = ProfileRepository(mock_db)
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = []

        assert repo.get_profile("missing") is None

    def test_upsert_profile(self):
        mock_db = MagicMock()
        repo = ProfileRepository(mock_db)
        mock_db.table.return_value.upsert.return_value.execute.return_value.data = [
            create_mock_profile_data(display_name="New Name")
        ]

        profile = repo.upsert_profile("user-123", {"display_name": "New Name"})

        row = mock_db.table.return_value.upsert.call_args[0][0]
        assert row["id"] == "user-123"
        assert row["display_name"] == "New Name"
        assert "updated_at" in row
        assert profile.display_name == "New Name"

    def test_upsert_profile_without_returned_rows(self):
        mock_db = MagicMock()
        repo = ProfileRepository(mock_db)
        mock_db.table.return_value.upsert.return_value.execute.return_value.data = []

        profile = repo.upsert_profile("user-123", {"display_name": "New Name"})

        assert profile.id == "user-123"
        assert profile.display_name == "New Name"

    def test_list_profiles_ordered_by_email(self):
        mock_db = MagicMock()
        repo = ProfileRepository(mock_db)
        mock_db.table.return_value.select.return_value.order.return_value.execute.return_value.data = [
            create_mock_profile_data("u1", "a@example.com"),
            create_mock_profile_data("u2", "b@example.com"),
        ]

        profiles = repo.list_profiles()

        assert [p.id for p in profiles] == ["u1", "u2"]
        mock_db.table.return_value.select.return_value.order.assert_called_with("email")

    def test_delete_profile(self):
        mock_db = MagicMock()
        repo = ProfileRepository(mock_db)

        repo.delete_profile("user-123")

        mock_db.table.assert_called_with("users")
        mock_db.table.return_value.delete.return_value.eq.assert_called_with("id", "user-123")


class TestPublicProfile:
    def test_upsert_public_profile(self):
        mock_db = MagicMock()
        repo = ProfileRepository(mock_db)

        profile = repo.upsert_public_profile("user-123", "Jane Doe")

        mock_db.table.assert_called_with("public_profiles")
        mock_db.table.return_value.upsert.assert_called_with(
            {"id": "user-123", "display_name": "Jane Doe"}
        )
        assert profile.display_name == "Jane Doe"

    def test_get_public_profiles_dedupes_ids(self):
        mock_db = MagicMock()
        repo = ProfileRepository(mock_db)
        chain = mock_db.table.return_value.select.return_value.in_
        chain.return_value.execute.return_value.data = [
            {"id": "u1", "display_name": "Jane Doe"},
            {"id": "u2", "display_name": None},
        ]

        profiles = repo.get_public_profiles(["u1", "u2", "u1"])

        chain.assert_called_with("id", ["u1", "u2"])
        assert [(p.id, p.display_name) for p in profiles] == [("u1", "Jane Doe"), ("u2", "")]

    def test_get_public_profiles_empty(self):
        mock_db = MagicMock()
        repo = ProfileRepository(mock_db)

        assert repo.get_public_profiles([]) == []
        mock_db.table.assert_not_called()

    def test_delete_public_profile(self):
        mock_db = MagicMock()
        repo = ProfileRepository(mock_db)

        repo.delete_public_profile("user-123")

        mock_db.table.assert_called_with("public_profiles")
