"""
Tests for the admin user management and webhook endpoints.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from api import create_app
from api.dependencies import get_admin_service
from shared.models import UserRole
from modules.admin.models import AdminActionResult, AdminErrorCode, ManagedUser
from modules.admin.exceptions import AdminError

WEBHOOK_EVENT = {
    "type": "INSERT",
    "table": "users",
    "schema": "auth",
    "record": {"id": "new-user-1", "phone": "15551234567"},
}


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def mock_service(app):
    service = AsyncMock()
    app.dependency_overrides[get_admin_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.fixture
def client(app, mock_service):
    return TestClient(app)


class TestListUsers:
    """Tests for GET /api/admin/users"""

    def test_list_users(self, client, mock_service, admin_headers):
        mock_service.get_all_users_with_roles.return_value = [
            ManagedUser(uid="u1", email="amy@example.com", role=UserRole.ADMIN),
        ]

        response = client.get("/api/admin/users", headers=admin_headers)

        assert response.status_code == 200
        users = response.json()["users"]
        assert users[0]["role"] == "admin"
        caller = mock_service.get_all_users_with_roles.call_args[0][0]
        assert caller.id == "admin-1"
        assert caller.role == UserRole.ADMIN

    def test_list_users_denied(self, client, mock_service, auth_headers):
        mock_service.get_all_users_with_roles.side_effect = AdminError(
            AdminErrorCode.PERMISSION_DENIED, "Only admins can view all users"
        )

        response = client.get("/api/admin/users", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "permission-denied"

    def test_list_users_unauthenticated(self, client):
        assert client.get("/api/admin/users").status_code == 401


class TestCreateUser:
    """Tests for POST /api/admin/users"""

    def test_create_user(self, client, mock_service, admin_headers):
        mock_service.create_user.return_value = AdminActionResult(
            message="Successfully created user Jane Doe", uid="new-user-1"
        )

        response = client.post(
            "/api/admin/users",
            json={"phone_number": "+15551234567", "display_name": "Jane Doe"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["uid"] == "new-user-1"
        _, phone, name = mock_service.create_user.call_args[0]
        assert (phone, name) == ("+15551234567", "Jane Doe")

    def test_create_duplicate(self, client, mock_service, admin_headers):
        mock_service.create_user.side_effect = AdminError(
            AdminErrorCode.ALREADY_EXISTS, "Phone number already exists"
        )

        response = client.post(
            "/api/admin/users",
            json={"phone_number": "+15551234567", "display_name": "Jane Doe"},
            headers=admin_headers,
        )

        assert response.status_code == 409


class TestDeleteUser:
    def test_delete_user(self, client, mock_service, admin_headers):
        mock_service.delete_user.return_value = AdminActionResult(
            message="Successfully deleted user u1", uid="u1"
        )

        response = client.delete("/api/admin/users/u1", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_delete_self(self, client, mock_service, admin_headers):
        mock_service.delete_user.side_effect = AdminError(
            AdminErrorCode.FAILED_PRECONDITION, "You cannot delete your own account"
        )

        response = client.delete("/api/admin/users/admin-1", headers=admin_headers)

        assert response.status_code == 412
        assert response.json()["message"] == "You cannot delete your own account"


class TestSetRole:
    def test_set_role(self, client, mock_service, admin_headers):
        mock_service.set_user_role.return_value = AdminActionResult(
            message='Successfully set role "leader" for user u1'
        )

        response = client.put(
            "/api/admin/users/u1/role",
            json={"role": "leader"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        _, uid, role = mock_service.set_user_role.call_args[0]
        assert (uid, role) == ("u1", "leader")

    def test_set_invalid_role(self, client, mock_service, admin_headers):
        mock_service.set_user_role.side_effect = AdminError(
            AdminErrorCode.INVALID_ARGUMENT, "Role must be one of: admin, leader, user"
        )

        response = client.put(
            "/api/admin/users/u1/role",
            json={"role": "owner"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid-argument"


class TestAuthUserCreatedHook:
    """Tests for POST /api/hooks/auth-user-created"""

    def test_assigns_default_role(self, client, mock_service):
        response = client.post(
            "/api/hooks/auth-user-created",
            json=WEBHOOK_EVENT,
            headers={"X-Webhook-Secret": "test-webhook-secret"},
        )

        assert response.status_code == 204
        mock_service.assign_default_role.assert_awaited_once_with("new-user-1")

    def test_wrong_secret(self, client, mock_service):
        response = client.post(
            "/api/hooks/auth-user-created",
            json=WEBHOOK_EVENT,
            headers={"X-Webhook-Secret": "nope"},
        )

        assert response.status_code == 401
        mock_service.assign_default_role.assert_not_called()

    def test_missing_secret(self, client, mock_service):
        response = client.post("/api/hooks/auth-user-created", json=WEBHOOK_EVENT)

        assert response.status_code == 401

    def test_record_without_id(self, client, mock_service):
        response = client.post(
            "/api/hooks/auth-user-created",
            json={**WEBHOOK_EVENT, "record": {"phone": "15551234567"}},
            headers={"X-Webhook-Secret": "test-webhook-secret"},
        )

        assert response.status_code == 400
        mock_service.assign_default_role.assert_not_called()
