"""
Admin module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field

from shared.models import UserRole


class AdminErrorCode(str, Enum):
    """Error conditions of the privileged operations."""

    PERMISSION_DENIED = "permission-denied"
    INVALID_ARGUMENT = "invalid-argument"
    FAILED_PRECONDITION = "failed-precondition"
    ALREADY_EXISTS = "already-exists"
    NOT_FOUND = "not-found"
    INTERNAL = "internal"


class SetRoleRequest(BaseModel):
    # Checked by the service so bad values surface as invalid-argument
    role: str = Field(..., description="One of: admin, leader, user")


class CreateUserRequest(BaseModel):
    phone_number: str = Field(..., description="Phone number in E.164 form")
    display_name: str = Field(..., description="Full name")


class AdminActionResult(BaseModel):
    success: bool = True
    message: str
    uid: Optional[str] = None


class ManagedUser(BaseModel):
    """A user as shown in the admin user table."""

    uid: str
    phone_number: str = ""
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: UserRole = UserRole.USER
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserListResponse(BaseModel):
    users: list[ManagedUser]


class AuthUserCreatedEvent(BaseModel):
    """
    Database webhook payload sent when a row is inserted into auth.users.
    """

    type: str = "INSERT"
    table: str = "users"
    schema_name: Optional[str] = Field(None, alias="schema")
    record: dict[str, Any]

    @property
    def user_id(self) -> Optional[str]:
        value = self.record.get("id")
        return str(value) if value else None
