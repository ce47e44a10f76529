"""
Admin service implementation.

Uses the Supabase Auth admin API with the service role key. The role
lives in each identity's app_metadata, which only the service role can
write, so it is the single source of truth for roles.
"""

import logging
from typing import Any, Optional

from postgrest.exceptions import APIError
from supabase import AuthError, Client

from shared.exceptions import HubError
from shared.models import AuthenticatedUser, UserRole
from modules.auth.messages import normalize_provider_code
from modules.auth.models import user_from_provider
from modules.profiles.interfaces import IProfileService
from modules.verification.exceptions import InvalidPhoneNumberError
from modules.verification.validators import normalize_phone_number

from .interfaces import IAdminService
from .models import AdminActionResult, AdminErrorCode, ManagedUser
from .exceptions import AdminError

logger = logging.getLogger(__name__)

VALID_ROLES = tuple(role.value for role in UserRole)
LIST_PAGE_SIZE = 1000


class AdminService(IAdminService):
    """Privileged user management backed by Supabase Auth."""

    def __init__(self, db: Client, profiles: IProfileService):
        self._db = db
        self._profiles = profiles

    async def set_user_role(
        self, caller: AuthenticatedUser, uid: str, role: str
    ) -> AdminActionResult:
        self._require_admin(caller, "Only admins can set user roles")
        self._require_uid(uid)
        if role not in VALID_ROLES:
            raise AdminError(
                AdminErrorCode.INVALID_ARGUMENT,
                f"Role must be one of: {', '.join(VALID_ROLES)}",
            )

        try:
            self._db.auth.admin.update_user_by_id(uid, {"app_metadata": {"role": role}})
        except AuthError as e:
            logger.error(f"Error setting role {role} for {uid}: {e}")
            raise AdminError(AdminErrorCode.INTERNAL, "Failed to set user role")

        logger.info(f"Admin {caller.id} set role '{role}' for user {uid}")
        return AdminActionResult(message=f'Successfully set role "{role}" for user {uid}')

    async def create_user(
        self, caller: AuthenticatedUser, phone_number: str, display_name: str
    ) -> AdminActionResult:
        """
        Create an unverified phone identity.

        The identity gets the default role, and both profile records are
        written with the display name.
        """
        self._require_admin(caller, "Only admins can create users")
        if not phone_number or not phone_number.strip():
            raise AdminError(AdminErrorCode.INVALID_ARGUMENT, "Phone number is required")
        if not display_name or not display_name.strip():
            raise AdminError(AdminErrorCode.INVALID_ARGUMENT, "Display name is required")
        try:
            phone_number = normalize_phone_number(phone_number)
        except InvalidPhoneNumberError as e:
            raise AdminError(AdminErrorCode.INVALID_ARGUMENT, e.message)
        display_name = display_name.strip()

        try:
            response = self._db.auth.admin.create_user(
                {
                    "phone": phone_number,
                    "user_metadata": {"display_name": display_name},
                    "app_metadata": {"role": UserRole.USER.value},
                }
            )
        except AuthError as e:
            if normalize_provider_code(getattr(e, "code", None)) == "phone-number-already-exists":
                raise AdminError(AdminErrorCode.ALREADY_EXISTS, "Phone number already exists")
            logger.error(f"Error creating user {phone_number}: {e}")
            raise AdminError(AdminErrorCode.INTERNAL, "Failed to create user")

        uid = str(response.user.id)
        try:
            await self._profiles.create_profile(
                uid,
                email=None,
                phone_number=phone_number,
                display_name=display_name,
            )
        except (HubError, APIError) as e:
            logger.error(f"Error creating profiles for {uid}: {e}")
            raise AdminError(AdminErrorCode.INTERNAL, "Failed to create user")

        logger.info(f"Admin {caller.id} created user {uid}")
        return AdminActionResult(
            message=f"Successfully created user {display_name}",
            uid=uid,
        )

    async def delete_user(self, caller: AuthenticatedUser, uid: str) -> AdminActionResult:
        """Delete both profile records, then the identity. Admins cannot delete themselves."""
        self._require_admin(caller, "Only admins can delete users")
        self._require_uid(uid)
        if uid == caller.id:
            raise AdminError(
                AdminErrorCode.FAILED_PRECONDITION,
                "You cannot delete your own account",
            )

        try:
            await self._profiles.delete_profiles(uid)
            self._db.auth.admin.delete_user(uid)
        except AuthError as e:
            if getattr(e, "status", None) == 404 or getattr(e, "code", None) == "user_not_found":
                raise AdminError(AdminErrorCode.NOT_FOUND, "User not found")
            logger.error(f"Error deleting user {uid}: {e}")
            raise AdminError(AdminErrorCode.INTERNAL, "Failed to delete user")
        except (HubError, APIError) as e:
            logger.error(f"Error deleting profiles of {uid}: {e}")
            raise AdminError(AdminErrorCode.INTERNAL, "Failed to delete user")

        logger.info(f"Admin {caller.id} deleted user {uid}")
        return AdminActionResult(message=f"Successfully deleted user {uid}", uid=uid)

    async def get_all_users_with_roles(self, caller: AuthenticatedUser) -> list[ManagedUser]:
        """
        Merge identity records with profile records.

        Identity values win; the profile fills in what the identity lacks.
        Users are sorted by email, with missing emails first.
        """
        self._require_admin(caller, "Only admins can view all users")

        try:
            records = self._list_auth_users()
        except AuthError as e:
            logger.error(f"Error listing users: {e}")
            raise AdminError(AdminErrorCode.INTERNAL, "Failed to fetch users")

        try:
            profiles = {p.id: p for p in await self._profiles.list_profiles()}
        except (HubError, APIError) as e:
            logger.error(f"Error fetching profiles for user list: {e}")
            profiles = {}

        users = []
        for record in records:
            identity = user_from_provider(record)
            profile = profiles.get(identity.id)
            users.append(
                ManagedUser(
                    uid=identity.id,
                    phone_number=identity.phone or (profile.phone_number if profile else None) or "",
                    email=identity.email or (profile.email if profile else None),
                    display_name=identity.display_name or (profile.display_name if profile else None),
                    role=identity.role,
                    created_at=profile.created_at if profile else None,
                    updated_at=profile.updated_at if profile else None,
                )
            )

        users.sort(key=lambda u: u.email or "")
        return users

    async def assign_default_role(self, uid: str) -> None:
        try:
            self._db.auth.admin.update_user_by_id(
                uid, {"app_metadata": {"role": UserRole.USER.value}}
            )
            logger.info(f"Set default 'user' role for new user: {uid}")
        except AuthError as e:
            logger.error(f"Error setting default role for user {uid}: {e}")

    def _list_auth_users(self) -> list[Any]:
        records: list[Any] = []
        page = 1
        while True:
            batch = self._db.auth.admin.list_users(page=page, per_page=LIST_PAGE_SIZE)
            records.extend(batch)
            if len(batch) < LIST_PAGE_SIZE:
                return records
            page += 1

    @staticmethod
    def _require_admin(caller: Optional[AuthenticatedUser], message: str) -> None:
        if caller is None or caller.role != UserRole.ADMIN:
            raise AdminError(AdminErrorCode.PERMISSION_DENIED, message)

    @staticmethod
    def _require_uid(uid: str) -> None:
        if not uid or not uid.strip():
            raise AdminError(AdminErrorCode.INVALID_ARGUMENT, "User ID is required")
