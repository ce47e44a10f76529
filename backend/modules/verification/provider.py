"""
Supabase Auth SMS provider.
"""

import logging
from typing import Optional

from supabase import AuthError, Client

from shared.database import get_supabase_auth_client, get_supabase_client
from modules.auth.exceptions import ProviderAuthError
from modules.auth.messages import normalize_provider_code
from modules.auth.models import AuthSession, session_from_provider

from .interfaces import IVerificationProvider
from .models import ConfirmationHandle
from .exceptions import CodeRequestError, InvalidCodeError

logger = logging.getLogger(__name__)

# Provider codes meaning "this code cannot be redeemed"
REJECTED_CODE_ERRORS = {"otp_expired", "otp_disabled", "invalid_credentials"}


class SupabasePhoneProvider(IVerificationProvider):
    """Sends and redeems SMS codes through Supabase Auth."""

    def __init__(self, admin_client: Optional[Client] = None):
        self._admin_client = admin_client

    @property
    def admin_client(self) -> Client:
        if self._admin_client is None:
            self._admin_client = get_supabase_client()
        return self._admin_client

    async def send_code(self, phone_number: str) -> ConfirmationHandle:
        client = get_supabase_auth_client()
        try:
            client.auth.sign_in_with_otp({"phone": phone_number})
        except AuthError as e:
            condition = normalize_provider_code(getattr(e, "code", None))
            if condition is None and getattr(e, "status", None) == 429:
                condition = "too-many-requests"
            logger.warning(f"SMS code request failed for {phone_number}: {e}")
            raise CodeRequestError(condition, getattr(e, "message", str(e)))

        logger.info(f"Sent verification code to {phone_number}")
        return ConfirmationHandle(phone_number=phone_number)

    async def verify_code(self, handle: ConfirmationHandle, code: str) -> AuthSession:
        client = get_supabase_auth_client()
        try:
            response = client.auth.verify_otp(
                {"phone": handle.phone_number, "token": code, "type": "sms"}
            )
        except AuthError as e:
            raw_code = getattr(e, "code", None)
            if raw_code in REJECTED_CODE_ERRORS or getattr(e, "status", None) in (400, 401, 403):
                raise InvalidCodeError()
            raise ProviderAuthError.from_provider(e)

        return session_from_provider(response)

    async def update_display_name(self, user_id: str, display_name: str) -> None:
        try:
            self.admin_client.auth.admin.update_user_by_id(
                user_id, {"user_metadata": {"display_name": display_name}}
            )
        except AuthError as e:
            raise ProviderAuthError.from_provider(e)
