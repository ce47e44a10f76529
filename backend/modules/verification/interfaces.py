"""
Verification module interfaces.
"""

from typing import Protocol, runtime_checkable

from modules.auth.models import AuthSession

from .models import ConfirmationHandle


@runtime_checkable
class IVerificationProvider(Protocol):
    """
    Interface to an SMS one-time-code identity provider.

    Implementations must map provider failures to the verification
    exceptions so the flow never sees raw provider errors.
    """

    async def send_code(self, phone_number: str) -> ConfirmationHandle:
        """
        Send a one-time code to an E.164 phone number.

        Raises:
            CodeRequestError: If the provider refuses to send
        """
        ...

    async def verify_code(self, handle: ConfirmationHandle, code: str) -> AuthSession:
        """
        Redeem a code against the challenge it was issued for.

        Raises:
            InvalidCodeError: If the code is wrong or expired
            ProviderAuthError: For any other provider failure
        """
        ...

    async def update_display_name(self, user_id: str, display_name: str) -> None:
        """Write the display name to the identity record."""
        ...
