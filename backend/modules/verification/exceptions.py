"""
Verification module exceptions.
"""

from typing import Optional

from shared.exceptions import (
    HubError,
    ConflictError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,
)
from modules.auth.exceptions import PROVIDER_CONDITION_STATUS
from modules.auth.messages import AUTH_ERROR_MESSAGES, get_auth_error_message


class VerificationError(HubError):
    """Base exception for verification flow errors."""

    pass


class InvalidPhoneNumberError(ValidationError):
    """Raised when a phone number is not in E.164 form."""

    def __init__(self, phone_number: str):
        super().__init__(
            AUTH_ERROR_MESSAGES["invalid-phone-number"],
            code="invalid-phone-number",
            details={"phone_number": phone_number},
        )


class InvalidCodeFormatError(ValidationError):
    """Raised when the submitted code is not six digits."""

    def __init__(self):
        super().__init__(
            "Please enter the 6-digit code sent to your phone",
            code="invalid-code-format",
        )


class InvalidNameError(ValidationError):
    """Raised when a display name lacks a first and last name."""

    def __init__(self, message: str = "Please enter both first and last name"):
        super().__init__(message, code="invalid-name")


class InvalidCodeError(VerificationError):
    """Raised when the provider rejects a verification code. The challenge stays usable."""

    def __init__(self):
        super().__init__(AUTH_ERROR_MESSAGES["invalid-code"], code="invalid-code")


class CodeRequestError(ExternalServiceError):
    """Raised when the provider refuses to send a verification code."""

    def __init__(self, condition: Optional[str], provider_message: Optional[str] = None):
        super().__init__(
            get_auth_error_message(condition),
            service="supabase-auth",
            code=condition or "code-request-failed",
            details={"provider_message": provider_message},
        )

    @property
    def status_code(self) -> int:
        return PROVIDER_CONDITION_STATUS.get(self.code, 400)


class InvalidTransitionError(ConflictError):
    """Raised when an action is not allowed in the flow's current step."""

    def __init__(self, action: str, step: str):
        super().__init__(
            f"Cannot {action} while in step '{step}'",
            code="invalid-transition",
            details={"action": action, "step": step},
        )


class FlowNotFoundError(NotFoundError):
    """Raised when a verification flow ID is unknown or already finished."""

    def __init__(self, flow_id: str):
        super().__init__(
            f"Verification flow not found: {flow_id}",
            code="FLOW_NOT_FOUND",
            details={"flow_id": flow_id},
        )
