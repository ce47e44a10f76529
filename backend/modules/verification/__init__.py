"""
Phone verification module.

Drives the SMS one-time-code sign-in wizard.

Public API:
- PhoneVerificationFlow: State machine for one sign-in
- FlowRegistry: Live flows keyed by ID
- IVerificationProvider: Interface to the SMS provider
- FlowStep, FlowStatus: Flow state as seen by callers
"""

from .interfaces import IVerificationProvider
from .models import FlowStep, FlowStatus, ConfirmationHandle
from .flow import PhoneVerificationFlow, FlowRegistry
from .validators import normalize_phone_number, validate_verification_code, validate_full_name
from .exceptions import (
    VerificationError,
    InvalidPhoneNumberError,
    InvalidCodeFormatError,
    InvalidCodeError,
    InvalidNameError,
    CodeRequestError,
    InvalidTransitionError,
    FlowNotFoundError,
)

__all__ = [
    "IVerificationProvider",
    "FlowStep",
    "FlowStatus",
    "ConfirmationHandle",
    "PhoneVerificationFlow",
    "FlowRegistry",
    "normalize_phone_number",
    "validate_verification_code",
    "validate_full_name",
    "VerificationError",
    "InvalidPhoneNumberError",
    "InvalidCodeFormatError",
    "InvalidCodeError",
    "InvalidNameError",
    "CodeRequestError",
    "InvalidTransitionError",
    "FlowNotFoundError",
]
