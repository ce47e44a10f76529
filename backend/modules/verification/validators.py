"""
Input checks run before any call to the identity provider.
"""

import re

from .exceptions import InvalidPhoneNumberError, InvalidCodeFormatError, InvalidNameError

E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")
CODE_PATTERN = re.compile(r"^\d{6}$")
_PHONE_SEPARATORS = re.compile(r"[\s\-().]")


def normalize_phone_number(raw: str) -> str:
    """
    Return the E.164 form of a phone number.

    Spaces, dashes, dots and parentheses are dropped; the result must be
    '+' followed by up to 15 digits with a non-zero leading digit.

    Raises:
        InvalidPhoneNumberError: If the number is not well formed
    """
    candidate = _PHONE_SEPARATORS.sub("", raw or "")
    if not E164_PATTERN.match(candidate):
        raise InvalidPhoneNumberError(raw or "")
    return candidate


def validate_verification_code(code: str) -> str:
    """
    Raises:
        InvalidCodeFormatError: Unless code is exactly six digits
    """
    candidate = (code or "").strip()
    if not CODE_PATTERN.match(candidate):
        raise InvalidCodeFormatError()
    return candidate


def validate_full_name(name: str) -> str:
    """
    Require a first and a last name.

    Returns:
        The name with surrounding and repeated whitespace collapsed.

    Raises:
        InvalidNameError: If fewer than two whitespace-separated tokens remain
    """
    tokens = (name or "").split()
    if not tokens:
        raise InvalidNameError("Full name is required")
    if len(tokens) < 2:
        raise InvalidNameError()
    return " ".join(tokens)
