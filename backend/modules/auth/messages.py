"""
User-facing messages for identity provider errors.

Provider errors arrive as opaque codes. They are first normalised to a
small set of conditions, then mapped to fixed strings the UI can show.
"""

from typing import Optional

AUTH_ERROR_MESSAGES: dict[str, str] = {
    "invalid-email": "Invalid email address",
    "user-disabled": "This account has been disabled",
    "user-not-found": "No account found with this email",
    "wrong-password": "Incorrect password",
    "email-already-in-use": "An account with this email already exists",
    "weak-password": "Password should be at least 6 characters",
    "invalid-action-code": "This link is invalid or has expired",
    "expired-action-code": "This link has expired. Please request a new one",
    "too-many-requests": "Too many attempts. Please try again later",
    "network-request-failed": "Network error. Please check your connection",
    "invalid-phone-number": "Invalid phone number. Use the format +15551234567",
    "invalid-code": "Invalid verification code. Please try again",
    "phone-number-already-exists": "A user with this phone number already exists",
}

DEFAULT_AUTH_ERROR_MESSAGE = "An error occurred. Please try again"

# Supabase Auth error codes -> normalised conditions
PROVIDER_CODE_CONDITIONS: dict[str, str] = {
    "email_address_invalid": "invalid-email",
    "email_address_not_authorized": "invalid-email",
    "user_banned": "user-disabled",
    "user_not_found": "user-not-found",
    "invalid_credentials": "wrong-password",
    "email_exists": "email-already-in-use",
    "user_already_exists": "email-already-in-use",
    "weak_password": "weak-password",
    "bad_code_verifier": "invalid-action-code",
    "flow_state_not_found": "invalid-action-code",
    "otp_expired": "expired-action-code",
    "flow_state_expired": "expired-action-code",
    "over_request_rate_limit": "too-many-requests",
    "over_email_send_rate_limit": "too-many-requests",
    "over_sms_send_rate_limit": "too-many-requests",
    "phone_exists": "phone-number-already-exists",
}


def normalize_provider_code(code: Optional[str]) -> Optional[str]:
    """Map a raw provider code to a condition, passing known conditions through."""
    if not code:
        return None
    if code.startswith("auth/"):
        code = code[len("auth/"):]
    if code in AUTH_ERROR_MESSAGES:
        return code
    return PROVIDER_CODE_CONDITIONS.get(code)


def get_auth_error_message(code: Optional[str]) -> str:
    """Get a user-friendly message for a provider error code."""
    condition = normalize_provider_code(code)
    if condition is None:
        return DEFAULT_AUTH_ERROR_MESSAGE
    return AUTH_ERROR_MESSAGES[condition]
