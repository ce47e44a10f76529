from supabase import AuthApiError, AuthRetryableError

from shared.exceptions import AuthorizationError, ExternalServiceError
from modules.auth.exceptions import InsufficientPermissionsError, ProviderAuthError


class TestProviderAuthError:
    def test_message_is_fixed_string(self):
        error = ProviderAuthError("wrong-password", "Invalid login credentials", 400)
        assert isinstance(error, ExternalServiceError)
        assert error.message == "Incorrect password"
        assert error.code == "wrong-password"
        assert error.details["provider_message"] == "Invalid login credentials"
        assert error.details["status"] == 400
        assert error.details["service"] == "supabase-auth"

    def test_unknown_condition(self):
        error = ProviderAuthError(None)
        assert error.code == "auth-error"
        assert error.message == "An error occurred. Please try again"

    def test_from_provider_maps_code(self):
        error = ProviderAuthError.from_provider(
            AuthApiError("Email address is invalid", 400, "email_address_invalid")
        )
        assert error.condition == "invalid-email"
        assert error.details["provider_message"] == "Email address is invalid"

    def test_from_provider_retryable_is_network_failure(self):
        error = ProviderAuthError.from_provider(AuthRetryableError("connection reset", 0))
        assert error.condition == "network-request-failed"

    def test_from_provider_rate_limit_status(self):
        error = ProviderAuthError.from_provider(AuthApiError("slow down", 429, None))
        assert error.condition == "too-many-requests"

    def test_from_provider_plain_exception(self):
        error = ProviderAuthError.from_provider(RuntimeError("boom"))
        assert error.condition is None
        assert error.details["provider_message"] == "boom"


class TestInsufficientPermissionsError:
    def test_details(self):
        error = InsufficientPermissionsError("can_manage_users", "leader")
        assert isinstance(error, AuthorizationError)
        assert error.code == "INSUFFICIENT_PERMISSIONS"
        assert error.details == {"permission": "can_manage_users", "user_role": "leader"}
