"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The container is created in the app lifespan and closed at shutdown,
which also discards any verification flows still in progress.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.profiles.interfaces import IProfileService
    from modules.groups.interfaces import IGroupService
    from modules.admin.interfaces import IAdminService
    from modules.verification.interfaces import IVerificationProvider
    from modules.verification.flow import FlowRegistry, PhoneVerificationFlow


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._profile_service: "IProfileService | None" = None
        self._group_service: "IGroupService | None" = None
        self._admin_service: "IAdminService | None" = None
        self._verification_provider: "IVerificationProvider | None" = None
        self._verification_flows: "FlowRegistry | None" = None

    @property
    def profiles(self) -> "IProfileService":
        """Get the profile service instance."""
        if self._profile_service is None:
            from modules.profiles.repository import ProfileRepository
            from modules.profiles.service import ProfileService
            from shared.database import get_supabase_client
            self._profile_service = ProfileService(ProfileRepository(get_supabase_client()))
        return self._profile_service

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(profiles=self.profiles)
        return self._auth_service

    @property
    def groups(self) -> "IGroupService":
        """Get the group service instance (owns the group query cache)."""
        if self._group_service is None:
            from modules.groups.repository import GroupRepository
            from modules.groups.service import GroupService
            from shared.database import get_supabase_client
            from shared.config import get_settings
            from shared.query_cache import QueryCache
            self._group_service = GroupService(
                repository=GroupRepository(get_supabase_client()),
                profiles=self.profiles,
                cache=QueryCache(ttl_seconds=get_settings().group_cache_ttl_seconds),
            )
        return self._group_service

    @property
    def admin(self) -> "IAdminService":
        """Get the admin service instance."""
        if self._admin_service is None:
            from modules.admin.service import AdminService
            from shared.database import get_supabase_client
            self._admin_service = AdminService(get_supabase_client(), self.profiles)
        return self._admin_service

    @property
    def verification_provider(self) -> "IVerificationProvider":
        """Get the SMS verification provider."""
        if self._verification_provider is None:
            from modules.verification.provider import SupabasePhoneProvider
            self._verification_provider = SupabasePhoneProvider()
        return self._verification_provider

    @property
    def verification_flows(self) -> "FlowRegistry":
        """Get the registry of live phone verification flows."""
        if self._verification_flows is None:
            from modules.verification.flow import FlowRegistry
            from shared.config import get_settings
            settings = get_settings()
            self._verification_flows = FlowRegistry(
                self.new_verification_flow,
                ttl_seconds=settings.verification_flow_ttl_seconds,
                max_flows=settings.verification_max_flows,
            )
        return self._verification_flows

    def new_verification_flow(self) -> "PhoneVerificationFlow":
        """Build a flow with its own session manager."""
        from modules.auth.session import SessionManager
        from modules.verification.flow import PhoneVerificationFlow
        return PhoneVerificationFlow(
            provider=self.verification_provider,
            profiles=self.profiles,
            sessions=SessionManager(self.auth),
        )

    def close(self) -> None:
        """Dispose of resources held by services (live flows and their sessions)."""
        if self._verification_flows is not None:
            self._verification_flows.close()
        self.reset()

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._profile_service = None
        self._group_service = None
        self._admin_service = None
        self._verification_provider = None
        self._verification_flows = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Close and drop the service container.

    The next call to get_container() creates a fresh container with new
    service instances. Used at shutdown and in tests.
    """
    global _container
    if _container is not None:
        _container.close()
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_profile_service() -> "IProfileService":
    """FastAPI dependency for profile service."""
    return get_container().profiles


def get_group_service() -> "IGroupService":
    """FastAPI dependency for group service."""
    return get_container().groups


def get_admin_service() -> "IAdminService":
    """FastAPI dependency for admin service."""
    return get_container().admin


def get_verification_flows() -> "FlowRegistry":
    """FastAPI dependency for the verification flow registry."""
    return get_container().verification_flows
