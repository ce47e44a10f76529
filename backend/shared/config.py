"""
Centralized configuration for the Bible Study Hub backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, AUTH_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Bible Study Hub API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_db_url: str = ""

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:3000"
    magic_link_redirect_path: str = "/auth/verify"

    # Group reads are served from an in-process cache for this long
    group_cache_ttl_seconds: float = 30.0

    # Unfinished phone sign-ins are dropped after this long (matches the SMS code lifetime)
    verification_flow_ttl_seconds: float = 600.0
    verification_max_flows: int = 10_000

    # Shared secret sent by the auth webhook in the X-Webhook-Secret header
    auth_webhook_secret: str = ""

    @property
    def magic_link_redirect_url(self) -> str:
        """Where magic-link emails send the user back to."""
        return self.frontend_url.rstrip("/") + self.magic_link_redirect_path


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
