"""
Application settings loaded from environment variables.
Uses pydantic-settings for type-safe configuration.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with defaults for development."""

    # Upstream REST backend
    # Host (and optional port) without scheme, e.g. "api.example.com"
    api_url: str = "localhost:8000"
    api_version: str = "v2"
    api_scheme: str = "https"
    api_timeout_seconds: float = 30.0

    # Key-value store for tokens and onboarding snapshots
    # "redis" in deployments, "memory" for local development and tests
    kv_backend: str = "redis"
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout: int = 5
    kv_key_prefix: str = "backoffice"

    # Token storage
    # Session tokens expire, persistent tokens ("remember me") do not
    session_token_ttl_seconds: int = 8 * 60 * 60

    # Browser identity cookie (stands in for per-browser storage)
    client_cookie_name: str = "backoffice_client"
    client_cookie_max_age: int = 365 * 24 * 60 * 60
    cookie_secure: bool = False
    cookie_samesite: str = "lax"

    # Navigation
    login_path: str = "/login"
    restaurant_detail_path: str = "/admin/restaurants/detail/{restaurant_id}"

    # POS providers
    mpluskassa_host: str = "api.mpluskassa.nl"

    # Public QR links
    qr_box_size: int = 10
    qr_border: int = 4

    # Comma-separated list of allowed origins (empty uses default localhost list)
    allowed_origins: str = ""

    # Server
    port: int = 3000
    default_locale: str = "nl"

    # Environment
    environment: str = "development"
    debug: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def api_base_url(self) -> str:
        """Full base URL of the backend including the version segment."""
        return f"{self.api_scheme}://{self.api_url.rstrip('/')}/{self.api_version}"

    def validate_production_settings(self) -> list[str]:
        """
        Validate that the configuration is usable in production.
        Returns a list of validation errors. Empty list means all checks pass.
        """
        errors = []

        if self.environment == "production":
            if self.api_scheme != "https":
                errors.append("API_SCHEME must be https in production")

            if self.debug:
                errors.append("DEBUG must be False in production")

            if self.kv_backend != "redis":
                errors.append(
                    "KV_BACKEND must be redis in production (memory store is per-process)"
                )

            if not self.cookie_secure:
                errors.append("COOKIE_SECURE must be True in production")

            if not self.allowed_origins:
                errors.append(
                    "ALLOWED_ORIGINS must be set in production (comma-separated list of allowed domains)"
                )

        if self.kv_backend not in ("redis", "memory"):
            errors.append(f"KV_BACKEND must be 'redis' or 'memory', got '{self.kv_backend}'")

        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience exports
settings = get_settings()

# Direct access to commonly used settings
API_BASE_URL = settings.api_base_url
REDIS_URL = settings.redis_url
