"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Remote pricing/booking API
    api_base_url: str = "https://relay.api.opstack.uk"
    api_timeout_seconds: float = 5.0

    # Tenant (must match backend tenant ID)
    tenant_id: str = "TENANT#001"
    site_name: str = "The Dorset Transfer Company"
    site_url: str = "https://dorsettransfercompany.co.uk"

    # Edge redirect
    legacy_host: str = "dorsettransfercompany.flowency.build"
    canonical_host: str = "dorsettransfercompany.opstack.uk"

    # Quote defaults
    quote_default_expiry_hours: int = 48
    hourly_min_hours: int = 4
    hourly_max_hours: int = 12
    default_passengers: int = 2

    # Corporate logo upload
    logo_max_bytes: int = 2 * 1024 * 1024

    # Chat widget
    chat_channel: str = "web"
    chat_retry_message: str = "Sorry, I couldn't process that. Please try again."

    # Health checks
    enable_upstream_healthcheck: bool = True

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
