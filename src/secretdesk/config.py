"""SecretDesk configuration with sensible defaults for development."""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(StrEnum):
    """Output format for the root log handler."""

    TEXT = "text"
    JSON = "json"


class Settings(BaseSettings):
    """
    SecretDesk configuration.

    All settings can be overridden via environment variables with SECRETDESK_ prefix.
    Defaults target a local orchestration server - no configuration needed
    to get started.
    """

    model_config = SettingsConfigDict(
        env_prefix="SECRETDESK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False
    log_format: LogFormat = LogFormat.TEXT

    # Orchestration server URL and REST prefix
    url: str = "http://localhost:8080"
    api_prefix: str = "/api"

    # Bearer token for authenticated access
    api_key: str | None = None

    request_timeout_seconds: float = 30.0

    # Read cache freshness window (0 keeps entries until invalidated)
    cache_ttl_seconds: float = 60.0

    # Environment mode
    env: str = "development"

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = f"/{value}"
        return value

    @property
    def base_url(self) -> str:
        """Absolute URL every API path is appended to."""
        return f"{self.url.rstrip('/')}{self.api_prefix}"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env in ("production", "prod")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
