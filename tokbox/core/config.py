"""Runtime configuration for the TokBox client."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Two days. The service documents a 5 minute maximum for assertions.
DEFAULT_ASSERTION_TTL_SECONDS = 2 * 24 * 60 * 60

DEFAULT_API_HOST = "https://api.opentok.com"


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TOKBOX_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="")
    api_secret: str = Field(default="", repr=False)
    api_host: str = Field(default=DEFAULT_API_HOST, min_length=8)
    override_endpoint: str | None = Field(
        default=None,
        description="Beta programme endpoint used for session creation.",
    )

    assertion_ttl_seconds: int = Field(default=DEFAULT_ASSERTION_TTL_SECONDS, ge=1)
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Transport timeout; unset means calls block until the transport gives up.",
    )
    batch_max_workers: int = Field(default=8, ge=1, le=256)
    user_agent: str = Field(default="tokbox-python/0.1", min_length=1)

    @field_validator("api_host", "override_endpoint", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: object) -> object:
        """Allow hosts configured with a trailing slash."""

        if isinstance(value, str):
            stripped = value.strip().rstrip("/")
            return stripped or None
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


settings = get_settings()
