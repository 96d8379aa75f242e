"""Credential value used to sign every outbound call and participant token."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..core.config import Settings, get_settings
from ..core.errors import InvalidStateError


class Issuer(BaseModel):
    """Long-lived API key and secret for one TokBox project.

    Sessions and archives keep a reference to the issuer that created them so
    later calls can be signed with the same credentials.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str
    api_secret: str = Field(..., repr=False)
    override_endpoint: str | None = Field(
        default=None,
        description="Alternative endpoint for session creation (beta programmes).",
    )
    api_host: str = Field(default_factory=lambda: get_settings().api_host)
    assertion_ttl: int = Field(
        default_factory=lambda: get_settings().assertion_ttl_seconds,
        ge=1,
        description="Seconds an API auth assertion stays valid.",
    )

    @property
    def session_endpoint(self) -> str:
        """Base URL used for session creation."""

        return (self.override_endpoint or self.api_host).rstrip("/")

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "Issuer":
        """Build an issuer from ``TOKBOX_*`` settings."""

        config = config or get_settings()
        if not config.api_key or not config.api_secret:
            raise InvalidStateError("TOKBOX_API_KEY and TOKBOX_API_SECRET must be configured")
        return cls(
            api_key=config.api_key,
            api_secret=config.api_secret,
            override_endpoint=config.override_endpoint,
            api_host=config.api_host,
            assertion_ttl=config.assertion_ttl_seconds,
        )
