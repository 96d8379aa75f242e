"""Session value and the enumerations accepted by the session API."""
from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import InvalidStateError
from .credentials import Issuer


class MediaMode(str, enum.Enum):
    """How streams travel between clients of a session."""

    # Streams go through the OpenTok Media Router.
    ROUTED = "disabled"
    # Clients try to connect directly and fall back to the TURN relay.
    RELAYED = "enabled"


class ArchiveMode(str, enum.Enum):
    MANUAL = "manual"
    ALWAYS = "always"


class Role(str, enum.Enum):
    """Participant role encoded into a token."""

    PUBLISHER = "publisher"
    SUBSCRIBER = "subscriber"
    # Publisher rights plus forceUnpublish()/forceDisconnect().
    MODERATOR = "moderator"


class Session(BaseModel):
    """A remote session as returned by ``/session/create``."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    session_id: str = Field(..., min_length=1)
    project_id: str = Field(default="")
    partner_id: str = Field(default="")
    created_at: str = Field(default="", alias="create_dt")
    status: str | None = Field(default=None, alias="session_status")
    media_server_url: str = Field(default="")
    issuer: Issuer | None = Field(default=None, exclude=True, repr=False)

    def require_issuer(self) -> Issuer:
        """Return the bound issuer or fail if the session was built without one."""

        if self.issuer is None:
            raise InvalidStateError(f"Session {self.session_id} is not bound to an issuer")
        return self.issuer
