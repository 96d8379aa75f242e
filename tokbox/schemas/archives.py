"""Archive (recording) value returned by the archive endpoints."""
from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import InvalidStateError
from .credentials import Issuer
from .sessions import Session


class Archive(BaseModel):
    """Snapshot of an archive at the time of a start or stop call.

    ``status`` is passed through verbatim (started, stopped, uploaded,
    failed, ...).
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = Field(..., min_length=1)
    session_id: str = Field(..., alias="sessionId")
    project_id: int = Field(default=0, alias="projectId")
    status: str = Field(default="")
    name: str | None = Field(default=None)
    has_audio: bool = Field(default=True, alias="hasAudio")
    has_video: bool = Field(default=True, alias="hasVideo")
    output_mode: str = Field(default="", alias="outputMode")
    resolution: str | None = Field(default=None)
    created_at: int = Field(default=0, alias="createdAt", description="Epoch milliseconds.")
    duration: int = Field(default=0, description="Length of the recording in seconds.")
    size: int = Field(default=0)
    url: str | None = Field(default=None, description="Download URL once uploaded.")
    reason: str | None = Field(default=None, description="Failure reason, if any.")
    session: Session | None = Field(default=None, exclude=True, repr=False)

    @property
    def created(self) -> datetime | None:
        if not self.created_at:
            return None
        return datetime.fromtimestamp(self.created_at / 1000, tz=timezone.utc)

    def require_session(self) -> tuple[Session, Issuer]:
        """Return the originating session and its issuer, failing if either is absent."""

        if self.session is None:
            raise InvalidStateError(f"Archive {self.id} has no originating session")
        return self.session, self.session.require_issuer()
