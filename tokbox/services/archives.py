"""Archive start/stop for a session."""
from __future__ import annotations

import logging

import httpx

from ..schemas.archives import Archive
from ..schemas.sessions import Session
from . import http

START_ARCHIVE_PATH = "/v2/project/{api_key}/archive"
STOP_ARCHIVE_PATH = "/v2/project/{api_key}/archive/{archive_id}/stop"

logger = logging.getLogger(__name__)


def start_archiving(
    session: Session,
    has_audio: bool = True,
    has_video: bool = True,
    *,
    client: httpx.Client | None = None,
    timeout: float | None = None,
) -> Archive:
    """Start recording ``session`` and return the new archive."""

    issuer = session.require_issuer()
    url = issuer.api_host.rstrip("/") + START_ARCHIVE_PATH.format(api_key=issuer.api_key)
    response = http.post(
        issuer,
        url,
        client=client,
        timeout=timeout,
        json={
            "sessionId": session.session_id,
            "hasAudio": has_audio,
            "hasVideo": has_video,
        },
    )

    archive = Archive.model_validate({**response.json(), "session": session})
    logger.info("Started archive %s for session %s (status=%s)", archive.id, session.session_id, archive.status)
    return archive


def stop_archiving(
    archive: Archive,
    *,
    client: httpx.Client | None = None,
    timeout: float | None = None,
) -> Archive:
    """Stop ``archive`` and return the server's updated view of it.

    The result is a new value; the archive passed in is left untouched.
    """

    session, issuer = archive.require_session()
    url = issuer.api_host.rstrip("/") + STOP_ARCHIVE_PATH.format(
        api_key=issuer.api_key,
        archive_id=archive.id,
    )
    response = http.post(
        issuer,
        url,
        client=client,
        timeout=timeout,
        headers={"Content-Type": "application/json"},
        content=b"",
    )

    stopped = Archive.model_validate({**response.json(), "session": session})
    logger.info("Stopped archive %s (status=%s)", stopped.id, stopped.status)
    return stopped
