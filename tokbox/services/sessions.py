"""Session creation against the TokBox REST API."""
from __future__ import annotations

import logging

import httpx

from ..core.errors import EmptyResultError, RemoteError
from ..schemas.credentials import Issuer
from ..schemas.sessions import ArchiveMode, MediaMode, Session
from . import http

SESSION_CREATE_PATH = "/session/create"

logger = logging.getLogger(__name__)


def create_session(
    issuer: Issuer,
    location: str = "",
    media_mode: MediaMode = MediaMode.ROUTED,
    archive_mode: ArchiveMode = ArchiveMode.MANUAL,
    *,
    client: httpx.Client | None = None,
    timeout: float | None = None,
) -> Session:
    """Create a remote session and return it bound to ``issuer``.

    ``location`` is an IP address hint for picking the media server; it is
    left out of the request when empty.
    """

    params: dict[str, str] = {}
    if location:
        params["location"] = location
    params["p2p.preference"] = MediaMode(media_mode).value
    params["archiveMode"] = ArchiveMode(archive_mode).value

    response = http.post(
        issuer,
        issuer.session_endpoint + SESSION_CREATE_PATH,
        client=client,
        timeout=timeout,
        headers={"Accept": "application/json"},
        data=params,
    )

    payload = response.json()
    if not isinstance(payload, list):
        raise RemoteError(response.status_code, response.text, "Unexpected session payload from Tokbox")
    if not payload:
        raise EmptyResultError(response.status_code, response.text)

    session = Session.model_validate({**payload[0], "issuer": issuer})
    logger.info("Created session %s (media_mode=%s)", session.session_id, params["p2p.preference"])
    return session
