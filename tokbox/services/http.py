"""httpx plumbing shared by the session and archive calls."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.config import Settings, get_settings
from ..core.errors import RemoteError, TransportError
from ..schemas.credentials import Issuer
from .auth import AUTH_HEADER, produce_auth_assertion

logger = logging.getLogger(__name__)


def build_client(
    config: Settings | None = None,
    *,
    timeout: float | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Client:
    """Create an ``httpx.Client`` with the configured timeout and user agent.

    A ``None`` timeout (the default) means no deadline: the call waits until
    the transport itself fails.
    """

    config = config or get_settings()
    headers: dict[str, str] = {"User-Agent": config.user_agent}
    if extra_headers:
        headers.update(extra_headers)
    effective = timeout if timeout is not None else config.http_timeout_seconds
    return httpx.Client(timeout=httpx.Timeout(effective), headers=headers)


def post(
    issuer: Issuer,
    url: str,
    *,
    client: httpx.Client | None = None,
    timeout: float | None = None,
    headers: dict[str, str] | None = None,
    **request_kwargs: Any,
) -> httpx.Response:
    """POST to the TokBox API with a fresh auth assertion.

    Returns the response only for HTTP 200. Any other status raises
    ``RemoteError`` carrying the full body text; connection failures and
    timeouts raise ``TransportError``.
    """

    request_headers = {AUTH_HEADER: produce_auth_assertion(issuer)}
    if headers:
        request_headers.update(headers)

    try:
        if client is None:
            with build_client(timeout=timeout) as owned:
                response = owned.post(url, headers=request_headers, **request_kwargs)
        else:
            per_request = timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT
            response = client.post(url, headers=request_headers, timeout=per_request, **request_kwargs)
    except httpx.RequestError as exc:
        raise TransportError(f"Request to {url} failed: {exc}") from exc

    if response.status_code != 200:
        raise RemoteError(response.status_code, response.text)
    logger.debug("POST %s -> %s", url, response.status_code)
    return response
