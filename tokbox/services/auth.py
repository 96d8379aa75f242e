"""API authentication for outbound TokBox calls."""
from __future__ import annotations

from ..schemas.credentials import Issuer
from . import signing

AUTH_HEADER = "X-OPENTOK-AUTH"


def produce_auth_assertion(issuer: Issuer) -> str:
    """Return an auth assertion valid from now for ``issuer.assertion_ttl`` seconds."""

    return signing.sign_auth_assertion(
        issuer.api_key,
        issuer.api_secret,
        ttl_seconds=issuer.assertion_ttl,
    )
