"""Signature primitives for TokBox credentials.

Two formats are produced here:

* the API auth assertion sent as ``X-OPENTOK-AUTH`` on every REST call, an
  HS256 JWT carrying ``ist=project``;
* the participant token handed to clients, a legacy ``T1==`` string holding
  an HMAC-SHA1 signed, form-encoded field list.

The remote verifier re-derives the participant signature from the exact
data string, so field order and escaping must not change.
"""
from __future__ import annotations

import base64
import binascii
import enum
import hmac
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import parse_qsl, quote_plus

import jwt

from ..core.config import DEFAULT_ASSERTION_TTL_SECONDS
from ..core.errors import SigningError

TOKEN_PREFIX = "T1=="
NONCE_CEILING = 999_999
ASSERTION_ALGORITHM = "HS256"


@dataclass(slots=True, frozen=True)
class ParticipantTokenData:
    """Decoded contents of a participant token."""

    partner_id: str
    signature: str
    data: str
    fields: dict[str, str]


def _utc_now() -> int:
    return int(datetime.now(timezone.utc).timestamp())


def _hmac_hexdigest(secret: str, message: str, digestmod: str = "sha1") -> str:
    if not secret:
        raise SigningError("API secret is empty")
    try:
        mac = hmac.new(secret.encode("utf-8"), message.encode("utf-8"), digestmod)
        return mac.hexdigest()
    except (TypeError, ValueError) as exc:
        raise SigningError(f"HMAC computation failed: {exc}") from exc


def sign_auth_assertion(
    api_key: str,
    api_secret: str,
    *,
    ttl_seconds: int = DEFAULT_ASSERTION_TTL_SECONDS,
    now: int | None = None,
    assertion_id: str | None = None,
) -> str:
    """Return a signed JWT authorising one REST call for the project."""

    if not api_secret:
        raise SigningError("API secret is empty")

    issued_at = _utc_now() if now is None else now
    claims = {
        "ist": "project",
        "iss": api_key,
        "iat": issued_at,
        "exp": issued_at + ttl_seconds,
        "jti": assertion_id or str(uuid.uuid4()),
    }
    try:
        return jwt.encode(claims, api_secret, algorithm=ASSERTION_ALGORITHM)
    except jwt.PyJWTError as exc:
        raise SigningError(f"Could not sign auth assertion: {exc}") from exc


def build_token_data(
    session_id: str,
    *,
    create_time: int,
    nonce: int,
    role: str | enum.Enum | None = None,
    connection_data: str = "",
    expiration: int = 0,
) -> str:
    """Build the ordered, form-encoded field list covered by the token signature."""

    fields: list[tuple[str, object]] = [
        ("session_id", session_id),
        ("create_time", create_time),
    ]
    if expiration > 0:
        fields.append(("expire_time", create_time + expiration))
    if role:
        fields.append(("role", role.value if isinstance(role, enum.Enum) else role))
    if connection_data:
        fields.append(("connection_data", connection_data))
    fields.append(("nonce", nonce))
    return "&".join(f"{key}={quote_plus(str(value))}" for key, value in fields)


def sign_participant_token(
    api_key: str,
    api_secret: str,
    session_id: str,
    *,
    role: str | enum.Enum | None = None,
    connection_data: str = "",
    expiration: int = 0,
    now: int | None = None,
    nonce: int | None = None,
) -> str:
    """Return a ``T1==`` participant token for ``session_id``.

    ``expiration`` is a number of seconds after ``now``; zero or less leaves
    the expiry to the server default.
    """

    data = build_token_data(
        session_id,
        create_time=_utc_now() if now is None else now,
        nonce=secrets.randbelow(NONCE_CEILING) if nonce is None else nonce,
        role=role,
        connection_data=connection_data,
        expiration=expiration,
    )
    signature = _hmac_hexdigest(api_secret, data)
    pre_coded = f"partner_id={api_key}&sig={signature}:{data}"
    return TOKEN_PREFIX + base64.b64encode(pre_coded.encode("utf-8")).decode("ascii")


def decode_participant_token(token: str) -> ParticipantTokenData:
    """Split a participant token back into its partner id, signature and fields."""

    if not token.startswith(TOKEN_PREFIX):
        raise ValueError("Participant token must start with T1==")
    try:
        pre_coded = base64.b64decode(token[len(TOKEN_PREFIX):], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ValueError("Participant token payload is not valid base64") from exc

    head, sep, rest = pre_coded.partition("&sig=")
    if not sep or not head.startswith("partner_id="):
        raise ValueError("Participant token is missing partner_id or sig")
    signature, sep, data = rest.partition(":")
    if not sep:
        raise ValueError("Participant token signature has no data section")

    return ParticipantTokenData(
        partner_id=head[len("partner_id="):],
        signature=signature,
        data=data,
        fields=dict(parse_qsl(data, keep_blank_values=True)),
    )


def verify_participant_token(token: str, api_secret: str) -> bool:
    """Check the embedded HMAC-SHA1 signature against ``api_secret``."""

    decoded = decode_participant_token(token)
    expected = _hmac_hexdigest(api_secret, decoded.data)
    return hmac.compare_digest(decoded.signature, expected)
