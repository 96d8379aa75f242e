"""Tests for auth assertions and participant token signing."""
from __future__ import annotations

import base64
import hashlib
import hmac

import jwt
import pytest

from tokbox.core.config import DEFAULT_ASSERTION_TTL_SECONDS
from tokbox.core.errors import SigningError
from tokbox.schemas.credentials import Issuer
from tokbox.schemas.sessions import Role
from tokbox.services import signing
from tokbox.services.auth import produce_auth_assertion

API_KEY = "123456"
API_SECRET = "0123456789abcdef0123456789abcdef01234567"
SESSION_ID = "1_MX4xMjM0NTZ-fjE3MDAwMDAwMDB-fn4"
FIXED_NOW = 1_700_000_000


def test_build_token_data_orders_and_escapes_fields() -> None:
    data = signing.build_token_data(
        SESSION_ID,
        create_time=FIXED_NOW,
        nonce=42,
        role="publisher",
        connection_data="name=Jo Doe&team=a/b",
        expiration=3600,
    )

    assert data == (
        f"session_id={SESSION_ID}"
        "&create_time=1700000000"
        "&expire_time=1700003600"
        "&role=publisher"
        "&connection_data=name%3DJo+Doe%26team%3Da%2Fb"
        "&nonce=42"
    )


@pytest.mark.parametrize(
    ("role", "connection_data", "expiration", "expected_keys"),
    [
        (None, "", 0, ["session_id", "create_time", "nonce"]),
        ("subscriber", "", 0, ["session_id", "create_time", "role", "nonce"]),
        (None, "user=1", 0, ["session_id", "create_time", "connection_data", "nonce"]),
        (None, "", 60, ["session_id", "create_time", "expire_time", "nonce"]),
        (None, "", -5, ["session_id", "create_time", "nonce"]),
        (
            "moderator",
            "user=1",
            60,
            ["session_id", "create_time", "expire_time", "role", "connection_data", "nonce"],
        ),
    ],
)
def test_token_data_starts_with_session_and_ends_with_nonce(role, connection_data, expiration, expected_keys) -> None:
    token = signing.sign_participant_token(
        API_KEY,
        API_SECRET,
        SESSION_ID,
        role=role,
        connection_data=connection_data,
        expiration=expiration,
    )
    data = signing.decode_participant_token(token).data

    assert data.startswith("session_id=")
    assert data.rsplit("&", 1)[-1].startswith("nonce=")
    assert [pair.split("=", 1)[0] for pair in data.split("&")] == expected_keys


def test_participant_token_is_deterministic_for_fixed_time_and_nonce() -> None:
    kwargs = dict(role="publisher", connection_data="x", expiration=300, now=FIXED_NOW, nonce=7)

    first = signing.sign_participant_token(API_KEY, API_SECRET, SESSION_ID, **kwargs)
    second = signing.sign_participant_token(API_KEY, API_SECRET, SESSION_ID, **kwargs)

    assert first == second


def test_participant_token_layout_and_signature_round_trip() -> None:
    token = signing.sign_participant_token(
        API_KEY, API_SECRET, SESSION_ID, role="publisher", expiration=86400, now=FIXED_NOW, nonce=123
    )

    assert token.startswith("T1==")
    pre_coded = base64.b64decode(token[4:]).decode()
    assert pre_coded.startswith(f"partner_id={API_KEY}&sig=")

    decoded = signing.decode_participant_token(token)
    expected_sig = hmac.new(API_SECRET.encode(), decoded.data.encode(), hashlib.sha1).hexdigest()

    assert decoded.partner_id == API_KEY
    assert decoded.signature == expected_sig
    assert decoded.fields["expire_time"] == str(FIXED_NOW + 86400)
    assert decoded.fields["nonce"] == "123"
    assert signing.verify_participant_token(token, API_SECRET)
    assert not signing.verify_participant_token(token, "another-secret")


def test_nonce_stays_below_ceiling(monkeypatch) -> None:
    seen: list[int] = []

    def fake_randbelow(ceiling: int) -> int:
        seen.append(ceiling)
        return ceiling - 1

    monkeypatch.setattr(signing.secrets, "randbelow", fake_randbelow)

    token = signing.sign_participant_token(API_KEY, API_SECRET, SESSION_ID)

    assert seen == [999_999]
    assert signing.decode_participant_token(token).fields["nonce"] == "999998"


def test_participant_token_requires_secret() -> None:
    with pytest.raises(SigningError):
        signing.sign_participant_token(API_KEY, "", SESSION_ID)


@pytest.mark.parametrize("bad_token", ["abc", "T1==!!!notbase64", "T1==" + base64.b64encode(b"junk").decode()])
def test_decode_rejects_malformed_tokens(bad_token: str) -> None:
    with pytest.raises(ValueError):
        signing.decode_participant_token(bad_token)


def test_auth_assertion_claims_with_fixed_clock(monkeypatch) -> None:
    monkeypatch.setattr(signing, "_utc_now", lambda: FIXED_NOW)

    token = signing.sign_auth_assertion(API_KEY, API_SECRET)

    assert token.count(".") == 2
    header = jwt.get_unverified_header(token)
    assert header["alg"] == "HS256"
    claims = jwt.decode(token, API_SECRET, algorithms=["HS256"], options={"verify_exp": False})
    assert claims["iss"] == API_KEY
    assert claims["ist"] == "project"
    assert claims["iat"] == FIXED_NOW
    assert claims["exp"] == FIXED_NOW + DEFAULT_ASSERTION_TTL_SECONDS
    assert len(claims["jti"]) == 36


def test_auth_assertions_have_unique_ids() -> None:
    first = jwt.decode(signing.sign_auth_assertion(API_KEY, API_SECRET), API_SECRET, algorithms=["HS256"])
    second = jwt.decode(signing.sign_auth_assertion(API_KEY, API_SECRET), API_SECRET, algorithms=["HS256"])

    assert first["jti"] != second["jti"]


def test_issuer_ttl_drives_assertion_expiry(monkeypatch) -> None:
    monkeypatch.setattr(signing, "_utc_now", lambda: FIXED_NOW)
    issuer = Issuer(api_key=API_KEY, api_secret=API_SECRET, assertion_ttl=300)

    claims = jwt.decode(
        produce_auth_assertion(issuer), API_SECRET, algorithms=["HS256"], options={"verify_exp": False}
    )

    assert claims["exp"] - claims["iat"] == 300


def test_auth_assertion_requires_secret() -> None:
    with pytest.raises(SigningError):
        signing.sign_auth_assertion(API_KEY, "")


@pytest.mark.parametrize("role", [Role.MODERATOR, "moderator"])
def test_participant_token_writes_role_value(role) -> None:
    token = signing.sign_participant_token(API_KEY, API_SECRET, SESSION_ID, role=role, now=FIXED_NOW, nonce=1)

    data = signing.decode_participant_token(token).data

    assert "&role=moderator&" in data
    assert "Role." not in data
