"""Participant token issuance, single and batched."""
from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait

from ..core.config import settings
from ..core.errors import SigningError
from ..schemas.sessions import Role, Session
from . import signing

logger = logging.getLogger(__name__)


def generate_token(
    session: Session,
    role: Role | None = None,
    connection_data: str = "",
    expiration: int = 0,
    *,
    now: int | None = None,
    nonce: int | None = None,
) -> str:
    """Mint one participant token for ``session`` with its bound issuer."""

    issuer = session.require_issuer()
    return signing.sign_participant_token(
        issuer.api_key,
        issuer.api_secret,
        session.session_id,
        role=Role(role).value if role else None,
        connection_data=connection_data,
        expiration=expiration,
        now=now,
        nonce=nonce,
    )


def issue_tokens(
    session: Session,
    count: int,
    concurrent: bool = False,
    role: Role | None = None,
    connection_data: str = "",
    expiration: int = 0,
    *,
    max_workers: int | None = None,
) -> list[str]:
    """Mint ``count`` tokens, returning only the ones that signed successfully.

    Sequential mode keeps call order. Concurrent mode spreads the work over a
    thread pool and returns tokens in completion order.
    """

    session.require_issuer()
    if count <= 0:
        return []

    if not concurrent:
        tokens: list[str] = []
        for index in range(count):
            try:
                tokens.append(generate_token(session, role, connection_data, expiration))
            except SigningError as exc:
                logger.debug("Dropping token %d for session %s: %s", index, session.session_id, exc)
        return tokens

    collected: list[str] = []
    lock = threading.Lock()

    def _sign_one(index: int) -> None:
        try:
            token = generate_token(session, role, connection_data, expiration)
        except SigningError as exc:
            logger.debug("Dropping token %d for session %s: %s", index, session.session_id, exc)
            return
        with lock:
            collected.append(token)

    workers = min(count, max_workers or settings.batch_max_workers)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="tokbox-token") as pool:
        futures = [pool.submit(_sign_one, index) for index in range(count)]
        wait(futures)
    for future in futures:
        # Re-raise anything other than a dropped signing failure.
        future.result()

    logger.debug("Issued %d/%d tokens for session %s", len(collected), count, session.session_id)
    return collected
