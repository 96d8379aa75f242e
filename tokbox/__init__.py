"""Client for TokBox (OpenTok) sessions, participant tokens and archives."""
from .core.errors import (
    EmptyResultError,
    InvalidStateError,
    RemoteError,
    SigningError,
    TokboxError,
    TransportError,
)
from .schemas.archives import Archive
from .schemas.credentials import Issuer
from .schemas.sessions import ArchiveMode, MediaMode, Role, Session
from .services.archives import start_archiving, stop_archiving
from .services.auth import produce_auth_assertion
from .services.sessions import create_session
from .services.tokens import generate_token, issue_tokens

__all__ = [
    "Archive",
    "ArchiveMode",
    "EmptyResultError",
    "InvalidStateError",
    "Issuer",
    "MediaMode",
    "RemoteError",
    "Role",
    "Session",
    "SigningError",
    "TokboxError",
    "TransportError",
    "create_session",
    "generate_token",
    "issue_tokens",
    "produce_auth_assertion",
    "start_archiving",
    "stop_archiving",
]
