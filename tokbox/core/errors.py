"""Error types raised by the TokBox client."""
from __future__ import annotations


class TokboxError(RuntimeError):
    """Base class for every error raised by this package."""


class SigningError(TokboxError):
    """Raised when an HMAC signature or JWT assertion cannot be produced."""


class InvalidStateError(TokboxError):
    """Raised when a value lacks the back-reference an operation needs."""


class TransportError(TokboxError):
    """Raised when a request could not be sent or its response not received."""


class RemoteError(TokboxError):
    """Raised when the TokBox API answers with a non-200 status."""

    def __init__(self, status_code: int, body: str = "", message: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Tokbox returned error code: {status_code}. Message: {body}")


class EmptyResultError(RemoteError):
    """Raised when session creation succeeds but returns no session."""

    def __init__(self, status_code: int = 200, body: str = "") -> None:
        super().__init__(status_code, body, "Tokbox did not return a session")
