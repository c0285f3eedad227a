"""Exception hierarchy for boardmirror."""

from __future__ import annotations


class BoardMirrorError(Exception):
    """Base exception for all boardmirror errors."""


class ConfigError(BoardMirrorError):
    """Configuration loading or validation failure."""


class PersistenceError(BoardMirrorError):
    """Replica document cannot be read from or written to its backend."""


class RemoteFetchError(BoardMirrorError):
    """Remote service call failed or returned malformed data."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(RemoteFetchError):
    """Credentials are missing or were rejected by the remote service."""


class MalformedEventError(BoardMirrorError):
    """Webhook event is missing required correlation fields."""

    def __init__(self, message: str, *, kind: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind


class NotFoundError(BoardMirrorError):
    """Referenced board/list/card/checklist/check-item is absent locally."""
