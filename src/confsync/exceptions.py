"""Custom exception hierarchy for confsync."""

from __future__ import annotations


class ConfsyncError(Exception):
    """Base exception for all confsync errors."""


class ConfsyncConfigError(ConfsyncError):
    """Invalid or missing configuration."""


class ConfsyncDispatchError(ConfsyncError):
    """Dispatch pipeline failure."""

    def __init__(
        self,
        message: str,
        *,
        kind: str = "",
    ) -> None:
        self.kind = kind
        super().__init__(message)


class ConfsyncDispatchLoopError(ConfsyncDispatchError):
    """Nested dispatch exceeded the configured maximum depth.

    Raised when middleware keeps re-dispatching follow-up events without
    the chain ever settling.  ``depth`` is the depth that was rejected.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: str = "",
        depth: int = 0,
    ) -> None:
        self.depth = depth
        super().__init__(message, kind=kind)
