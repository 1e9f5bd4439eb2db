"""Custom exception hierarchy."""

from __future__ import annotations

from typing import Any


class ChainError(Exception):
    """Base exception for all library errors."""

    pass


class TransportError(ChainError):
    """Error talking to the remote RPC node."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportTimeout(TransportError):
    """Request did not complete within its timeout.

    Timeouts are the one failure the scanners treat as transient: a history
    window that times out is re-issued until it succeeds.
    """

    def __init__(self, message: str, timeout: float | None = None) -> None:
        super().__init__(message)
        self.timeout = timeout


class RateLimitError(TransportError):
    """Node rate limit exceeded."""

    def __init__(self, message: str, retry_after: int = 60) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class RpcError(TransportError):
    """Node answered with a JSON error body.

    nodeos reports failures as ``{"code": 500, "message": ..., "error": {...}}``;
    the ``error`` object is kept for diagnostics.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.error = error or {}

    @property
    def name(self) -> str | None:
        """Symbolic error name reported by the node (e.g. ``unknown_key``)."""
        return self.error.get("name")


class MissingCursorKey(ChainError):
    """Truncated page whose rows do not carry the configured primary key.

    Cursor pagination cannot continue without it, so the scan is aborted
    instead of returning a silently incomplete result.
    """

    def __init__(self, message: str, primary_key: str, row: Any = None) -> None:
        super().__init__(message)
        self.primary_key = primary_key
        self.row = row


class InvalidRange(ChainError, ValueError):
    """Requested window or range is invalid (e.g. negative length)."""

    pass


class MalformedResponseError(ChainError):
    """Response does not contain the expected payload."""

    pass


class PermissionNotFoundError(ChainError):
    """Account has no permission with the requested name."""

    def __init__(self, message: str, account: str, permission: str) -> None:
        super().__init__(message)
        self.account = account
        self.permission = permission


class SignatureError(ChainError):
    """Signature could not be decoded or no key could be recovered from it."""

    pass
