"""Request context management using contextvars.

Async-safe storage for the current request id so log records emitted
while serving a request can be correlated.

Usage:
    token = set_request_id("abc123")
    request_id = get_request_id()
    reset_request_id(token)
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> Token:
    """Set the request id for the current task; returns a token for reset."""
    return _request_id.set(request_id)


def get_request_id() -> str | None:
    """Return the request id of the current task, or None outside requests."""
    return _request_id.get()


def reset_request_id(token: Token) -> None:
    """Restore the previous request id (call when the request finishes)."""
    _request_id.reset(token)
