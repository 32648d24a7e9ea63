"""Infrastructure exceptions for calls to the remote Talk server.

Gateway errors extend TalkLinkException so presentation can map them
to HTTP responses consistently. Transport and protocol failures carry
different message prefixes so logs tell them apart.
"""

from talklink.domain.exceptions import TalkLinkException

TRANSPORT_ERROR_PREFIX = "HTTP request failed: "
JSON_ERROR_PREFIX = "Failed to parse JSON response: "
ENVELOPE_ERROR_PREFIX = "Invalid response from external server: "


class TalkGatewayError(TalkLinkException):
    """Base exception for remote Talk API calls."""


class RemoteTransportError(TalkGatewayError):
    """Connection failure, timeout, or non-2xx response."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        details: dict = {"url": url, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            f"{TRANSPORT_ERROR_PREFIX}{reason}",
            "REMOTE_TRANSPORT_ERROR",
            details,
        )


class RemoteProtocolError(TalkGatewayError):
    """Body is not JSON or lacks the expected OCS envelope."""

    def __init__(self, url: str, reason: str, *, invalid_json: bool = False) -> None:
        prefix = JSON_ERROR_PREFIX if invalid_json else ENVELOPE_ERROR_PREFIX
        super().__init__(
            f"{prefix}{reason}",
            "REMOTE_PROTOCOL_ERROR",
            {"url": url, "reason": reason},
        )
