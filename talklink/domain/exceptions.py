"""Errors raised by talklink code.

Link resolution itself reports failures as results (LinkResult and
friends); these exceptions cover what must abort a request: bad admin
input, a missing admin token, a read-only settings backend. The API
turns them into JSON via talklink.core.exception_handlers.
"""

from typing import Any


class TalkLinkException(Exception):
    """Root of every talklink error; gateway errors derive from it too.

    Attributes:
        message: Text shown to the API client.
        error_code: Stable code the exception handler maps to an HTTP status.
        details: Extra JSON-safe context (field name, remote URL, ...).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = dict(details) if details else {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the API exception handler."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(TalkLinkException):
    """Admin input rejected: a required setting is blank or a URL is malformed.

    field is the camelCase request field, reported under details.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", {"field": field} if field else None)


class NotConfiguredException(TalkLinkException):
    """Raised when a feature needs configuration that is not present."""

    def __init__(
        self, message: str = "App is not configured. Please configure the settings first."
    ) -> None:
        super().__init__(message, "NOT_CONFIGURED")


class AuthenticationException(TalkLinkException):
    """Raised when an admin request carries a missing or wrong token."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class SettingsReadOnlyException(TalkLinkException):
    """Raised when saving settings while credentials come from the environment."""

    def __init__(self) -> None:
        super().__init__(
            "Settings are read from the environment and cannot be changed via the API",
            "SETTINGS_READ_ONLY",
        )
