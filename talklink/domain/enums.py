"""Domain enumerations: search fields, HTTP verbs, failure kinds."""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class SearchField(_ValuesMixin, str, Enum):
    """Room attribute the matcher compares against. None means auto (all tiers)."""

    TOKEN = "token"
    OBJECT_ID = "objectId"
    NAME = "name"
    DISPLAY_NAME = "displayName"


class HttpMethod(_ValuesMixin, str, Enum):
    """HTTP verbs a notification action may be executed with."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, raw: str) -> "HttpMethod":
        """Return the member for raw (case-insensitive).

        Raises:
            ValueError: If raw is not a supported verb.
        """
        try:
            return cls(raw.strip().upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {raw!r}") from None


class LinkFailure(_ValuesMixin, str, Enum):
    """Why link resolution failed."""

    NOT_CONFIGURED = "not_configured"
    IDENTIFIER_REQUIRED = "identifier_required"
    REMOTE_ERROR = "remote_error"
    NOT_FOUND = "not_found"
    TOKEN_MISSING = "token_missing"
