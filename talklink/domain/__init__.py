"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from talklink.domain.entities import NotificationAction, NotificationRecord, RemoteRoom
from talklink.domain.enums import HttpMethod, LinkFailure, SearchField
from talklink.domain.exceptions import (
    AuthenticationException,
    NotConfiguredException,
    SettingsReadOnlyException,
    TalkLinkException,
    ValidationException,
)

__all__ = [
    # Entities
    "NotificationAction",
    "NotificationRecord",
    "RemoteRoom",
    # Enums
    "HttpMethod",
    "LinkFailure",
    "SearchField",
    # Exceptions
    "AuthenticationException",
    "NotConfiguredException",
    "SettingsReadOnlyException",
    "TalkLinkException",
    "ValidationException",
]
