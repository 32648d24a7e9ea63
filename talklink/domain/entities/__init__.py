"""Domain entities (no persistence; snapshots of remote data)."""

from talklink.domain.entities.notification import NotificationAction, NotificationRecord
from talklink.domain.entities.room import RemoteRoom

__all__ = ["NotificationAction", "NotificationRecord", "RemoteRoom"]
