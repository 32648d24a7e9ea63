"""Remote room entity.

Immutable snapshot of one room as listed by the remote Talk server. Rooms
are fetched fresh for every operation and never persisted.
"""

from dataclasses import dataclass
from typing import Any

from talklink.domain.enums import SearchField


def _opt_str(value: Any) -> str | None:
    """Return value as str, or None when absent. Numbers are stringified."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _opt_int(value: Any) -> int | None:
    """Return value as int, or None when absent or not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    return None


@dataclass(frozen=True)
class RemoteRoom:
    """One conversation on the remote server.

    token is the primary identifier used in join and call URLs. Every other
    field is optional; a room without a token is still representable so that
    callers can report it as a data-integrity problem.
    """

    token: str
    name: str | None = None
    display_name: str | None = None
    object_id: str | None = None
    description: str | None = None
    type: int | None = None
    object_type: str | None = None
    participant_type: int | None = None
    participant_count: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RemoteRoom":
        """Build a room from one entry of the room listing (camelCase keys)."""
        return cls(
            token=_opt_str(data.get("token")) or "",
            name=_opt_str(data.get("name")),
            display_name=_opt_str(data.get("displayName")),
            object_id=_opt_str(data.get("objectId")),
            description=_opt_str(data.get("description")),
            type=_opt_int(data.get("type")),
            object_type=_opt_str(data.get("objectType")),
            participant_type=_opt_int(data.get("participantType")),
            participant_count=_opt_int(data.get("participantCount")),
        )

    def field_value(self, field: SearchField) -> str | None:
        """Return the attribute the matcher compares for field."""
        if field is SearchField.TOKEN:
            return self.token or None
        if field is SearchField.OBJECT_ID:
            return self.object_id
        if field is SearchField.NAME:
            return self.name
        return self.display_name

    def searchable_values(self) -> tuple[str | None, ...]:
        """Values scanned by free-text room search."""
        return (
            self.display_name,
            self.name,
            self.token,
            self.object_id,
            self.description,
        )
