"""Room matcher: map a loosely specified identifier to one remote room.

Pure functions, no I/O. Within a tier the first room in fetch order wins.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from talklink.domain.entities import RemoteRoom
from talklink.domain.enums import SearchField

Comparator = Callable[[str, str], bool]


def _exact(value: str, identifier: str) -> bool:
    return value == identifier


def _casefold(value: str, identifier: str) -> bool:
    return value.casefold() == identifier.casefold()


# Auto-search priority: most specific identifier first.
AUTO_TIERS: tuple[tuple[SearchField, Comparator], ...] = (
    (SearchField.TOKEN, _exact),
    (SearchField.OBJECT_ID, _exact),
    (SearchField.NAME, _exact),
    (SearchField.DISPLAY_NAME, _exact),
    (SearchField.DISPLAY_NAME, _casefold),
    (SearchField.NAME, _casefold),
)


def _first_match(
    rooms: Sequence[RemoteRoom],
    identifier: str,
    field: SearchField,
    compare: Comparator,
) -> RemoteRoom | None:
    for room in rooms:
        value = room.field_value(field)
        if value and compare(value, identifier):
            return room
    return None


def find_room(
    rooms: Sequence[RemoteRoom],
    identifier: str,
    search_by: SearchField | None = None,
) -> RemoteRoom | None:
    """Return the room identified by identifier, or None.

    With search_by, only that field is compared (exact, case-sensitive).
    Without it, AUTO_TIERS are tried in order; each tier scans every room
    before the next tier starts. Empty or missing fields never match.

    Args:
        rooms: Rooms in fetch order.
        identifier: Token, object id, name or display name (non-empty).
        search_by: Field to restrict the comparison to, or None for auto.

    Returns:
        The matched room or None.
    """
    if not identifier:
        return None
    if search_by is not None:
        return _first_match(rooms, identifier, search_by, _exact)
    for field, compare in AUTO_TIERS:
        room = _first_match(rooms, identifier, field, compare)
        if room is not None:
            return room
    return None


def filter_rooms(rooms: Sequence[RemoteRoom], term: str | None) -> list[RemoteRoom]:
    """Rooms where term is a case-insensitive substring of any searchable field.

    A blank term returns every room.
    """
    if term is None or not term.strip():
        return list(rooms)
    needle = term.strip().casefold()
    return [
        room
        for room in rooms
        if any(value and needle in value.casefold() for value in room.searchable_values())
    ]
