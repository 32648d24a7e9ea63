"""DTOs for link resolution results (no dependency on HTTP schemas)."""

from dataclasses import dataclass, field

from talklink.application.dtos.invitation import InvitationCheckResult
from talklink.domain.entities import RemoteRoom
from talklink.domain.enums import LinkFailure


@dataclass(frozen=True)
class RoomInfo:
    """Subset of the matched room returned with a successful link."""

    token: str
    name: str | None
    display_name: str | None
    description: str | None
    type: int | None
    object_type: str | None
    object_id: str | None
    participant_type: int | None

    @classmethod
    def from_room(cls, room: RemoteRoom) -> "RoomInfo":
        return cls(
            token=room.token,
            name=room.name,
            display_name=room.display_name,
            description=room.description,
            type=room.type,
            object_type=room.object_type,
            object_id=room.object_id,
            participant_type=room.participant_type,
        )


@dataclass(frozen=True)
class RoomSummary:
    """Room identifiers listed when an identifier matched nothing."""

    token: str
    name: str
    display_name: str
    object_id: str | None

    @classmethod
    def from_room(cls, room: RemoteRoom) -> "RoomSummary":
        return cls(
            token=room.token,
            name=room.name or "",
            display_name=room.display_name or "",
            object_id=room.object_id,
        )


@dataclass(frozen=True)
class LinkResult:
    """Success carries link/token/room_info; failure carries error and failure kind."""

    success: bool
    link: str | None = None
    token: str | None = None
    joined: bool = False
    invitation_accepted: bool = False
    room_info: RoomInfo | None = None
    join_error: str | None = None
    error: str | None = None
    failure: LinkFailure | None = None
    available_rooms: list[RoomSummary] | None = None
    invitation: InvitationCheckResult | None = None

    @classmethod
    def ok(
        cls,
        link: str,
        room: RemoteRoom,
        *,
        joined: bool,
        join_error: str | None = None,
        invitation: InvitationCheckResult | None = None,
    ) -> "LinkResult":
        return cls(
            success=True,
            link=link,
            token=room.token,
            joined=joined,
            join_error=join_error,
            invitation_accepted=bool(invitation and invitation.accepted),
            room_info=RoomInfo.from_room(room),
            invitation=invitation,
        )

    @classmethod
    def fail(
        cls,
        failure: LinkFailure,
        error: str,
        *,
        available_rooms: list[RoomSummary] | None = None,
        invitation: InvitationCheckResult | None = None,
    ) -> "LinkResult":
        return cls(
            success=False,
            error=error,
            failure=failure,
            available_rooms=available_rooms,
            invitation_accepted=bool(invitation and invitation.accepted),
            invitation=invitation,
        )


@dataclass(frozen=True)
class RoomListing:
    """One room as returned by free-text search."""

    token: str
    name: str
    display_name: str
    description: str
    type: int | None
    object_type: str | None
    object_id: str | None
    participant_count: int

    @classmethod
    def from_room(cls, room: RemoteRoom) -> "RoomListing":
        return cls(
            token=room.token,
            name=room.name or "",
            display_name=room.display_name or room.name or "Unknown",
            description=room.description or "",
            type=room.type,
            object_type=room.object_type,
            object_id=room.object_id,
            participant_count=room.participant_count or 0,
        )


@dataclass(frozen=True)
class RoomSearchResult:
    success: bool
    rooms: list[RoomListing] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class ConnectionTestResult:
    success: bool
    message: str | None = None
    room_count: int | None = None
    error: str | None = None
