"""Link, room search and connection test API schemas."""

from typing import Any

from pydantic import Field

from talklink.application.dtos import (
    ConnectionTestResult,
    InvitationCheckResult,
    LinkResult,
    RoomInfo,
    RoomListing,
    RoomSummary,
)
from talklink.schemas.base import CamelModel


class RoomInfoResponse(CamelModel):
    """Matched room details returned with a link."""

    token: str
    name: str | None = None
    display_name: str | None = None
    description: str | None = None
    type: int | None = None
    object_type: str | None = None
    object_id: str | None = None
    participant_type: int | None = None

    @classmethod
    def from_dto(cls, info: RoomInfo) -> "RoomInfoResponse":
        return cls(
            token=info.token,
            name=info.name,
            display_name=info.display_name,
            description=info.description,
            type=info.type,
            object_type=info.object_type,
            object_id=info.object_id,
            participant_type=info.participant_type,
        )


class RoomSummaryResponse(CamelModel):
    """Room identifiers listed when no room matched."""

    token: str
    name: str
    display_name: str
    object_id: str | None = None

    @classmethod
    def from_dto(cls, summary: RoomSummary) -> "RoomSummaryResponse":
        return cls(
            token=summary.token,
            name=summary.name,
            display_name=summary.display_name,
            object_id=summary.object_id,
        )


class InvitationResponse(CamelModel):
    """Outcome of the invitation check that precedes resolution."""

    success: bool
    accepted: bool
    message: str | None = None
    notification: dict[str, Any] | None = None
    notification_count: int | None = None
    error: str | None = None

    @classmethod
    def from_dto(cls, result: InvitationCheckResult) -> "InvitationResponse":
        return cls(
            success=result.success,
            accepted=result.accepted,
            message=result.message,
            notification=result.notification.to_dict() if result.notification else None,
            notification_count=result.notification_count,
            error=result.error,
        )


class LinkResponse(CamelModel):
    """Response for GET /link when a room was resolved."""

    link: str
    token: str
    joined: bool = False
    invitation_accepted: bool = False
    room_info: RoomInfoResponse | None = None
    invitation: InvitationResponse | None = None

    @classmethod
    def from_result(cls, result: LinkResult) -> "LinkResponse":
        return cls(
            link=result.link or "",
            token=result.token or "",
            joined=result.joined,
            invitation_accepted=result.invitation_accepted,
            room_info=RoomInfoResponse.from_dto(result.room_info) if result.room_info else None,
            invitation=InvitationResponse.from_dto(result.invitation) if result.invitation else None,
        )


class LinkErrorResponse(CamelModel):
    """Response for GET /link when resolution failed."""

    error: str
    reason: str | None = Field(default=None, description="Failure kind (e.g. not_found)")
    available_rooms: list[RoomSummaryResponse] | None = None

    @classmethod
    def from_result(cls, result: LinkResult) -> "LinkErrorResponse":
        rooms = None
        if result.available_rooms is not None:
            rooms = [RoomSummaryResponse.from_dto(r) for r in result.available_rooms]
        return cls(
            error=result.error or "Unknown error",
            reason=result.failure.value if result.failure else None,
            available_rooms=rooms,
        )

    def to_body(self) -> dict[str, Any]:
        """camelCase body; unset top-level keys are left out, room entries keep null fields."""
        body = self.model_dump(by_alias=True)
        return {key: value for key, value in body.items() if value is not None}


class RoomListingResponse(CamelModel):
    """One room in a search result."""

    token: str
    name: str
    display_name: str
    description: str
    type: int | None = None
    object_type: str | None = None
    object_id: str | None = None
    participant_count: int = 0

    @classmethod
    def from_dto(cls, room: RoomListing) -> "RoomListingResponse":
        return cls(
            token=room.token,
            name=room.name,
            display_name=room.display_name,
            description=room.description,
            type=room.type,
            object_type=room.object_type,
            object_id=room.object_id,
            participant_count=room.participant_count,
        )


class RoomsResponse(CamelModel):
    """Response for GET /rooms."""

    rooms: list[RoomListingResponse]


class ConnectionTestResponse(CamelModel):
    """Response for GET /test when the remote server answered "ok"."""

    message: str
    room_count: int

    @classmethod
    def from_result(cls, result: ConnectionTestResult) -> "ConnectionTestResponse":
        return cls(message=result.message or "", room_count=result.room_count or 0)
