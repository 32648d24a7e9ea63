"""Application DTOs (no HTTP or pydantic dependency)."""

from talklink.application.dtos.gateway import GatewayResult, OcsEnvelope
from talklink.application.dtos.invitation import InvitationCheckResult
from talklink.application.dtos.link import (
    ConnectionTestResult,
    LinkResult,
    RoomInfo,
    RoomListing,
    RoomSearchResult,
    RoomSummary,
)

__all__ = [
    "ConnectionTestResult",
    "GatewayResult",
    "InvitationCheckResult",
    "LinkResult",
    "OcsEnvelope",
    "RoomInfo",
    "RoomListing",
    "RoomSearchResult",
    "RoomSummary",
]
