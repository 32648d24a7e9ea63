"""Link resolution use case: identifier -> joined room -> call link on the target host.

Also serves free-text room search and the connection test, which share the
configuration check and room listing but never the fetched data (every
operation queries the remote server fresh).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from talklink.application.dtos.link import (
    ConnectionTestResult,
    LinkResult,
    RoomListing,
    RoomSearchResult,
    RoomSummary,
)
from talklink.application.services.room_matcher import filter_rooms, find_room
from talklink.domain.enums import LinkFailure, SearchField
from talklink.infrastructure.exceptions import TalkGatewayError

if TYPE_CHECKING:
    from talklink.application.interfaces.services import IConfigProvider, ITalkGateway
    from talklink.application.services.invitation_service import InvitationService

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MSG = "App is not configured. Please configure the settings first."
IDENTIFIER_REQUIRED_MSG = "Room identifier cannot be empty."
TOKEN_MISSING_MSG = "Room found but token is missing."


def format_call_link(target_host: str, token: str) -> str:
    """Return {target_host without trailing slash}/call/{token}."""
    return f"{target_host.rstrip('/')}/call/{token}"


class LinkResolutionService:
    """Resolve a room identifier on the remote server into a call link for the target host."""

    def __init__(
        self,
        config: "IConfigProvider",
        gateway: "ITalkGateway",
        invitation_service: "InvitationService",
    ) -> None:
        self._config = config
        self._gateway = gateway
        self._invitations = invitation_service

    async def resolve(
        self, identifier: str, search_by: SearchField | None = None
    ) -> LinkResult:
        """Find the room, join it and return its call link.

        Steps: accept a matching pending invitation (best effort), fetch the
        room list, match the identifier, join the room (failure tolerated),
        format the link. Configuration and identifier checks run first and
        make no network calls.

        Returns:
            LinkResult; failures carry a LinkFailure and a message, and a
            not-found failure lists the available rooms.
        """
        if not self._config.is_configured():
            return LinkResult.fail(LinkFailure.NOT_CONFIGURED, NOT_CONFIGURED_MSG)

        identifier = identifier.strip()
        if not identifier:
            return LinkResult.fail(LinkFailure.IDENTIFIER_REQUIRED, IDENTIFIER_REQUIRED_MSG)

        invitation = await self._invitations.check_and_accept_invitation(identifier)

        try:
            rooms = await self._gateway.fetch_rooms()
        except TalkGatewayError as e:
            logger.error(
                "Failed to generate federated link for %r: %s", identifier, e.message, exc_info=True
            )
            return LinkResult.fail(
                LinkFailure.REMOTE_ERROR,
                f"Failed to query external server: {e.message}",
                invitation=invitation,
            )

        room = find_room(rooms, identifier, search_by)
        if room is None:
            return LinkResult.fail(
                LinkFailure.NOT_FOUND,
                f"Room '{identifier}' not found on the external server.",
                available_rooms=[RoomSummary.from_room(r) for r in rooms],
                invitation=invitation,
            )
        if not room.token:
            return LinkResult.fail(
                LinkFailure.TOKEN_MISSING, TOKEN_MISSING_MSG, invitation=invitation
            )

        join = await self._gateway.join_room(room.token)
        if not join.success:
            # The link may still work for users already in the room.
            logger.warning(
                "Failed to join room %s, continuing anyway: %s",
                room.token,
                join.error or "Unknown error",
            )

        return LinkResult.ok(
            self.generate_link_by_token(room.token),
            room,
            joined=join.success,
            join_error=join.error,
            invitation=invitation,
        )

    async def search(self, term: str | None = None) -> RoomSearchResult:
        """List rooms, optionally filtered by a case-insensitive search term."""
        if not self._config.is_configured():
            return RoomSearchResult(success=False, error=NOT_CONFIGURED_MSG)
        try:
            rooms = await self._gateway.fetch_rooms()
        except TalkGatewayError as e:
            logger.error("Failed to search rooms: %s", e.message, exc_info=True)
            return RoomSearchResult(
                success=False, error=f"Failed to query external server: {e.message}"
            )
        return RoomSearchResult(
            success=True,
            rooms=[RoomListing.from_room(r) for r in filter_rooms(rooms, term)],
        )

    async def test_connection(self) -> ConnectionTestResult:
        """Succeed iff the room listing answers with envelope status "ok"."""
        if not self._config.is_configured():
            return ConnectionTestResult(success=False, error=NOT_CONFIGURED_MSG)
        try:
            envelope = await self._gateway.fetch_room_envelope()
        except TalkGatewayError as e:
            logger.error("Connection test failed: %s", e.message, exc_info=True)
            return ConnectionTestResult(success=False, error=f"Connection failed: {e.message}")

        if envelope.status is None:
            return ConnectionTestResult(
                success=False, error="Invalid response format from external server."
            )
        if not envelope.is_ok:
            code = envelope.statuscode if envelope.statuscode is not None else "unknown"
            message = envelope.message or "Unknown error"
            return ConnectionTestResult(
                success=False,
                error=f"API returned status '{envelope.status}' (code: {code}): {message}",
            )
        data = envelope.data if isinstance(envelope.data, list) else []
        return ConnectionTestResult(
            success=True, message="Connection successful!", room_count=len(data)
        )

    def generate_link_by_token(self, token: str) -> str:
        """Call link for token on the configured target host (no lookup)."""
        return format_call_link(self._config.get_target_host(), token)
