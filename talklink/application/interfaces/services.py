"""Service interfaces (ports) for the application layer.

Protocols define contracts for the credential provider and the remote
Talk gateway (DIP), so use cases can be tested with in-memory fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from talklink.domain.enums import HttpMethod

if TYPE_CHECKING:
    from talklink.application.dtos.gateway import GatewayResult, OcsEnvelope
    from talklink.domain.entities import NotificationRecord, RemoteRoom


class IConfigProvider(Protocol):
    """Read-only access to the remote credentials and target host."""

    def get_remote_host(self) -> str:
        """Host of the remote Talk server (no scheme required)."""

    def get_username(self) -> str:
        """Username for HTTP Basic auth against the remote server."""

    def get_password(self) -> str:
        """Decrypted password (empty string when unset or unreadable)."""

    def get_target_host(self) -> str:
        """Base URL used when formatting call links."""

    def is_configured(self) -> bool:
        """True when all four values are non-empty."""


class ITalkGateway(Protocol):
    """Remote Talk OCS API (one HTTP call per operation, no retries)."""

    async def fetch_room_envelope(self) -> OcsEnvelope:
        """GET the room listing and return the parsed envelope."""

    async def fetch_rooms(self) -> list[RemoteRoom]:
        """GET the room listing. Raises TalkGatewayError."""

    async def join_room(self, token: str) -> GatewayResult:
        """Join the room as the configured user. Never raises."""

    async def fetch_notifications(self) -> list[NotificationRecord] | None:
        """GET pending notifications; None when the envelope has no data list."""

    async def execute_action(
        self, url: str, method: HttpMethod = HttpMethod.POST
    ) -> GatewayResult:
        """Run a notification action link. Never raises."""

    async def accept_federation_invitation(self, invite_id: str) -> GatewayResult:
        """Accept a federation invitation by id. Never raises."""
