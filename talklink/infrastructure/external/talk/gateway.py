"""Remote Talk (spreed) OCS API gateway using httpx.

Every call targets https://{remote_host}{endpoint} with HTTP Basic auth,
OCS-APIRequest: true and a fixed timeout. One request per operation, no
retries. Credentials are read from the config provider on every call.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import httpx

from talklink.application.dtos.gateway import GatewayResult, OcsEnvelope
from talklink.domain.entities import NotificationRecord, RemoteRoom
from talklink.domain.enums import HttpMethod
from talklink.infrastructure.exceptions import (
    RemoteProtocolError,
    RemoteTransportError,
    TalkGatewayError,
)
from talklink.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from talklink.application.interfaces.services import IConfigProvider

logger = get_logger(__name__)

ROOM_ENDPOINT = "/ocs/v2.php/apps/spreed/api/v4/room"
NOTIFICATIONS_ENDPOINT = "/ocs/v2.php/apps/notifications/api/v2/notifications"
FEDERATION_INVITATION_ENDPOINT = "/ocs/v2.php/apps/spreed/api/v4/federation/invitation"
DEFAULT_TIMEOUT_SECONDS = 30.0

OCS_HEADERS = {
    "OCS-APIRequest": "true",
    "Accept": "application/json",
}


def normalize_host(host: str) -> str:
    """Strip whitespace, an http(s) scheme and trailing slashes from host."""
    host = host.strip()
    for scheme in ("https://", "http://"):
        if host.lower().startswith(scheme):
            host = host[len(scheme):]
            break
    return host.rstrip("/")


def parse_envelope(payload: Any) -> OcsEnvelope:
    """Read {ocs: {meta, data}}; missing parts become None."""
    ocs = payload.get("ocs") if isinstance(payload, dict) else None
    if not isinstance(ocs, dict):
        return OcsEnvelope(status=None, statuscode=None, message=None, data=None)
    meta = ocs.get("meta") if isinstance(ocs.get("meta"), dict) else {}
    return OcsEnvelope(
        status=meta.get("status"),
        statuscode=meta.get("statuscode"),
        message=meta.get("message"),
        data=ocs.get("data"),
    )


class TalkGateway:
    """Talk OCS API client bound to one config provider."""

    def __init__(
        self,
        config: "IConfigProvider",
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._config = config
        self._shared_http = http_client
        self._timeout = timeout

    @asynccontextmanager
    async def _http_cm(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield shared HTTP client or a short-lived one (connection reuse when shared)."""
        if self._shared_http is not None:
            yield self._shared_http
            return
        async with httpx.AsyncClient() as client:
            yield client

    def _base_url(self) -> str:
        return f"https://{normalize_host(self._config.get_remote_host())}"

    def _absolute(self, url: str) -> str:
        if url.lower().startswith(("http://", "https://")):
            return url
        return f"{self._base_url()}/{url.lstrip('/')}"

    async def _request(self, method: HttpMethod, url: str) -> Any:
        """Send one request; return the decoded JSON body (None when empty).

        Raises:
            RemoteTransportError: Connection failure, timeout, or non-2xx status.
            RemoteProtocolError: Body is not valid JSON.
        """
        auth = (self._config.get_username(), self._config.get_password())
        async with self._http_cm() as client:
            send = {
                HttpMethod.GET: client.get,
                HttpMethod.POST: client.post,
                HttpMethod.DELETE: client.delete,
            }[method]
            try:
                response = await send(
                    url, auth=auth, headers=OCS_HEADERS, timeout=self._timeout
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise RemoteTransportError(url, str(e), e.response.status_code) from e
            except httpx.HTTPError as e:
                raise RemoteTransportError(url, str(e) or e.__class__.__name__) from e
        if not response.content:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RemoteProtocolError(url, str(e), invalid_json=True) from e

    async def _ocs(self, method: HttpMethod, endpoint: str) -> OcsEnvelope:
        url = f"{self._base_url()}{endpoint}"
        return parse_envelope(await self._request(method, url))

    async def fetch_room_envelope(self) -> OcsEnvelope:
        """GET the room listing envelope (data is not validated)."""
        return await self._ocs(HttpMethod.GET, ROOM_ENDPOINT)

    async def fetch_rooms(self) -> list[RemoteRoom]:
        """GET every room visible to the configured user, in server order.

        Raises:
            TalkGatewayError: Transport failure, bad JSON, or no data list.
        """
        envelope = await self.fetch_room_envelope()
        if not isinstance(envelope.data, list):
            raise RemoteProtocolError(f"{self._base_url()}{ROOM_ENDPOINT}", "missing ocs.data")
        rooms = [RemoteRoom.from_api(item) for item in envelope.data if isinstance(item, dict)]
        logger.debug("Fetched %s rooms", len(rooms))
        return rooms

    async def join_room(self, token: str) -> GatewayResult:
        """POST {room}/{token}/participants/active; success iff envelope status is "ok"."""
        try:
            envelope = await self._ocs(
                HttpMethod.POST, f"{ROOM_ENDPOINT}/{token}/participants/active"
            )
        except TalkGatewayError as e:
            logger.warning("Failed to join room %s: %s", token, e.message)
            return GatewayResult.failed(f"Join request failed: {e.message}")
        if envelope.is_ok:
            logger.info("Successfully joined room %s", token)
            return GatewayResult.ok()
        return GatewayResult.failed(f"Join failed: {envelope.message or 'Unknown error'}")

    async def fetch_notifications(self) -> list[NotificationRecord] | None:
        """GET pending notifications; None when the envelope carries no data list.

        Raises:
            TalkGatewayError: Transport failure or bad JSON.
        """
        envelope = await self._ocs(HttpMethod.GET, NOTIFICATIONS_ENDPOINT)
        if not isinstance(envelope.data, list):
            return None
        return [
            NotificationRecord.from_api(item) for item in envelope.data if isinstance(item, dict)
        ]

    async def execute_action(
        self, url: str, method: HttpMethod = HttpMethod.POST
    ) -> GatewayResult:
        """Run a notification action; relative links are resolved on the remote host."""
        try:
            body = await self._request(method, self._absolute(url))
        except TalkGatewayError as e:
            logger.warning("Notification action %s %s failed: %s", method.value, url, e.message)
            return GatewayResult.failed(e.message)
        return GatewayResult.ok(body)

    async def accept_federation_invitation(self, invite_id: str) -> GatewayResult:
        """POST federation/invitation/{id}; success iff envelope status is "ok"."""
        try:
            envelope = await self._ocs(
                HttpMethod.POST, f"{FEDERATION_INVITATION_ENDPOINT}/{invite_id}"
            )
        except TalkGatewayError as e:
            return GatewayResult.failed(e.message)
        if envelope.is_ok:
            return GatewayResult.ok(envelope.data)
        return GatewayResult.failed(envelope.message or "Unknown error")
