"""Pytest configuration and fixtures for talklink.

Environment is fixed before talklink.main is imported: env credential
backend and rate limiting off. The remote Talk server is always the
in-memory FakeTalkServer; no test touches the network.
"""

import os

os.environ["SETTINGS_BACKEND"] = "env"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import httpx  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from talklink.api.v1.dependencies import get_config_provider, get_http_client  # noqa: E402
from talklink.application.services.invitation_service import InvitationService  # noqa: E402
from talklink.application.use_cases.link_resolution import LinkResolutionService  # noqa: E402
from talklink.core.config import get_settings  # noqa: E402
from talklink.infrastructure.external.talk.gateway import TalkGateway  # noqa: E402
from talklink.main import app  # noqa: E402
from tests.fakes import FakeTalkServer, InMemoryConfigProvider, room  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
def config() -> InMemoryConfigProvider:
    """Fully configured credentials."""
    return InMemoryConfigProvider()


@pytest.fixture
def talk_server() -> FakeTalkServer:
    """Remote server with one room and no pending notifications."""
    return FakeTalkServer(rooms=[room("r1", "Standup", "Daily Standup")])


@pytest.fixture
async def http_client(talk_server: FakeTalkServer) -> httpx.AsyncClient:
    """HTTP client whose transport is the fake Talk server."""
    async with httpx.AsyncClient(transport=talk_server.transport()) as client:
        yield client


@pytest.fixture
def gateway(config: InMemoryConfigProvider, http_client: httpx.AsyncClient) -> TalkGateway:
    return TalkGateway(config, http_client=http_client)


@pytest.fixture
def link_service(config: InMemoryConfigProvider, gateway: TalkGateway) -> LinkResolutionService:
    return LinkResolutionService(config, gateway, InvitationService(gateway))


@pytest.fixture
async def client(
    config: InMemoryConfigProvider, http_client: httpx.AsyncClient
) -> AsyncClient:
    """Async HTTP client against the FastAPI app, wired to the fake Talk server."""
    app.dependency_overrides[get_config_provider] = lambda: config
    app.dependency_overrides[get_http_client] = lambda: http_client
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
