"""Application lifespan: startup and shutdown.

Only wiring of infrastructure: logging and the shared HTTP client used for
calls to the remote Talk server.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from talklink.core.config import get_settings
from talklink.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the shared Talk HTTP client on startup; close it on shutdown."""
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    app.state.talk_http_client = httpx.AsyncClient(
        timeout=settings.talk_request_timeout_seconds
    )
    logger.info(
        "Started %s %s (settings backend: %s)",
        settings.app_name,
        settings.app_version,
        settings.settings_backend,
    )

    yield

    # ---- Shutdown ----
    if getattr(app.state, "talk_http_client", None) is not None:
        await app.state.talk_http_client.aclose()
        app.state.talk_http_client = None
        logger.info("Talk HTTP client closed")
