"""Smoke tests for health, landing page and request-id wiring."""

import logging

from httpx import AsyncClient

from talklink.middleware.request_id import sanitize_request_id
from talklink.shared.context import get_request_id, reset_request_id, set_request_id
from talklink.shared.telemetry.logging import RequestIdFilter


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_root_returns_html(client: AsyncClient) -> None:
    """GET / returns HTML landing page listing the link route."""
    response = await client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers.get("content-type", "")
    assert "/api/v1/link" in response.text


async def test_request_id_forwarded(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


async def test_request_id_generated_when_unsafe(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "bad id;drop"})
    generated = response.headers["X-Request-ID"]
    assert generated != "bad id;drop"
    assert len(generated) == 36


def test_sanitize_request_id() -> None:
    assert sanitize_request_id("req_1-A") == "req_1-A"
    assert len(sanitize_request_id(None)) == 36
    assert len(sanitize_request_id("x" * 65)) == 36


def test_request_id_filter_uses_context() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
    token = set_request_id("req-42")
    try:
        assert get_request_id() == "req-42"
        assert RequestIdFilter().filter(record)
        assert record.request_id == "req-42"
    finally:
        reset_request_id(token)
