"""API tests for /api/v1/link, /rooms and /test (fake Talk server behind the app)."""

import httpx
from httpx import AsyncClient

from tests.fakes import FakeTalkServer, InMemoryConfigProvider, envelope, room


async def test_link_resolves_display_name(client: AsyncClient, talk_server: FakeTalkServer) -> None:
    response = await client.get("/api/v1/link", params={"roomName": "daily standup"})

    assert response.status_code == 200
    data = response.json()
    assert data["link"] == "https://cloud.target.example/call/r1"
    assert data["token"] == "r1"
    assert data["joined"] is True
    assert data["invitationAccepted"] is False
    assert data["roomInfo"]["displayName"] == "Daily Standup"
    assert len(talk_server.requests_to("/participants/active", "POST")) == 1


async def test_link_search_by_token(client: AsyncClient) -> None:
    response = await client.get("/api/v1/link", params={"roomName": "r1", "searchBy": "token"})
    assert response.status_code == 200
    assert response.json()["token"] == "r1"


async def test_link_requires_room_name(client: AsyncClient, talk_server: FakeTalkServer) -> None:
    response = await client.get("/api/v1/link", params={"roomName": "   "})
    assert response.status_code == 400
    assert response.json() == {
        "error": "Room identifier is required. Use token, name, displayName, or objectId."
    }
    assert talk_server.requests == []


async def test_link_rejects_invalid_search_by(client: AsyncClient) -> None:
    response = await client.get("/api/v1/link", params={"roomName": "r1", "searchBy": "id"})
    assert response.status_code == 400
    assert "Invalid searchBy value" in response.json()["error"]


async def test_link_not_found_lists_rooms(client: AsyncClient) -> None:
    response = await client.get("/api/v1/link", params={"roomName": "nonexistent"})

    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "Room 'nonexistent' not found on the external server."
    assert data["reason"] == "not_found"
    assert data["availableRooms"] == [
        {"token": "r1", "name": "Standup", "displayName": "Daily Standup", "objectId": None}
    ]


async def test_link_error_without_rooms_omits_available_rooms(
    client: AsyncClient, config: InMemoryConfigProvider
) -> None:
    """Only not-found failures list rooms; other failures carry just error and reason."""
    config.password = ""
    response = await client.get("/api/v1/link", params={"roomName": "r1"})
    assert response.json() == {
        "error": "App is not configured. Please configure the settings first.",
        "reason": "not_configured",
    }


async def test_link_join_failure_still_200(client: AsyncClient, talk_server: FakeTalkServer) -> None:
    talk_server.rooms = [room("abc123", "Ops", "Ops")]
    talk_server.join_status = "failure"

    response = await client.get("/api/v1/link", params={"roomName": "abc123"})

    assert response.status_code == 200
    assert response.json()["joined"] is False
    assert response.json()["link"] == "https://cloud.target.example/call/abc123"


async def test_link_remote_error_is_502(client: AsyncClient, talk_server: FakeTalkServer) -> None:
    talk_server.rooms_error = httpx.ConnectError("Connection refused")
    response = await client.get("/api/v1/link", params={"roomName": "r1"})
    assert response.status_code == 502
    assert response.json()["error"].startswith("Failed to query external server:")


async def test_link_not_configured_is_503(
    client: AsyncClient, config: InMemoryConfigProvider, talk_server: FakeTalkServer
) -> None:
    config.username = ""
    response = await client.get("/api/v1/link", params={"roomName": "r1"})
    assert response.status_code == 503
    assert response.json()["reason"] == "not_configured"
    assert talk_server.requests == []


async def test_rooms_filtered(client: AsyncClient, talk_server: FakeTalkServer) -> None:
    talk_server.rooms = [
        room("r1", "Standup", "Daily Standup", participantCount=3, type=2),
        room("r2", "ops", None),
    ]
    response = await client.get("/api/v1/rooms", params={"search": "stand"})

    assert response.status_code == 200
    assert response.json() == {
        "rooms": [
            {
                "token": "r1",
                "name": "Standup",
                "displayName": "Daily Standup",
                "description": "",
                "type": 2,
                "objectType": None,
                "objectId": None,
                "participantCount": 3,
            }
        ]
    }


async def test_rooms_error_is_500(client: AsyncClient, talk_server: FakeTalkServer) -> None:
    talk_server.rooms_response = httpx.Response(200, content=b"not json")
    response = await client.get("/api/v1/rooms")
    assert response.status_code == 500
    assert response.json()["error"].startswith(
        "Failed to query external server: Failed to parse JSON response:"
    )


async def test_connection_ok(client: AsyncClient) -> None:
    response = await client.get("/api/v1/test")
    assert response.status_code == 200
    assert response.json() == {"message": "Connection successful!", "roomCount": 1}


async def test_connection_failure(client: AsyncClient, talk_server: FakeTalkServer) -> None:
    talk_server.rooms_response = httpx.Response(
        200, json=envelope([], status="failure", statuscode=997, message="Unauthorised")
    )
    response = await client.get("/api/v1/test")
    assert response.status_code == 500
    assert response.json() == {"error": "API returned status 'failure' (code: 997): Unauthorised"}
