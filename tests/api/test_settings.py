"""API tests for the admin settings routes (X-Admin-Token, read-only env backend, file store)."""

import pytest
from httpx import AsyncClient
from pydantic import SecretStr

from talklink.api.v1.dependencies import ADMIN_TOKEN_HEADER, get_config_provider
from talklink.core.config import Settings, get_settings
from talklink.infrastructure.settings import CredentialEncryptor, FileSettingsStore
from talklink.main import app

_ADMIN_TOKEN = "admin-secret-for-tests"
_HEADERS = {ADMIN_TOKEN_HEADER: _ADMIN_TOKEN}

_VALID_BODY = {
    "externalServerUrl": "https://talk.remote.example/",
    "username": "guest",
    "password": "hunter2",
    "targetNextcloudUrl": "https://cloud.target.example",
}


@pytest.fixture
def admin_settings(client: AsyncClient):
    """Settings with ADMIN_API_KEY set (client fixture installs the other overrides)."""
    app.dependency_overrides[get_settings] = lambda: Settings(
        admin_api_key=SecretStr(_ADMIN_TOKEN)
    )
    yield
    app.dependency_overrides.pop(get_settings, None)


@pytest.fixture
def file_store(tmp_path, admin_settings) -> FileSettingsStore:
    store = FileSettingsStore(tmp_path / "settings.json", CredentialEncryptor("k" * 32, "salt"))
    app.dependency_overrides[get_config_provider] = lambda: store
    return store


async def test_admin_key_unset_is_503(client: AsyncClient) -> None:
    app.dependency_overrides[get_settings] = lambda: Settings(admin_api_key=None)
    response = await client.get("/api/v1/settings", headers=_HEADERS)
    assert response.status_code == 503
    assert response.json()["error"] == "HTTP_ERROR"


async def test_wrong_token_is_401(client: AsyncClient, admin_settings) -> None:
    response = await client.get("/api/v1/settings", headers={ADMIN_TOKEN_HEADER: "nope"})
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"

    response = await client.get("/api/v1/settings")
    assert response.status_code == 401


async def test_get_settings_masks_password(client: AsyncClient, admin_settings) -> None:
    response = await client.get("/api/v1/settings", headers=_HEADERS)
    assert response.status_code == 200
    assert response.json() == {
        "externalServerUrl": "talk.remote.example",
        "username": "guest",
        "hasPassword": True,
        "targetNextcloudUrl": "https://cloud.target.example/",
        "isConfigured": True,
    }
    assert "secret" not in response.text


async def test_save_with_env_backend_is_409(client: AsyncClient, admin_settings) -> None:
    response = await client.post("/api/v1/settings", json=_VALID_BODY, headers=_HEADERS)
    assert response.status_code == 409
    assert response.json()["error"] == "SETTINGS_READ_ONLY"


async def test_save_to_file_store(client: AsyncClient, file_store: FileSettingsStore) -> None:
    response = await client.post("/api/v1/settings", json=_VALID_BODY, headers=_HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["settings"] == {
        "externalServerUrl": "https://talk.remote.example",
        "username": "guest",
        "hasPassword": True,
        "targetNextcloudUrl": "https://cloud.target.example",
        "isConfigured": True,
    }
    assert file_store.get_password() == "hunter2"


async def test_save_without_password_keeps_stored_one(
    client: AsyncClient, file_store: FileSettingsStore
) -> None:
    file_store.save_all("a.example", "old", "kept", "https://b.example")
    body = {**_VALID_BODY}
    del body["password"]

    response = await client.post("/api/v1/settings", json=body, headers=_HEADERS)

    assert response.status_code == 200
    assert file_store.get_password() == "kept"
    assert file_store.get_username() == "guest"


@pytest.mark.parametrize(
    "field,value,message",
    [
        ("externalServerUrl", "  ", "External server URL is required"),
        ("username", "", "Username is required"),
        ("targetNextcloudUrl", "", "Target Nextcloud URL is required"),
        ("externalServerUrl", "not a url", "Invalid external server URL format"),
        ("targetNextcloudUrl", "ftp://cloud.example", "Invalid target Nextcloud URL format"),
    ],
)
async def test_save_validation(
    client: AsyncClient, file_store: FileSettingsStore, field: str, value: str, message: str
) -> None:
    response = await client.post(
        "/api/v1/settings", json={**_VALID_BODY, field: value}, headers=_HEADERS
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"
    assert response.json()["message"] == message
    assert not file_store.is_configured()
