"""Credential providers: environment-backed (read-only) and encrypted JSON file.

Both satisfy IConfigProvider. The file store also supports saving, and
keeps the password encrypted at rest.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from talklink.core.config import Settings
from talklink.infrastructure.settings.encryption import CredentialEncryptor
from talklink.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

KEY_EXTERNAL_SERVER = "external_server_url"
KEY_USERNAME = "auth_username"
KEY_PASSWORD = "auth_password_encrypted"
KEY_TARGET_URL = "target_nextcloud_url"


def normalize_url(url: str) -> str:
    """Trim whitespace and trailing slashes."""
    return url.strip().rstrip("/")


def masked_settings(provider: Any) -> dict[str, Any]:
    """Settings view for the admin API (password never exposed)."""
    return {
        "externalServerUrl": provider.get_remote_host(),
        "username": provider.get_username(),
        "hasPassword": bool(provider.get_password()),
        "targetNextcloudUrl": provider.get_target_host(),
        "isConfigured": provider.is_configured(),
    }


class EnvConfigProvider:
    """Credentials taken from TALK_* settings (environment or .env)."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def get_remote_host(self) -> str:
        return normalize_url(self._settings.talk_remote_host)

    def get_username(self) -> str:
        return self._settings.talk_username.strip()

    def get_password(self) -> str:
        return self._settings.talk_password.get_secret_value()

    def get_target_host(self) -> str:
        return normalize_url(self._settings.talk_target_host)

    def is_configured(self) -> bool:
        return all(
            (
                self.get_remote_host(),
                self.get_username(),
                self.get_password(),
                self.get_target_host(),
            )
        )

    def get_all_settings(self) -> dict[str, Any]:
        return masked_settings(self)


class FileSettingsStore:
    """JSON key/value settings file; the password is stored Fernet-encrypted.

    The file is read and the password decrypted once per instance, on first
    access. The API builds a store per request, so a save made by another
    worker is seen by the next request; long-lived holders call reload().
    Writes replace the file atomically and refresh the snapshot.
    """

    def __init__(self, path: str | Path, encryptor: CredentialEncryptor) -> None:
        self._path = Path(path)
        self._encryptor = encryptor
        self._data: dict[str, Any] | None = None
        self._password: str | None = None

    def _read_file(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Cannot read settings file %s: %s", self._path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _load(self) -> dict[str, Any]:
        if self._data is None:
            self._data = self._read_file()
        return self._data

    def reload(self) -> None:
        """Drop the snapshot; the next access reads the file again."""
        self._data = None
        self._password = None

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
            os.replace(tmp_path, self._path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def _get(self, key: str) -> str:
        value = self._load().get(key, "")
        return value if isinstance(value, str) else ""

    def get_remote_host(self) -> str:
        return self._get(KEY_EXTERNAL_SERVER)

    def get_username(self) -> str:
        return self._get(KEY_USERNAME)

    def get_password(self) -> str:
        if self._password is None:
            self._password = self._decrypt_password(self._get(KEY_PASSWORD))
        return self._password

    def _decrypt_password(self, encrypted: str) -> str:
        if not encrypted:
            return ""
        try:
            return self._encryptor.decrypt(encrypted)
        except ValueError:
            logger.warning("Stored password cannot be decrypted; treating it as unset")
            return ""

    def get_target_host(self) -> str:
        return self._get(KEY_TARGET_URL)

    def is_configured(self) -> bool:
        return all(
            (
                self.get_remote_host(),
                self.get_username(),
                self.get_password(),
                self.get_target_host(),
            )
        )

    def get_all_settings(self) -> dict[str, Any]:
        return masked_settings(self)

    def save_all(
        self,
        external_server_url: str,
        username: str,
        password: str | None,
        target_nextcloud_url: str,
    ) -> None:
        """Save every setting; a None or empty password keeps the stored one."""
        data = dict(self._read_file())
        data[KEY_EXTERNAL_SERVER] = normalize_url(external_server_url)
        data[KEY_USERNAME] = username.strip()
        if password:
            data[KEY_PASSWORD] = self._encryptor.encrypt(password)
        data[KEY_TARGET_URL] = normalize_url(target_nextcloud_url)
        self._write(data)
        self._data = data
        self._password = password or None
        logger.info("Settings saved to %s", self._path)
