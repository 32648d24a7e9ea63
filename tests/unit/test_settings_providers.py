"""Tests for credential providers, password encryption and Settings validation."""

import json
from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr, ValidationError

from talklink.core.config import Settings
from talklink.infrastructure.settings import (
    CredentialEncryptor,
    EnvConfigProvider,
    FileSettingsStore,
)
from talklink.infrastructure.settings.providers import KEY_PASSWORD


@pytest.fixture
def encryptor() -> CredentialEncryptor:
    return CredentialEncryptor("s" * 64, "salt-1234")


@pytest.fixture
def store(tmp_path, encryptor: CredentialEncryptor) -> FileSettingsStore:
    return FileSettingsStore(tmp_path / "nested" / "settings.json", encryptor)


class TestCredentialEncryptor:
    def test_encrypt_hides_plaintext(self, encryptor: CredentialEncryptor) -> None:
        token = encryptor.encrypt("hunter2")
        assert "hunter2" not in token
        assert encryptor.decrypt(token) == "hunter2"

    def test_decrypt_with_other_key_fails(self, encryptor: CredentialEncryptor) -> None:
        token = encryptor.encrypt("hunter2")
        other = CredentialEncryptor("t" * 64, "salt-1234")
        with pytest.raises(ValueError, match="Failed to decrypt password"):
            other.decrypt(token)

    def test_requires_secret_and_salt(self) -> None:
        with pytest.raises(ValueError):
            CredentialEncryptor("", "salt")


class TestEnvConfigProvider:
    def test_reads_and_normalizes(self) -> None:
        settings = Settings(
            talk_remote_host=" talk.remote.example/ ",
            talk_username=" guest ",
            talk_password=SecretStr("secret"),
            talk_target_host="https://cloud.target.example/",
        )
        provider = EnvConfigProvider(settings)
        assert provider.get_remote_host() == "talk.remote.example"
        assert provider.get_username() == "guest"
        assert provider.get_target_host() == "https://cloud.target.example"
        assert provider.is_configured()
        assert provider.get_all_settings() == {
            "externalServerUrl": "talk.remote.example",
            "username": "guest",
            "hasPassword": True,
            "targetNextcloudUrl": "https://cloud.target.example",
            "isConfigured": True,
        }

    def test_missing_value_is_not_configured(self) -> None:
        settings = Settings(
            talk_remote_host="talk.remote.example",
            talk_username="guest",
            talk_password=SecretStr(""),
            talk_target_host="https://cloud.target.example",
        )
        assert not EnvConfigProvider(settings).is_configured()


class TestFileSettingsStore:
    def test_empty_store_is_not_configured(self, store: FileSettingsStore) -> None:
        assert not store.is_configured()
        assert store.get_all_settings()["hasPassword"] is False

    def test_save_and_read_back(self, store: FileSettingsStore, tmp_path) -> None:
        store.save_all("https://talk.remote.example/", " guest ", "hunter2", "https://cloud/")

        assert store.get_remote_host() == "https://talk.remote.example"
        assert store.get_username() == "guest"
        assert store.get_password() == "hunter2"
        assert store.get_target_host() == "https://cloud"
        assert store.is_configured()

        raw = json.loads((tmp_path / "nested" / "settings.json").read_text())
        assert raw[KEY_PASSWORD] != "hunter2"
        assert "hunter2" not in json.dumps(raw)

    def test_empty_password_keeps_stored_one(self, store: FileSettingsStore) -> None:
        store.save_all("a.example", "u", "first", "https://b")
        store.save_all("c.example", "u2", None, "https://d")
        store.save_all("c.example", "u2", "", "https://d")
        assert store.get_password() == "first"
        assert store.get_remote_host() == "c.example"

    def test_undecryptable_password_reads_as_unset(
        self, store: FileSettingsStore, tmp_path
    ) -> None:
        store.save_all("a.example", "u", "first", "https://b")
        path = tmp_path / "nested" / "settings.json"
        data = json.loads(path.read_text())
        data[KEY_PASSWORD] = "garbage"
        path.write_text(json.dumps(data))
        store.reload()

        assert store.get_password() == ""
        assert not store.is_configured()

    def test_file_read_and_decrypted_once_per_instance(
        self, tmp_path, encryptor: CredentialEncryptor
    ) -> None:
        """Repeated getters reuse one snapshot; reload() picks up outside changes."""
        path = tmp_path / "settings.json"
        FileSettingsStore(path, encryptor).save_all("a.example", "u", "first", "https://b")
        spy = MagicMock(wraps=encryptor)
        store = FileSettingsStore(path, spy)

        for _ in range(3):
            assert store.is_configured()
            assert store.get_password() == "first"
        assert spy.decrypt.call_count == 1

        data = json.loads(path.read_text())
        data["auth_username"] = "changed"
        path.write_text(json.dumps(data))
        assert store.get_username() == "u"

        store.reload()
        assert store.get_username() == "changed"
        assert store.get_password() == "first"
        assert spy.decrypt.call_count == 2

    def test_save_refreshes_snapshot(self, store: FileSettingsStore) -> None:
        assert not store.is_configured()
        store.save_all("a.example", "u", "first", "https://b")
        assert store.is_configured()
        store.save_all("a.example", "u2", None, "https://b")
        assert store.get_username() == "u2"
        assert store.get_password() == "first"

    def test_corrupt_file_reads_as_empty(self, store: FileSettingsStore, tmp_path) -> None:
        path = tmp_path / "nested" / "settings.json"
        path.parent.mkdir(parents=True)
        path.write_text("{not json")
        assert store.get_username() == ""


class TestSettingsValidation:
    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(settings_backend="redis")

    def test_file_backend_requires_secrets(self) -> None:
        with pytest.raises(ValidationError, match="SECRET_KEY"):
            Settings(settings_backend="file", secret_key=SecretStr(""), encryption_salt=SecretStr("x"))
        with pytest.raises(ValidationError, match="ENCRYPTION_SALT"):
            Settings(settings_backend="file", secret_key=SecretStr("k"), encryption_salt=SecretStr(""))

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(talk_request_timeout_seconds=0)

    def test_file_backend_with_secrets(self) -> None:
        settings = Settings(
            settings_backend="file", secret_key=SecretStr("k"), encryption_salt=SecretStr("s")
        )
        assert settings.settings_backend == "file"
