"""Credential providers and their encryption."""

from talklink.infrastructure.settings.encryption import CredentialEncryptor
from talklink.infrastructure.settings.providers import (
    EnvConfigProvider,
    FileSettingsStore,
    masked_settings,
)

__all__ = ["CredentialEncryptor", "EnvConfigProvider", "FileSettingsStore", "masked_settings"]
