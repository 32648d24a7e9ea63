"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend-specific requirements (secrets for the
encrypted settings file) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SETTINGS_BACKENDS = ("env", "file")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Remote credentials come either straight from the environment
    (settings_backend="env", read-only) or from an encrypted JSON settings
    file that the admin API can update (settings_backend="file").
    """

    # App
    app_name: str = "federated-talk-link"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    rate_limit_enabled: bool = True

    # Credentials: "env" (TALK_* variables) or "file" (encrypted JSON store)
    settings_backend: str = "env"
    talk_remote_host: str = ""
    talk_username: str = ""
    talk_password: SecretStr = SecretStr("")
    talk_target_host: str = ""
    settings_file: str = "/var/lib/talklink/settings.json"

    # Encryption of the stored password (file backend only)
    secret_key: SecretStr = SecretStr("")
    encryption_salt: SecretStr = SecretStr("")

    # Admin settings routes require X-Admin-Token equal to this value.
    admin_api_key: SecretStr | None = None

    # Remote Talk server
    talk_request_timeout_seconds: float = 30.0
    # Accept an invitation-looking notification even when it does not name the room.
    invitation_permissive_match: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_backend(self) -> "Settings":
        """Validate the credential backend and its secrets.

        - env: nothing required; an incomplete set of TALK_* values simply
          leaves the app unconfigured.
        - file: SECRET_KEY and ENCRYPTION_SALT are required to encrypt the
          stored password.
        """
        if self.settings_backend not in SETTINGS_BACKENDS:
            raise ValueError(
                f"settings_backend must be 'env' or 'file', got: {self.settings_backend!r}"
            )
        if self.settings_backend == "file":
            if not self.secret_key.get_secret_value():
                raise ValueError(
                    "SECRET_KEY is required when settings_backend is 'file'. "
                    "Generate with: openssl rand -hex 32."
                )
            if not self.encryption_salt.get_secret_value():
                raise ValueError(
                    "ENCRYPTION_SALT is required when settings_backend is 'file'. "
                    "Generate with: openssl rand -hex 16."
                )
        if self.talk_request_timeout_seconds <= 0:
            raise ValueError("talk_request_timeout_seconds must be positive")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
