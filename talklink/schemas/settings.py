"""Admin settings API schemas."""

from pydantic import Field, SecretStr

from talklink.schemas.base import CamelModel


class SettingsResponse(CamelModel):
    """Masked settings view (the password is never returned)."""

    external_server_url: str
    username: str
    has_password: bool
    target_nextcloud_url: str
    is_configured: bool


class SettingsUpdateRequest(CamelModel):
    """Body for POST /settings. Omit password to keep the stored one."""

    external_server_url: str = ""
    username: str = ""
    password: SecretStr | None = Field(default=None)
    target_nextcloud_url: str = ""


class SettingsSaveResponse(CamelModel):
    """Response for POST /settings."""

    success: bool = True
    settings: SettingsResponse
