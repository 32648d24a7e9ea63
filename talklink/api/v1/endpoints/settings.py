"""Admin settings API: read the masked settings, save new credentials.

Both routes require X-Admin-Token. Saving is only possible with the
encrypted file backend; environment-backed settings are read-only.
"""

import logging
from typing import Annotated
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, Request

from talklink.api.v1.dependencies import get_config_provider, require_admin
from talklink.application.interfaces.services import IConfigProvider
from talklink.core.limiter import limit_settings_write
from talklink.domain.exceptions import SettingsReadOnlyException, ValidationException
from talklink.infrastructure.settings import FileSettingsStore, masked_settings
from talklink.schemas.settings import (
    SettingsResponse,
    SettingsSaveResponse,
    SettingsUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


def _is_valid_host_url(value: str) -> bool:
    """Accept a bare host or an http(s) URL, the way it is later prefixed with https://."""
    value = value.strip()
    if "://" not in value:
        value = f"https://{value}"
    parsed = urlparse(value)
    return (
        parsed.scheme in ("http", "https")
        and bool(parsed.hostname)
        and " " not in value
    )


@router.get("", response_model=SettingsResponse)
def get_settings_view(
    config: Annotated[IConfigProvider, Depends(get_config_provider)],
) -> SettingsResponse:
    """Return current settings with the password masked."""
    return SettingsResponse.model_validate(masked_settings(config))


@router.post("", response_model=SettingsSaveResponse)
@limit_settings_write
async def save_settings(
    request: Request,
    body: SettingsUpdateRequest,
    config: Annotated[IConfigProvider, Depends(get_config_provider)],
) -> SettingsSaveResponse:
    """Validate and store the remote credentials and target URL."""
    if not isinstance(config, FileSettingsStore):
        raise SettingsReadOnlyException()

    if not body.external_server_url.strip():
        raise ValidationException("External server URL is required", field="externalServerUrl")
    if not body.username.strip():
        raise ValidationException("Username is required", field="username")
    if not body.target_nextcloud_url.strip():
        raise ValidationException("Target Nextcloud URL is required", field="targetNextcloudUrl")
    if not _is_valid_host_url(body.external_server_url):
        raise ValidationException(
            "Invalid external server URL format", field="externalServerUrl"
        )
    if not _is_valid_host_url(body.target_nextcloud_url):
        raise ValidationException(
            "Invalid target Nextcloud URL format", field="targetNextcloudUrl"
        )

    password = body.password.get_secret_value() if body.password is not None else None
    config.save_all(
        external_server_url=body.external_server_url,
        username=body.username,
        password=password,
        target_nextcloud_url=body.target_nextcloud_url,
    )
    logger.info("Settings updated for remote user %s", body.username.strip())
    return SettingsSaveResponse(
        settings=SettingsResponse.model_validate(config.get_all_settings())
    )
