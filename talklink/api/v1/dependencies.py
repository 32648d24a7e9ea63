"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the credential provider, the Talk gateway
and the link-resolution use case. Routes depend only on these
dependencies, not on infrastructure directly.

SETTINGS_BACKEND selects the credential provider: "env" reads TALK_*
variables, "file" reads the encrypted JSON settings file.
"""

from __future__ import annotations

import hmac
from typing import Annotated

import httpx
from fastapi import Depends, HTTPException, Request

from talklink.application.interfaces.services import IConfigProvider
from talklink.application.services.invitation_service import InvitationService
from talklink.application.use_cases.link_resolution import LinkResolutionService
from talklink.core.config import Settings, get_settings
from talklink.domain.exceptions import AuthenticationException
from talklink.infrastructure.external.talk.gateway import TalkGateway
from talklink.infrastructure.settings import (
    CredentialEncryptor,
    EnvConfigProvider,
    FileSettingsStore,
)

ADMIN_TOKEN_HEADER = "X-Admin-Token"


def build_config_provider(settings: Settings) -> IConfigProvider:
    """Credential provider for the configured backend."""
    if settings.settings_backend == "file":
        encryptor = CredentialEncryptor(
            settings.secret_key.get_secret_value(),
            settings.encryption_salt.get_secret_value(),
        )
        return FileSettingsStore(settings.settings_file, encryptor)
    return EnvConfigProvider(settings)


def get_config_provider(
    settings: Annotated[Settings, Depends(get_settings)],
) -> IConfigProvider:
    """Credential provider (read fresh per request)."""
    return build_config_provider(settings)


def get_http_client(request: Request) -> httpx.AsyncClient | None:
    """Shared Talk HTTP client created in lifespan (None outside lifespan)."""
    return getattr(request.app.state, "talk_http_client", None)


def get_talk_gateway(
    config: Annotated[IConfigProvider, Depends(get_config_provider)],
    settings: Annotated[Settings, Depends(get_settings)],
    http_client: Annotated[httpx.AsyncClient | None, Depends(get_http_client)],
) -> TalkGateway:
    """Talk OCS gateway bound to the current credentials."""
    return TalkGateway(
        config,
        http_client=http_client,
        timeout=settings.talk_request_timeout_seconds,
    )


def get_invitation_service(
    gateway: Annotated[TalkGateway, Depends(get_talk_gateway)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> InvitationService:
    """Invitation matcher/acceptor."""
    return InvitationService(gateway, permissive_match=settings.invitation_permissive_match)


def get_link_service(
    config: Annotated[IConfigProvider, Depends(get_config_provider)],
    gateway: Annotated[TalkGateway, Depends(get_talk_gateway)],
    invitations: Annotated[InvitationService, Depends(get_invitation_service)],
) -> LinkResolutionService:
    """Link resolution, room search and connection test use case."""
    return LinkResolutionService(config, gateway, invitations)


def require_admin(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Require X-Admin-Token matching ADMIN_API_KEY.

    Raises:
        HTTPException: 503 when ADMIN_API_KEY is not set.
        AuthenticationException: When the header is missing or wrong.
    """
    if settings.admin_api_key is None or not settings.admin_api_key.get_secret_value():
        raise HTTPException(
            status_code=503,
            detail="Settings administration is not configured (ADMIN_API_KEY is not set).",
        )
    supplied = request.headers.get(ADMIN_TOKEN_HEADER) or ""
    expected = settings.admin_api_key.get_secret_value()
    if not hmac.compare_digest(supplied.encode(), expected.encode()):
        raise AuthenticationException("Invalid admin token")
