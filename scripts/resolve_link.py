"""Resolve a room to a call link (or search rooms / test the connection) from the shell.

Usage:
    python -m scripts.resolve_link <identifier> [--search-by token|objectId|name|displayName]
    python -m scripts.resolve_link --search [term]
    python -m scripts.resolve_link --test
Uses the same credentials as the API (SETTINGS_BACKEND, TALK_* or the settings file).
Prints the JSON result; exits 1 on failure.
"""

import argparse
import asyncio
import json
import sys

from talklink.api.v1.dependencies import build_config_provider
from talklink.application.services.invitation_service import InvitationService
from talklink.application.use_cases.link_resolution import LinkResolutionService
from talklink.core.config import get_settings
from talklink.domain.enums import SearchField
from talklink.domain.exceptions import NotConfiguredException, TalkLinkException
from talklink.infrastructure.external.talk.gateway import TalkGateway
from talklink.schemas.link import (
    ConnectionTestResponse,
    LinkErrorResponse,
    LinkResponse,
    RoomListingResponse,
)
from talklink.shared.telemetry.logging import setup_logging


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="resolve_link", description=__doc__.splitlines()[0])
    parser.add_argument("identifier", nargs="?", default="")
    parser.add_argument("--search-by", choices=SearchField.values(), default=None)
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--search", action="store_true", help="list rooms matching identifier")
    mode.add_argument("--test", action="store_true", help="test the remote connection")
    return parser.parse_args(argv)


async def main(argv: list[str]) -> int:
    """Run one operation and print its result as JSON."""
    args = _parse_args(argv)
    settings = get_settings()
    setup_logging()
    config = build_config_provider(settings)
    if not config.is_configured():
        raise NotConfiguredException()
    gateway = TalkGateway(config, timeout=settings.talk_request_timeout_seconds)
    service = LinkResolutionService(
        config,
        gateway,
        InvitationService(gateway, permissive_match=settings.invitation_permissive_match),
    )

    if args.test:
        result = await service.test_connection()
        payload = (
            ConnectionTestResponse.from_result(result).model_dump(by_alias=True)
            if result.success
            else {"error": result.error}
        )
    elif args.search:
        result = await service.search(args.identifier or None)
        payload = (
            {"rooms": [RoomListingResponse.from_dto(r).model_dump(by_alias=True) for r in result.rooms]}
            if result.success
            else {"error": result.error}
        )
    else:
        search_by = SearchField(args.search_by) if args.search_by else None
        result = await service.resolve(args.identifier, search_by)
        payload = (
            LinkResponse.from_result(result).model_dump(by_alias=True)
            if result.success
            else LinkErrorResponse.from_result(result).to_body()
        )

    print(json.dumps(payload, indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main(sys.argv[1:])))
    except TalkLinkException as e:
        print(json.dumps({"error": e.message}, indent=2))
        sys.exit(1)
