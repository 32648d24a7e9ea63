"""Remote Talk OCS API gateway."""

from talklink.infrastructure.external.talk.gateway import TalkGateway, normalize_host

__all__ = ["TalkGateway", "normalize_host"]
