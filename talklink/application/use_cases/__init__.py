"""Use cases: link resolution, room search, connection test."""

from talklink.application.use_cases.link_resolution import (
    LinkResolutionService,
    format_call_link,
)

__all__ = ["LinkResolutionService", "format_call_link"]
