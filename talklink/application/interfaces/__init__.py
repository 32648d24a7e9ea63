"""Application ports (Protocols)."""

from talklink.application.interfaces.services import IConfigProvider, ITalkGateway

__all__ = ["IConfigProvider", "ITalkGateway"]
