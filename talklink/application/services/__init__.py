"""Application services (matching and invitation handling)."""

from talklink.application.services.invitation_service import InvitationService
from talklink.application.services.room_matcher import filter_rooms, find_room

__all__ = ["InvitationService", "filter_rooms", "find_room"]
