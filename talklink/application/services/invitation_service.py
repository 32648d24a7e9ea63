"""Invitation service: find and accept a pending invitation for a room.

Runs before room resolution so a room the remote user was only invited to
shows up in the room listing. Best effort: every failure is reported in
the result, never raised.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from talklink.application.dtos.gateway import GatewayResult
from talklink.application.dtos.invitation import InvitationCheckResult
from talklink.domain.entities import NotificationAction, NotificationRecord

if TYPE_CHECKING:
    from talklink.application.interfaces.services import ITalkGateway

logger = logging.getLogger(__name__)

# Notification "app" values that belong to the chat app.
CHAT_APPS = frozenset({"spreed", "talk"})
INVITATION_OBJECT_TYPES = frozenset({"invitation", "room"})


class InvitationService:
    """Scans notifications for an invitation matching a room identifier and accepts it."""

    def __init__(self, gateway: "ITalkGateway", *, permissive_match: bool = True) -> None:
        self._gateway = gateway
        self._permissive_match = permissive_match

    async def check_and_accept_invitation(self, identifier: str) -> InvitationCheckResult:
        """Accept the first matching invitation whose acceptance succeeds.

        A notification matches when identifier appears (case-insensitive) in
        its object id, subject, message or a rich parameter name. With
        permissive matching, any invitation-looking chat notification also
        matches. A failed acceptance moves on to the next candidate.
        """
        try:
            notifications = await self._gateway.fetch_notifications()
            if notifications is None:
                return InvitationCheckResult(success=True, accepted=False)

            for notification in notifications:
                if notification.app not in CHAT_APPS:
                    continue
                if not self.matches(notification, identifier):
                    continue
                accept_result = await self.accept_notification(notification)
                if accept_result.success:
                    logger.info(
                        "Accepted invitation %s for %r",
                        notification.notification_id or notification.object_id,
                        identifier,
                    )
                    return InvitationCheckResult(
                        success=True,
                        accepted=True,
                        notification=notification,
                        accept_result=accept_result,
                    )
                logger.debug(
                    "Accepting notification %s failed: %s",
                    notification.notification_id,
                    accept_result.error,
                )

            return InvitationCheckResult(
                success=True,
                accepted=False,
                message="No matching invitation found",
                notification_count=len(notifications),
            )
        except Exception as e:
            logger.warning("Invitation check failed for %r: %s", identifier, e, exc_info=True)
            return InvitationCheckResult(
                success=False,
                accepted=False,
                error=f"Failed to check invitations: {e}",
            )

    def matches(self, notification: NotificationRecord, identifier: str) -> bool:
        """Whether notification plausibly refers to the room named by identifier."""
        needle = identifier.casefold()
        if needle:
            for text in (notification.object_id, notification.subject, notification.message):
                if text and needle in text.casefold():
                    return True
            for name in notification.parameter_names():
                if needle in name.casefold():
                    return True
        if not self._permissive_match:
            return False
        # TODO: confirm with product whether unrelated invitations may be accepted here.
        return (
            notification.object_type in INVITATION_OBJECT_TYPES
            or "invitation" in notification.subject.casefold()
        )

    async def accept_notification(self, notification: NotificationRecord) -> GatewayResult:
        """Run the notification's accept action, or accept by object id."""
        action = self._find_accept_action(notification.actions)
        if action is not None and action.link and action.method is not None:
            return await self._gateway.execute_action(action.link, action.method)
        if notification.object_id:
            return await self._gateway.accept_federation_invitation(notification.object_id)
        return GatewayResult.failed("No accept action found")

    @staticmethod
    def _find_accept_action(
        actions: tuple[NotificationAction, ...],
    ) -> NotificationAction | None:
        for action in actions:
            if action.is_accept():
                return action
        return None
