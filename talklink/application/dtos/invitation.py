"""DTO for the invitation check that runs before room resolution."""

from dataclasses import dataclass

from talklink.application.dtos.gateway import GatewayResult
from talklink.domain.entities import NotificationRecord


@dataclass(frozen=True)
class InvitationCheckResult:
    """Outcome of scanning notifications for a matching invitation.

    success=False only when the check itself failed (error is set);
    an absent or unaccepted invitation is still a successful check.
    """

    success: bool
    accepted: bool
    message: str | None = None
    notification: NotificationRecord | None = None
    accept_result: GatewayResult | None = None
    notification_count: int | None = None
    error: str | None = None
