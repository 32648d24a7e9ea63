"""Notification entities (pending notifications on the remote server).

Shapes follow the notifications OCS API: snake_case keys such as
object_id, rich parameters keyed by placeholder name, and actions whose
"type" is often the HTTP verb. camelCase keys and explicit "method"
fields are accepted as well.
"""

from dataclasses import dataclass, field
from typing import Any

from talklink.domain.enums import HttpMethod


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _pick(data: dict[str, Any], *keys: str) -> Any:
    """Return the first present key's value (snake_case or camelCase variants)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _parameters(raw: Any) -> tuple[dict[str, Any], ...]:
    """Normalise rich parameters to an ordered tuple of parameter objects."""
    if isinstance(raw, dict):
        values = raw.values()
    elif isinstance(raw, list):
        values = raw
    else:
        return ()
    return tuple(p for p in values if isinstance(p, dict))


@dataclass(frozen=True)
class NotificationAction:
    """One action offered by a notification (e.g. Accept / Decline).

    method is None when the action declares a verb outside HttpMethod; such
    an action cannot be executed.
    """

    label: str
    type: str
    link: str
    method: HttpMethod | None = HttpMethod.POST

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "NotificationAction":
        action_type = _text(data.get("type"))
        declared = _text(data.get("method")).strip()
        if not declared and action_type.upper() in HttpMethod.values():
            declared = action_type
        method: HttpMethod | None = HttpMethod.POST
        if declared:
            try:
                method = HttpMethod.parse(declared)
            except ValueError:
                method = None
        return cls(
            label=_text(data.get("label")),
            type=action_type,
            link=_text(data.get("link")),
            method=method,
        )

    def is_accept(self) -> bool:
        """Whether this action looks like the "accept" choice."""
        label = self.label.strip()
        return (
            "accept" in label.lower()
            or self.type.lower() == "accept"
            or label.lower() == "yes"
        )


@dataclass(frozen=True)
class NotificationRecord:
    """One pending notification for the configured remote user."""

    app: str
    notification_id: str | None = None
    object_type: str = ""
    object_id: str = ""
    subject: str = ""
    message: str = ""
    subject_parameters: tuple[dict[str, Any], ...] = ()
    message_parameters: tuple[dict[str, Any], ...] = ()
    actions: tuple[NotificationAction, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "NotificationRecord":
        notification_id = _pick(data, "notification_id", "notificationId")
        raw_actions = data.get("actions") or []
        return cls(
            app=_text(data.get("app")),
            notification_id=None if notification_id is None else str(notification_id),
            object_type=_text(_pick(data, "object_type", "objectType")),
            object_id=_text(_pick(data, "object_id", "objectId")),
            subject=_text(data.get("subject")),
            message=_text(data.get("message")),
            subject_parameters=_parameters(
                _pick(data, "subjectRichParameters", "subjectParameters", "subject_parameters")
            ),
            message_parameters=_parameters(
                _pick(data, "messageRichParameters", "messageParameters", "message_parameters")
            ),
            actions=tuple(
                NotificationAction.from_api(a) for a in raw_actions if isinstance(a, dict)
            ),
        )

    def parameter_names(self) -> list[str]:
        """Names of subject then message parameters, in order."""
        names: list[str] = []
        for param in (*self.subject_parameters, *self.message_parameters):
            name = param.get("name")
            if isinstance(name, str):
                names.append(name)
        return names

    def to_dict(self) -> dict[str, Any]:
        """Summary exposed in results (no raw parameters)."""
        return {
            "notificationId": self.notification_id,
            "app": self.app,
            "objectType": self.object_type,
            "objectId": self.object_id,
            "subject": self.subject,
        }
