"""DTOs returned by the remote Talk gateway."""

from dataclasses import dataclass
from typing import Any

OK_STATUS = "ok"


@dataclass(frozen=True)
class OcsEnvelope:
    """Parsed {ocs: {meta: {status, statuscode, message}, data}} wrapper.

    status is None when the meta block is absent.
    """

    status: str | None
    statuscode: int | None
    message: str | None
    data: Any

    @property
    def is_ok(self) -> bool:
        return self.status == OK_STATUS


@dataclass(frozen=True)
class GatewayResult:
    """Outcome of a non-fatal gateway call (join, action, invitation accept)."""

    success: bool
    error: str | None = None
    response: Any = None

    @classmethod
    def ok(cls, response: Any = None) -> "GatewayResult":
        return cls(success=True, response=response)

    @classmethod
    def failed(cls, error: str) -> "GatewayResult":
        return cls(success=False, error=error)
