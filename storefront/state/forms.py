"""Write-path submission outcomes (dataclasses only)."""

from __future__ import annotations

from enum import Enum
from typing import Any
from dataclasses import field, dataclass


class SubmitStatus(str, Enum):
    SUCCESS = "success"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SubmitOutcome:
    status: SubmitStatus
    http_status: int
    message: str
    code: str | None = None
    field_errors: dict[str, str] = field(default_factory=dict)
    retry_after_ms: int | None = None
    reference: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is SubmitStatus.SUCCESS

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": self.ok,
            "status": self.status.value,
            "message": self.message,
        }
        if self.code:
            payload["code"] = self.code
        if self.field_errors:
            payload["errors"] = dict(self.field_errors)
        if self.retry_after_ms is not None:
            payload["retry_after_ms"] = self.retry_after_ms
        if self.reference:
            payload["reference"] = self.reference
        if self.data:
            payload["data"] = self.data
        if self.detail:
            payload["detail"] = self.detail
        return payload


__all__ = ["SubmitOutcome", "SubmitStatus"]
