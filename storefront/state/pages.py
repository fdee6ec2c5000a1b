"""Page view models returned by the read path (dataclasses only)."""

from __future__ import annotations

from enum import Enum
from typing import Any
from dataclasses import field, dataclass


class PageState(str, Enum):
    CONTENT = "content"
    EMPTY = "empty"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ClientRetryHint:
    manual: bool
    max_auto_retries: int
    delays_ms: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class PageView:
    page: str
    state: PageState
    status: int
    data: Any = None
    error: dict[str, Any] | None = None
    retry: ClientRetryHint | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "page": self.page,
            "state": self.state.value,
            "status": self.status,
            "data": self.data,
        }
        if self.error is not None:
            payload["error"] = self.error
        if self.retry is not None:
            payload["retry"] = {
                "manual": self.retry.manual,
                "max_auto_retries": self.retry.max_auto_retries,
                "delays_ms": list(self.retry.delays_ms),
            }
        if self.meta:
            payload["meta"] = self.meta
        return payload


__all__ = ["ClientRetryHint", "PageState", "PageView"]
