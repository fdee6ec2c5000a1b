"""Retry policy (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Immutable per-call-site retry configuration."""

    max_attempts: int = 2
    base_delay_ms: int = 100

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")

    def delay_ms(self, attempt: int) -> int:
        return self.base_delay_ms * (2 ** (attempt - 1))


__all__ = ["RetryPolicy"]
