"""Short-lived guard against resubmitting the same contact message."""

from __future__ import annotations

import time
from collections.abc import Callable

from storefront.config.forms import DUPLICATE_WINDOW_S

TimeFn = Callable[[], float]


class DuplicateGuard:
    def __init__(self, *, window_seconds: float = DUPLICATE_WINDOW_S, now_fn: TimeFn | None = None) -> None:
        self._window_seconds = float(window_seconds)
        self._now = now_fn or time.monotonic
        self._seen: dict[str, float] = {}

    def claim(self, key: str) -> float | None:
        """Record `key`, or return the seconds left if it was seen within the window."""
        now = self._now()
        self._seen = {k: at for k, at in self._seen.items() if now - at <= self._window_seconds}
        seen_at = self._seen.get(key)
        if seen_at is not None:
            return self._window_seconds - (now - seen_at)
        self._seen[key] = now
        return None

    def release(self, key: str) -> None:
        self._seen.pop(key, None)

    def __len__(self) -> int:
        return len(self._seen)


__all__ = ["DuplicateGuard"]
