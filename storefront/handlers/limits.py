"""Per-identity fixed-window rate governance.

Windows are tracked in a bounded in-process mapping keyed by
(identity, category). State is lost on restart, which only ever admits more
traffic.
"""

from __future__ import annotations

import math
import time
import asyncio
import logging
from typing import Any
from collections.abc import Callable, Iterable

from storefront.errors import RateLimitError
from storefront.config.limits import DEFAULT_RATE_LIMIT_ALLOWLIST, DEFAULT_RATE_LIMIT_CACHE_MAX_SIZE
from storefront.state.rate import RateCategory, RateDecision, RateLimitPolicy, RateWindowEntry

from .identity import anonymize_ip

logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]
WindowKey = tuple[str, RateCategory]


class RateGovernor:
    """Admit or deny requests per (identity, category).

    A category whose policy has limit <= 0 or window <= 0 is not governed.
    The allowlist applies to socket peers only, never to forwarded addresses.
    """

    def __init__(
        self,
        *,
        policies: dict[RateCategory, RateLimitPolicy],
        capacity: int = DEFAULT_RATE_LIMIT_CACHE_MAX_SIZE,
        allowlist: Iterable[str] = DEFAULT_RATE_LIMIT_ALLOWLIST,
        now_fn: TimeFn | None = None,
    ) -> None:
        self._policies = dict(policies)
        self._capacity = max(1, int(capacity))
        self._allowlist = frozenset(allowlist)
        self._now = now_fn or time.monotonic
        self._lock = asyncio.Lock()
        self._windows: dict[WindowKey, RateWindowEntry] = {}

    async def admit(self, identity: str, category: RateCategory, *, forwarded: bool = False) -> RateDecision:
        policy = self._policies.get(category)
        if policy is None or policy.limit <= 0 or policy.window_seconds <= 0:
            return RateDecision(allowed=True, limit=0, remaining=0)
        if not forwarded and identity in self._allowlist:
            return RateDecision(allowed=True, limit=policy.limit, remaining=policy.limit)

        async with self._lock:
            now = self._now()
            key = (identity, category)
            entry = self._windows.get(key)

            if entry is None:
                self._make_room(now)
                self._windows[key] = RateWindowEntry(identity=identity, category=category, window_start=now)
                return RateDecision(allowed=True, limit=policy.limit, remaining=policy.limit - 1)

            if now - entry.window_start >= policy.window_seconds:
                entry.window_start = now
                entry.count = 1
                return RateDecision(allowed=True, limit=policy.limit, remaining=policy.limit - 1)

            if entry.count >= policy.limit:
                retry_after_s = entry.window_start + policy.window_seconds - now
                retry_after_ms = max(0, math.ceil(retry_after_s * 1000))
                logger.warning(
                    "rate limit exceeded: category=%s identity=%s retry_after_ms=%s",
                    category.value,
                    anonymize_ip(identity),
                    retry_after_ms,
                )
                return RateDecision(
                    allowed=False,
                    limit=policy.limit,
                    remaining=0,
                    retry_after_ms=retry_after_ms,
                )

            entry.count += 1
            return RateDecision(allowed=True, limit=policy.limit, remaining=policy.limit - entry.count)

    async def check(self, identity: str, category: RateCategory, *, forwarded: bool = False) -> RateDecision:
        """Admit or raise RateLimitError."""
        decision = await self.admit(identity, category, forwarded=forwarded)
        if not decision.allowed:
            policy = self._policies[category]
            raise RateLimitError(
                retry_in=decision.retry_after_ms / 1000.0,
                limit=policy.limit,
                window_seconds=policy.window_seconds,
            )
        return decision

    async def sweep(self) -> int:
        async with self._lock:
            removed = self._purge_expired(self._now())
        if removed:
            logger.debug("rate cache sweep removed %s entries (%s left)", removed, len(self._windows))
        return removed

    async def reset(self) -> None:
        async with self._lock:
            self._windows.clear()

    def stats(self) -> dict[str, Any]:
        size = len(self._windows)
        by_category: dict[str, int] = {category.value: 0 for category in self._policies}
        for _identity, category in self._windows:
            by_category[category.value] = by_category.get(category.value, 0) + 1
        return {
            "size": size,
            "capacity": self._capacity,
            "usage_percent": round(size * 100.0 / self._capacity, 1),
            "by_category": by_category,
            "policies": {
                category.value: {"limit": policy.limit, "window_seconds": policy.window_seconds}
                for category, policy in self._policies.items()
            },
        }

    def _purge_expired(self, now: float) -> int:
        expired = [
            key
            for key, entry in self._windows.items()
            if self._is_expired(entry, now)
        ]
        for key in expired:
            del self._windows[key]
        return len(expired)

    def _is_expired(self, entry: RateWindowEntry, now: float) -> bool:
        policy = self._policies.get(entry.category)
        if policy is None:
            return True
        return now - entry.window_start >= policy.window_seconds

    def _make_room(self, now: float) -> None:
        if len(self._windows) < self._capacity:
            return
        self._purge_expired(now)
        while len(self._windows) >= self._capacity:
            oldest = min(self._windows, key=lambda key: self._windows[key].window_start)
            del self._windows[oldest]


__all__ = ["RateGovernor"]
