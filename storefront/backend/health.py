"""Periodic database health monitoring with bounded pool rebuilds."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable, Awaitable

from storefront.monitoring.reporter import Reporter

from .database import Database

logger = logging.getLogger(__name__)

POOL_COMPONENT = "database_pool"


class DatabaseHealthMonitor:
    """Check the pool on an interval; on failure report it and rebuild the pool.

    A rebuild makes at most `reconnect_attempts` tries, `reconnect_delay_s`
    apart. An interval <= 0 disables the background task.
    """

    def __init__(
        self,
        database: Database,
        reporter: Reporter,
        *,
        interval_s: float,
        reconnect_attempts: int = 3,
        reconnect_delay_s: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._database = database
        self._reporter = reporter
        self._interval_s = float(interval_s)
        self._reconnect_attempts = max(1, int(reconnect_attempts))
        self._reconnect_delay_s = max(0.0, float(reconnect_delay_s))
        self._sleep = sleep
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._stop_event.clear()
            self._task = asyncio.create_task(self._monitor_loop())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(Exception, asyncio.CancelledError):
            await self._task
        self._task = None

    async def check(self) -> bool:
        """Run one health check. Returns True when the pool is (or is again) usable."""
        health = await self._database.health_check()
        if health.get("healthy"):
            return True

        logger.error("database unavailable: %s", health.get("error"))
        self._reporter.report_message(
            "Database health check failed",
            {"tags": {"component": POOL_COMPONENT, "issue_type": "health_critical"}, "extra": dict(health)},
            level="error",
        )
        return await self.reconnect()

    async def reconnect(self) -> bool:
        last_error: Exception | None = None
        for attempt in range(1, self._reconnect_attempts + 1):
            logger.info("database reconnect attempt %s/%s", attempt, self._reconnect_attempts)
            try:
                await self._database.reconnect()
            except Exception as exc:
                last_error = exc
                logger.warning("database reconnect attempt %s failed: %s", attempt, exc)
                if attempt < self._reconnect_attempts:
                    await self._sleep(self._reconnect_delay_s)
                continue

            self._reporter.report_message(
                f"Database pool reconnected (attempt {attempt})",
                self._context("reconnection_success", attempt=attempt),
                level="info",
            )
            return True

        logger.error("database reconnect gave up after %s attempts", self._reconnect_attempts)
        self._reporter.report_message(
            "Database reconnection failed",
            self._context("reconnection_failed", last_error=str(last_error)),
            level="error",
        )
        return False

    def _context(self, operation: str, **extra: Any) -> dict[str, Any]:
        return {
            "tags": {"component": POOL_COMPONENT, "operation": operation},
            "extra": {"max_attempts": self._reconnect_attempts, **extra},
        }

    async def _monitor_loop(self) -> None:
        if self._interval_s <= 0:
            return
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._interval_s)
                if self._stop_event.is_set():
                    break
                try:
                    await self.check()
                except Exception:
                    logger.warning("database health monitor tick failed", exc_info=True)
        except asyncio.CancelledError:
            return


__all__ = ["DatabaseHealthMonitor"]
