"""Periodic cleanup of elapsed rate windows."""

from __future__ import annotations

import asyncio
import logging
import contextlib

from storefront.config.limits import DEFAULT_RATE_LIMIT_SWEEP_INTERVAL_S

from .limits import RateGovernor

logger = logging.getLogger(__name__)


class RateCacheSweeper:
    def __init__(self, governor: RateGovernor, *, interval_s: float | None = None) -> None:
        self._governor = governor
        self._interval_s = float(DEFAULT_RATE_LIMIT_SWEEP_INTERVAL_S if interval_s is None else interval_s)
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._stop_event.clear()
            self._task = asyncio.create_task(self._sweep_loop())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(Exception, asyncio.CancelledError):
            await self._task
        self._task = None

    async def _sweep_loop(self) -> None:
        if self._interval_s <= 0:
            return
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._interval_s)
                if self._stop_event.is_set():
                    break
                try:
                    await self._governor.sweep()
                except Exception:
                    logger.warning("rate cache sweep failed", exc_info=True)
        except asyncio.CancelledError:
            return


__all__ = ["RateCacheSweeper"]
