"""Shared read-path orchestration.

A page fetch runs through the retry executor; its result or terminal failure
is mapped onto a PageView. Production hides non-retryable failures behind a
not-found view, development exposes the classified error in full.
"""

from __future__ import annotations

import time
import asyncio
import logging
from typing import Any
from collections.abc import Callable, Awaitable

from storefront.state.retry import RetryPolicy
from storefront.handlers.retry import SleepFn, run_with_retry
from storefront.handlers.classifier import classify
from storefront.monitoring.reporter import Reporter
from storefront.config.pages import CLIENT_RETRY_MAX_AUTO, CLIENT_RETRY_DELAYS_MS
from storefront.state.pages import PageView, PageState, ClientRetryHint

logger = logging.getLogger(__name__)

CLIENT_RETRY_HINT = ClientRetryHint(
    manual=True,
    max_auto_retries=CLIENT_RETRY_MAX_AUTO,
    delays_ms=CLIENT_RETRY_DELAYS_MS,
)


def not_found(page: str, *, reason: str | None = None) -> PageView:
    return PageView(
        page=page,
        state=PageState.NOT_FOUND,
        status=404,
        error={"message": "The requested page could not be found."},
        meta={"reason": reason} if reason else {},
    )


class PageLoader:
    def __init__(
        self,
        *,
        reporter: Reporter,
        retry_policy: RetryPolicy,
        production: bool = True,
        sleep: SleepFn = asyncio.sleep,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._reporter = reporter
        self._retry_policy = retry_policy
        self._production = production
        self._sleep = sleep
        self._clock = clock

    async def load(
        self,
        page: str,
        fetch: Callable[[], Awaitable[Any]],
        *,
        slow_threshold_ms: float,
        is_empty: Callable[[Any], bool] | None = None,
        context: dict[str, Any] | None = None,
    ) -> PageView:
        tags = {"component": page, **dict((context or {}).get("tags") or {})}
        extra = dict((context or {}).get("extra") or {})
        started = self._clock()

        try:
            data = await run_with_retry(
                fetch,
                self._retry_policy,
                reporter=self._reporter,
                context={"tags": tags, "extra": extra},
                sleep=self._sleep,
            )
        except Exception as exc:
            duration_ms = (self._clock() - started) * 1000.0
            return self._failure_view(page, exc, duration_ms, tags, extra)

        duration_ms = (self._clock() - started) * 1000.0
        meta = {"duration_ms": round(duration_ms, 1)}
        if duration_ms > slow_threshold_ms:
            logger.warning("slow %s load: %.0fms", page, duration_ms)
            self._reporter.report_message(
                f"Slow {page} load",
                {
                    "tags": {**tags, "performance": True},
                    "extra": {**extra, "duration_ms": duration_ms, "threshold_ms": slow_threshold_ms},
                },
                level="warning",
            )

        if data is None:
            return not_found(page)
        if is_empty is not None and is_empty(data):
            return PageView(page=page, state=PageState.EMPTY, status=200, data=data, meta=meta)
        return PageView(page=page, state=PageState.CONTENT, status=200, data=data, meta=meta)

    def _failure_view(
        self,
        page: str,
        exc: Exception,
        duration_ms: float,
        tags: dict[str, Any],
        extra: dict[str, Any],
    ) -> PageView:
        classified = classify(exc)
        logger.error("%s load failed: kind=%s duration=%.0fms", page, classified.kind.value, duration_ms)
        self._reporter.report_exception(
            exc,
            {
                "tags": {
                    **tags,
                    "error_type": classified.kind.value,
                    "should_retry": classified.retryable,
                    "http_status": classified.http_status,
                },
                "extra": {**extra, "duration_ms": duration_ms},
            },
        )

        meta = {"duration_ms": round(duration_ms, 1)}
        if not self._production:
            return PageView(
                page=page,
                state=PageState.ERROR,
                status=classified.http_status,
                error={
                    "kind": classified.kind.value,
                    "message": classified.user_message,
                    "retryable": classified.retryable,
                    "detail": str(exc),
                },
                retry=CLIENT_RETRY_HINT if classified.retryable else None,
                meta=meta,
            )
        if classified.retryable:
            return PageView(
                page=page,
                state=PageState.ERROR,
                status=classified.http_status,
                error={"kind": classified.kind.value, "message": classified.user_message},
                retry=CLIENT_RETRY_HINT,
                meta=meta,
            )
        return not_found(page)


__all__ = ["CLIENT_RETRY_HINT", "PageLoader", "not_found"]
