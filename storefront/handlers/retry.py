"""Bounded retry with classification-driven exponential backoff."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, TypeVar
from collections.abc import Callable, Awaitable

from storefront.state.retry import RetryPolicy
from storefront.state.errors import ClassifiedError
from storefront.monitoring.reporter import Reporter

from .classifier import classify

logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[Any]]
ClassifyFn = Callable[[BaseException], ClassifiedError]


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    reporter: Reporter | None = None,
    context: dict[str, Any] | None = None,
    classify_fn: ClassifyFn = classify,
    sleep: SleepFn = asyncio.sleep,
) -> T:
    """Run `operation`, re-invoking it on retryable failures.

    The original exception is re-raised once the fault is not retryable or
    the attempt budget is spent; callers never see a synthetic
    "retries exhausted" error.
    """
    attempt = 1
    tags = dict((context or {}).get("tags") or {})
    while True:
        try:
            return await operation()
        except Exception as exc:
            classified = classify_fn(exc)
            if not classified.retryable or attempt >= policy.max_attempts:
                raise

            delay_ms = policy.delay_ms(attempt)
            logger.info(
                "retrying after %s (attempt %s/%s, delay %sms)",
                classified.kind.value,
                attempt,
                policy.max_attempts,
                delay_ms,
            )
            if reporter is not None:
                reporter.report_message(
                    f"Retry {tags.get('component', 'operation')} (attempt {attempt}/{policy.max_attempts})",
                    {
                        "level": "info",
                        "tags": {**tags, "retry": True},
                        "extra": {
                            "attempt": attempt,
                            "max_attempts": policy.max_attempts,
                            "error_type": classified.kind.value,
                            "delay_ms": delay_ms,
                        },
                    },
                )
            await sleep(delay_ms / 1000.0)
            attempt += 1


__all__ = ["run_with_retry"]
