"""Outcome builders shared by the contact and order flows."""

from __future__ import annotations

import math
import time

from storefront.state.forms import SubmitStatus, SubmitOutcome
from storefront.state.errors import ClassifiedError
from storefront.config.forms import CODE_RATE_LIMITED, CODE_VALIDATION_FAILED


def make_reference(now: float | None = None) -> str:
    """Millisecond timestamp in uppercase base36."""
    value = int((time.time() if now is None else now) * 1000)
    digits = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    encoded = ""
    while True:
        value, remainder = divmod(value, 36)
        encoded = digits[remainder] + encoded
        if value == 0:
            return encoded


def validation_rejected(errors: dict[str, str]) -> SubmitOutcome:
    return SubmitOutcome(
        status=SubmitStatus.REJECTED,
        http_status=400,
        message="Please correct the highlighted fields.",
        code=CODE_VALIDATION_FAILED,
        field_errors=errors,
    )


def rate_limited(retry_after_ms: int) -> SubmitOutcome:
    minutes = max(1, math.ceil(retry_after_ms / 60_000))
    return SubmitOutcome(
        status=SubmitStatus.REJECTED,
        http_status=429,
        message=f"Too many attempts. Please wait {minutes} minute(s) before trying again.",
        code=CODE_RATE_LIMITED,
        retry_after_ms=retry_after_ms,
    )


def failed(
    classified: ClassifiedError,
    *,
    code: str,
    reference: str | None = None,
    detail: str | None = None,
) -> SubmitOutcome:
    return SubmitOutcome(
        status=SubmitStatus.FAILED,
        http_status=classified.http_status,
        message=classified.user_message,
        code=code,
        reference=reference,
        detail=detail,
        data={"error_type": classified.kind.value, "retryable": classified.retryable},
    )


__all__ = ["failed", "make_reference", "rate_limited", "validation_rejected"]
