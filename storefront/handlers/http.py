"""FastAPI glue: runtime lookup, rate governance dependency, 429 responses."""

from __future__ import annotations

import math
import secrets
from typing import Any
from collections.abc import Callable, Awaitable

from fastapi import Request
from fastapi.responses import ORJSONResponse

from storefront.state import RuntimeDeps
from storefront.errors import RateLimitError
from storefront.state.rate import RateCategory, ClientIdentity

from .identity import client_identity


def get_runtime_deps(request: Request) -> RuntimeDeps:
    runtime_deps = getattr(request.app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


def request_identity(request: Request) -> ClientIdentity:
    limits = get_runtime_deps(request).settings.limits
    return client_identity(
        request,
        trust_proxy_headers=limits.trust_proxy_headers,
        trusted_proxies=limits.trusted_proxies,
    )


def stats_authorized(request: Request) -> bool:
    expected = get_runtime_deps(request).settings.limits.stats_token
    if not expected:
        return False
    provided = (request.headers.get("x-api-key") or "").strip()
    return secrets.compare_digest(provided.encode(), expected.encode())


def governed(category: RateCategory) -> Callable[[Request], Awaitable[None]]:
    """Build a route dependency that raises RateLimitError once the window is spent."""

    async def _admit(request: Request) -> None:
        deps = get_runtime_deps(request)
        identity = request_identity(request)
        decision = await deps.governor.check(identity.address, category, forwarded=identity.forwarded)
        request.state.rate_decision = decision

    return _admit


def rate_limit_headers(limit: int, remaining: int, retry_after_s: float | None = None) -> dict[str, str]:
    headers = {
        "X-RateLimit-Limit": str(limit),
        "X-RateLimit-Remaining": str(max(0, remaining)),
    }
    if retry_after_s is not None:
        headers["Retry-After"] = str(max(1, math.ceil(retry_after_s)))
    return headers


async def rate_limit_exception_handler(_request: Request, exc: RateLimitError) -> ORJSONResponse:
    retry_after_ms = math.ceil(exc.retry_in * 1000)
    body: dict[str, Any] = {
        "error": "rate_limited",
        "message": "Too many requests. Please try again later.",
        "retry_after_ms": retry_after_ms,
        "limit": exc.limit,
        "window_seconds": exc.window_seconds,
    }
    return ORJSONResponse(
        body,
        status_code=429,
        headers=rate_limit_headers(exc.limit, 0, exc.retry_in),
    )


__all__ = [
    "get_runtime_deps",
    "governed",
    "rate_limit_exception_handler",
    "rate_limit_headers",
    "request_identity",
    "stats_authorized",
]
