"""Rate governance configuration (env names and defaults only)."""

from __future__ import annotations

ENV_RATE_LIMIT_PUBLIC_REQUESTS = "RATE_LIMIT_PUBLIC_REQUESTS"
ENV_RATE_LIMIT_PUBLIC_WINDOW_S = "RATE_LIMIT_PUBLIC_WINDOW_S"
ENV_RATE_LIMIT_API_REQUESTS = "RATE_LIMIT_API_REQUESTS"
ENV_RATE_LIMIT_API_WINDOW_S = "RATE_LIMIT_API_WINDOW_S"
ENV_RATE_LIMIT_CONTACT_REQUESTS = "RATE_LIMIT_CONTACT_REQUESTS"
ENV_RATE_LIMIT_CONTACT_WINDOW_S = "RATE_LIMIT_CONTACT_WINDOW_S"
ENV_RATE_LIMIT_ORDER_REQUESTS = "RATE_LIMIT_ORDER_REQUESTS"
ENV_RATE_LIMIT_ORDER_WINDOW_S = "RATE_LIMIT_ORDER_WINDOW_S"
ENV_RATE_LIMIT_CACHE_MAX_SIZE = "RATE_LIMIT_CACHE_MAX_SIZE"
ENV_RATE_LIMIT_SWEEP_INTERVAL_S = "RATE_LIMIT_SWEEP_INTERVAL_S"
ENV_RATE_LIMIT_ALLOWLIST = "RATE_LIMIT_ALLOWLIST"
ENV_TRUST_PROXY_HEADERS = "TRUST_PROXY_HEADERS"
ENV_TRUSTED_PROXIES = "TRUSTED_PROXIES"
ENV_RATE_LIMIT_STATS_TOKEN = "RATE_LIMIT_STATS_TOKEN"

DEFAULT_RATE_LIMIT_PUBLIC_REQUESTS = 30
DEFAULT_RATE_LIMIT_PUBLIC_WINDOW_S = 60.0
DEFAULT_RATE_LIMIT_API_REQUESTS = 20
DEFAULT_RATE_LIMIT_API_WINDOW_S = 60.0
DEFAULT_RATE_LIMIT_CONTACT_REQUESTS = 3
DEFAULT_RATE_LIMIT_CONTACT_WINDOW_S = 10 * 60.0
DEFAULT_RATE_LIMIT_ORDER_REQUESTS = 2
DEFAULT_RATE_LIMIT_ORDER_WINDOW_S = 5 * 60.0

# 200 identities is plenty for a few hundred visitors a day.
DEFAULT_RATE_LIMIT_CACHE_MAX_SIZE = 200
DEFAULT_RATE_LIMIT_SWEEP_INTERVAL_S = 10 * 60.0

DEFAULT_RATE_LIMIT_ALLOWLIST: tuple[str, ...] = ("127.0.0.1", "::1")

# Forwarded headers are read only when the socket peer is one of TRUSTED_PROXIES.
DEFAULT_TRUST_PROXY_HEADERS = False
DEFAULT_TRUSTED_PROXIES: tuple[str, ...] = ()

# Governor stats are served only to callers presenting this key; empty disables the route.
DEFAULT_RATE_LIMIT_STATS_TOKEN = ""

__all__ = [
    "DEFAULT_RATE_LIMIT_ALLOWLIST",
    "DEFAULT_RATE_LIMIT_API_REQUESTS",
    "DEFAULT_RATE_LIMIT_API_WINDOW_S",
    "DEFAULT_RATE_LIMIT_CACHE_MAX_SIZE",
    "DEFAULT_RATE_LIMIT_CONTACT_REQUESTS",
    "DEFAULT_RATE_LIMIT_CONTACT_WINDOW_S",
    "DEFAULT_RATE_LIMIT_ORDER_REQUESTS",
    "DEFAULT_RATE_LIMIT_ORDER_WINDOW_S",
    "DEFAULT_RATE_LIMIT_PUBLIC_REQUESTS",
    "DEFAULT_RATE_LIMIT_PUBLIC_WINDOW_S",
    "DEFAULT_RATE_LIMIT_SWEEP_INTERVAL_S",
    "DEFAULT_RATE_LIMIT_STATS_TOKEN",
    "DEFAULT_TRUST_PROXY_HEADERS",
    "DEFAULT_TRUSTED_PROXIES",
    "ENV_RATE_LIMIT_ALLOWLIST",
    "ENV_RATE_LIMIT_API_REQUESTS",
    "ENV_RATE_LIMIT_API_WINDOW_S",
    "ENV_RATE_LIMIT_CACHE_MAX_SIZE",
    "ENV_RATE_LIMIT_CONTACT_REQUESTS",
    "ENV_RATE_LIMIT_CONTACT_WINDOW_S",
    "ENV_RATE_LIMIT_ORDER_REQUESTS",
    "ENV_RATE_LIMIT_ORDER_WINDOW_S",
    "ENV_RATE_LIMIT_PUBLIC_REQUESTS",
    "ENV_RATE_LIMIT_PUBLIC_WINDOW_S",
    "ENV_RATE_LIMIT_SWEEP_INTERVAL_S",
    "ENV_RATE_LIMIT_STATS_TOKEN",
    "ENV_TRUST_PROXY_HEADERS",
    "ENV_TRUSTED_PROXIES",
]
