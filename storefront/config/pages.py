"""Per-page retry, timeout and slow-load thresholds."""

from __future__ import annotations

ENV_PAGE_QUERY_TIMEOUT_MS = "PAGE_QUERY_TIMEOUT_MS"
ENV_PAGE_RETRY_MAX_ATTEMPTS = "PAGE_RETRY_MAX_ATTEMPTS"
ENV_PAGE_RETRY_BASE_DELAY_MS = "PAGE_RETRY_BASE_DELAY_MS"
ENV_WRITE_RETRY_MAX_ATTEMPTS = "WRITE_RETRY_MAX_ATTEMPTS"
ENV_WRITE_RETRY_BASE_DELAY_MS = "WRITE_RETRY_BASE_DELAY_MS"

DEFAULT_PAGE_QUERY_TIMEOUT_MS = 5000
DEFAULT_PAGE_RETRY_MAX_ATTEMPTS = 2
DEFAULT_PAGE_RETRY_BASE_DELAY_MS = 100
DEFAULT_WRITE_RETRY_MAX_ATTEMPTS = 2
DEFAULT_WRITE_RETRY_BASE_DELAY_MS = 200

# Slow-load thresholds (ms); anything above is reported as a warning.
SLOW_THRESHOLD_TEMPLATES_MS = 1500.0
SLOW_THRESHOLD_TEMPLATE_MS = 2000.0
SLOW_THRESHOLD_APPLICATION_MS = 2000.0
SLOW_THRESHOLD_CONTACT_MS = 2500.0

# Client-side retry surface, independent of the server retry executor.
CLIENT_RETRY_MAX_AUTO = 3
CLIENT_RETRY_DELAYS_MS: tuple[int, ...] = (1000, 2000, 4000)

RELATED_APPLICATIONS_LIMIT = 6

__all__ = [
    "CLIENT_RETRY_DELAYS_MS",
    "CLIENT_RETRY_MAX_AUTO",
    "DEFAULT_PAGE_QUERY_TIMEOUT_MS",
    "DEFAULT_PAGE_RETRY_BASE_DELAY_MS",
    "DEFAULT_PAGE_RETRY_MAX_ATTEMPTS",
    "DEFAULT_WRITE_RETRY_BASE_DELAY_MS",
    "DEFAULT_WRITE_RETRY_MAX_ATTEMPTS",
    "ENV_PAGE_QUERY_TIMEOUT_MS",
    "ENV_PAGE_RETRY_BASE_DELAY_MS",
    "ENV_PAGE_RETRY_MAX_ATTEMPTS",
    "ENV_WRITE_RETRY_BASE_DELAY_MS",
    "ENV_WRITE_RETRY_MAX_ATTEMPTS",
    "RELATED_APPLICATIONS_LIMIT",
    "SLOW_THRESHOLD_APPLICATION_MS",
    "SLOW_THRESHOLD_CONTACT_MS",
    "SLOW_THRESHOLD_TEMPLATES_MS",
    "SLOW_THRESHOLD_TEMPLATE_MS",
]
