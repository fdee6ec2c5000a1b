"""Environment parsing for runtime settings.

Names and defaults live in `storefront/config/*`; this module resolves them
into the frozen dataclasses in `storefront/state/settings.py`. Malformed values
fall back to their defaults.
"""

from __future__ import annotations

import os

from storefront.state.retry import RetryPolicy
from storefront.state.rate import RateCategory, RateLimitPolicy
from storefront.config.environment import ENV_APP_ENV, DEFAULT_APP_ENV, APP_ENV_PRODUCTION
from storefront.state.settings import (
    AppSettings,
    PageSettings,
    EmailSettings,
    LimitsSettings,
    DatabaseSettings,
    MonitoringSettings,
)
from storefront.config.email import (
    ENV_RESEND_API_KEY,
    ENV_RESEND_API_URL,
    ENV_EMAIL_TIMEOUT_S,
    ENV_RESEND_TO_EMAIL,
    ENV_RESEND_FROM_EMAIL,
    DEFAULT_RESEND_API_URL,
    DEFAULT_EMAIL_TIMEOUT_S,
)
from storefront.config.monitoring import (
    ENV_MONITORING_LOGGER,
    ENV_MONITORING_ENABLED,
    DEFAULT_MONITORING_LOGGER,
    DEFAULT_MONITORING_ENABLED,
)
from storefront.config.pages import (
    ENV_PAGE_QUERY_TIMEOUT_MS,
    ENV_PAGE_RETRY_MAX_ATTEMPTS,
    ENV_PAGE_RETRY_BASE_DELAY_MS,
    ENV_WRITE_RETRY_MAX_ATTEMPTS,
    DEFAULT_PAGE_QUERY_TIMEOUT_MS,
    ENV_WRITE_RETRY_BASE_DELAY_MS,
    DEFAULT_PAGE_RETRY_MAX_ATTEMPTS,
    DEFAULT_PAGE_RETRY_BASE_DELAY_MS,
    DEFAULT_WRITE_RETRY_MAX_ATTEMPTS,
    DEFAULT_WRITE_RETRY_BASE_DELAY_MS,
)
from storefront.config.database import (
    ENV_DB_HOST,
    ENV_DB_NAME,
    ENV_DB_PORT,
    ENV_DB_USER,
    DEFAULT_DB_HOST,
    DEFAULT_DB_NAME,
    DEFAULT_DB_PORT,
    DEFAULT_DB_USER,
    ENV_DATABASE_URL,
    ENV_DB_PASSWORD,
    ENV_DB_SSL_CA_PATH,
    ENV_DB_POOL_MAX_SIZE,
    ENV_DB_POOL_MIN_SIZE,
    ENV_DB_IDLE_LIFETIME_S,
    ENV_DB_SLOW_ACQUIRE_MS,
    ENV_DB_RECONNECT_DELAY_S,
    ENV_DB_RECONNECT_ATTEMPTS,
    DEFAULT_DB_RECONNECT_DELAY_S,
    DEFAULT_DB_RECONNECT_ATTEMPTS,
    ENV_DB_HEALTH_CHECK_INTERVAL_S,
    DEFAULT_DB_HEALTH_CHECK_INTERVAL_S,
    DEFAULT_DB_HEALTH_CHECK_INTERVAL_DEV_S,
    ENV_DB_CONNECT_TIMEOUT_S,
    DEFAULT_DB_POOL_MAX_SIZE,
    DEFAULT_DB_POOL_MIN_SIZE,
    DEFAULT_DB_IDLE_LIFETIME_S,
    DEFAULT_DB_SLOW_ACQUIRE_MS,
    DEFAULT_DB_CONNECT_TIMEOUT_S,
)
from storefront.config.limits import (
    ENV_RATE_LIMIT_ALLOWLIST,
    ENV_TRUSTED_PROXIES,
    ENV_RATE_LIMIT_STATS_TOKEN,
    ENV_TRUST_PROXY_HEADERS,
    ENV_RATE_LIMIT_API_REQUESTS,
    DEFAULT_TRUSTED_PROXIES,
    DEFAULT_RATE_LIMIT_STATS_TOKEN,
    DEFAULT_TRUST_PROXY_HEADERS,
    ENV_RATE_LIMIT_API_WINDOW_S,
    DEFAULT_RATE_LIMIT_ALLOWLIST,
    ENV_RATE_LIMIT_ORDER_REQUESTS,
    ENV_RATE_LIMIT_CACHE_MAX_SIZE,
    ENV_RATE_LIMIT_ORDER_WINDOW_S,
    ENV_RATE_LIMIT_PUBLIC_REQUESTS,
    DEFAULT_RATE_LIMIT_API_REQUESTS,
    ENV_RATE_LIMIT_CONTACT_REQUESTS,
    ENV_RATE_LIMIT_PUBLIC_WINDOW_S,
    ENV_RATE_LIMIT_SWEEP_INTERVAL_S,
    DEFAULT_RATE_LIMIT_API_WINDOW_S,
    ENV_RATE_LIMIT_CONTACT_WINDOW_S,
    DEFAULT_RATE_LIMIT_ORDER_REQUESTS,
    DEFAULT_RATE_LIMIT_CACHE_MAX_SIZE,
    DEFAULT_RATE_LIMIT_ORDER_WINDOW_S,
    DEFAULT_RATE_LIMIT_PUBLIC_REQUESTS,
    DEFAULT_RATE_LIMIT_CONTACT_REQUESTS,
    DEFAULT_RATE_LIMIT_PUBLIC_WINDOW_S,
    DEFAULT_RATE_LIMIT_SWEEP_INTERVAL_S,
    DEFAULT_RATE_LIMIT_CONTACT_WINDOW_S,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _load_environment() -> str:
    return _str_env(ENV_APP_ENV, DEFAULT_APP_ENV).lower()


def _load_database_settings(*, production: bool) -> DatabaseSettings:
    min_size = max(1, _int_env(ENV_DB_POOL_MIN_SIZE, DEFAULT_DB_POOL_MIN_SIZE))
    max_size = max(min_size, _int_env(ENV_DB_POOL_MAX_SIZE, DEFAULT_DB_POOL_MAX_SIZE))
    dsn = (os.getenv(ENV_DATABASE_URL) or "").strip() or None
    ssl_ca_path = (os.getenv(ENV_DB_SSL_CA_PATH) or "").strip() or None
    health_interval = DEFAULT_DB_HEALTH_CHECK_INTERVAL_S if production else DEFAULT_DB_HEALTH_CHECK_INTERVAL_DEV_S

    return DatabaseSettings(
        dsn=dsn,
        host=_str_env(ENV_DB_HOST, DEFAULT_DB_HOST),
        port=_int_env(ENV_DB_PORT, DEFAULT_DB_PORT),
        name=_str_env(ENV_DB_NAME, DEFAULT_DB_NAME),
        user=_str_env(ENV_DB_USER, DEFAULT_DB_USER),
        password=os.getenv(ENV_DB_PASSWORD) or "",
        pool_min_size=min_size,
        pool_max_size=max_size,
        connect_timeout_s=_float_env(ENV_DB_CONNECT_TIMEOUT_S, DEFAULT_DB_CONNECT_TIMEOUT_S),
        idle_lifetime_s=_float_env(ENV_DB_IDLE_LIFETIME_S, DEFAULT_DB_IDLE_LIFETIME_S),
        ssl_ca_path=ssl_ca_path,
        slow_acquire_ms=_float_env(ENV_DB_SLOW_ACQUIRE_MS, DEFAULT_DB_SLOW_ACQUIRE_MS),
        health_check_interval_s=_float_env(ENV_DB_HEALTH_CHECK_INTERVAL_S, health_interval),
        reconnect_attempts=max(1, _int_env(ENV_DB_RECONNECT_ATTEMPTS, DEFAULT_DB_RECONNECT_ATTEMPTS)),
        reconnect_delay_s=max(0.0, _float_env(ENV_DB_RECONNECT_DELAY_S, DEFAULT_DB_RECONNECT_DELAY_S)),
    )


def _load_email_settings() -> EmailSettings:
    return EmailSettings(
        api_key=(os.getenv(ENV_RESEND_API_KEY) or "").strip(),
        from_email=(os.getenv(ENV_RESEND_FROM_EMAIL) or "").strip(),
        to_email=(os.getenv(ENV_RESEND_TO_EMAIL) or "").strip(),
        api_url=_str_env(ENV_RESEND_API_URL, DEFAULT_RESEND_API_URL),
        timeout_s=_float_env(ENV_EMAIL_TIMEOUT_S, DEFAULT_EMAIL_TIMEOUT_S),
    )


def _policy(requests_env: str, requests_default: int, window_env: str, window_default: float) -> RateLimitPolicy:
    return RateLimitPolicy(
        limit=_int_env(requests_env, requests_default),
        window_seconds=_float_env(window_env, window_default),
    )


def _load_limits_settings() -> LimitsSettings:
    policies = {
        RateCategory.PUBLIC: _policy(
            ENV_RATE_LIMIT_PUBLIC_REQUESTS,
            DEFAULT_RATE_LIMIT_PUBLIC_REQUESTS,
            ENV_RATE_LIMIT_PUBLIC_WINDOW_S,
            DEFAULT_RATE_LIMIT_PUBLIC_WINDOW_S,
        ),
        RateCategory.API: _policy(
            ENV_RATE_LIMIT_API_REQUESTS,
            DEFAULT_RATE_LIMIT_API_REQUESTS,
            ENV_RATE_LIMIT_API_WINDOW_S,
            DEFAULT_RATE_LIMIT_API_WINDOW_S,
        ),
        RateCategory.CONTACT: _policy(
            ENV_RATE_LIMIT_CONTACT_REQUESTS,
            DEFAULT_RATE_LIMIT_CONTACT_REQUESTS,
            ENV_RATE_LIMIT_CONTACT_WINDOW_S,
            DEFAULT_RATE_LIMIT_CONTACT_WINDOW_S,
        ),
        RateCategory.ORDER: _policy(
            ENV_RATE_LIMIT_ORDER_REQUESTS,
            DEFAULT_RATE_LIMIT_ORDER_REQUESTS,
            ENV_RATE_LIMIT_ORDER_WINDOW_S,
            DEFAULT_RATE_LIMIT_ORDER_WINDOW_S,
        ),
    }
    return LimitsSettings(
        policies=policies,
        cache_max_size=max(1, _int_env(ENV_RATE_LIMIT_CACHE_MAX_SIZE, DEFAULT_RATE_LIMIT_CACHE_MAX_SIZE)),
        sweep_interval_s=_float_env(ENV_RATE_LIMIT_SWEEP_INTERVAL_S, DEFAULT_RATE_LIMIT_SWEEP_INTERVAL_S),
        allowlist=frozenset(_list_env(ENV_RATE_LIMIT_ALLOWLIST, DEFAULT_RATE_LIMIT_ALLOWLIST)),
        trust_proxy_headers=_bool_env(ENV_TRUST_PROXY_HEADERS, DEFAULT_TRUST_PROXY_HEADERS),
        trusted_proxies=frozenset(_list_env(ENV_TRUSTED_PROXIES, DEFAULT_TRUSTED_PROXIES)),
        stats_token=_str_env(ENV_RATE_LIMIT_STATS_TOKEN, DEFAULT_RATE_LIMIT_STATS_TOKEN),
    )


def _retry_policy(attempts_env: str, attempts_default: int, delay_env: str, delay_default: int) -> RetryPolicy:
    return RetryPolicy(
        max_attempts=max(1, _int_env(attempts_env, attempts_default)),
        base_delay_ms=max(0, _int_env(delay_env, delay_default)),
    )


def _load_page_settings() -> PageSettings:
    return PageSettings(
        query_timeout_ms=_int_env(ENV_PAGE_QUERY_TIMEOUT_MS, DEFAULT_PAGE_QUERY_TIMEOUT_MS),
        read_retry=_retry_policy(
            ENV_PAGE_RETRY_MAX_ATTEMPTS,
            DEFAULT_PAGE_RETRY_MAX_ATTEMPTS,
            ENV_PAGE_RETRY_BASE_DELAY_MS,
            DEFAULT_PAGE_RETRY_BASE_DELAY_MS,
        ),
        write_retry=_retry_policy(
            ENV_WRITE_RETRY_MAX_ATTEMPTS,
            DEFAULT_WRITE_RETRY_MAX_ATTEMPTS,
            ENV_WRITE_RETRY_BASE_DELAY_MS,
            DEFAULT_WRITE_RETRY_BASE_DELAY_MS,
        ),
    )


def _load_monitoring_settings() -> MonitoringSettings:
    return MonitoringSettings(
        enabled=_bool_env(ENV_MONITORING_ENABLED, DEFAULT_MONITORING_ENABLED),
        logger_name=_str_env(ENV_MONITORING_LOGGER, DEFAULT_MONITORING_LOGGER),
    )


def load_settings() -> AppSettings:
    environment = _load_environment()
    return AppSettings(
        environment=environment,
        database=_load_database_settings(production=environment == APP_ENV_PRODUCTION),
        email=_load_email_settings(),
        limits=_load_limits_settings(),
        pages=_load_page_settings(),
        monitoring=_load_monitoring_settings(),
    )


__all__ = ["load_settings"]
