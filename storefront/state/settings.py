"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.config.environment import APP_ENV_PRODUCTION
from storefront.config.database import (
    DEFAULT_DB_RECONNECT_DELAY_S,
    DEFAULT_DB_RECONNECT_ATTEMPTS,
    DEFAULT_DB_HEALTH_CHECK_INTERVAL_S,
)

from .rate import RateCategory, RateLimitPolicy
from .retry import RetryPolicy


@dataclass(frozen=True, slots=True)
class DatabaseSettings:
    dsn: str | None
    host: str
    port: int
    name: str
    user: str
    password: str
    pool_min_size: int
    pool_max_size: int
    connect_timeout_s: float
    idle_lifetime_s: float
    ssl_ca_path: str | None
    slow_acquire_ms: float
    health_check_interval_s: float = DEFAULT_DB_HEALTH_CHECK_INTERVAL_S
    reconnect_attempts: int = DEFAULT_DB_RECONNECT_ATTEMPTS
    reconnect_delay_s: float = DEFAULT_DB_RECONNECT_DELAY_S


@dataclass(frozen=True, slots=True)
class EmailSettings:
    api_key: str
    from_email: str
    to_email: str
    api_url: str
    timeout_s: float

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.from_email and self.to_email)


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    policies: dict[RateCategory, RateLimitPolicy]
    cache_max_size: int
    sweep_interval_s: float
    allowlist: frozenset[str]
    trust_proxy_headers: bool
    trusted_proxies: frozenset[str] = frozenset()
    stats_token: str = ""


@dataclass(frozen=True, slots=True)
class PageSettings:
    query_timeout_ms: int
    read_retry: RetryPolicy
    write_retry: RetryPolicy


@dataclass(frozen=True, slots=True)
class MonitoringSettings:
    enabled: bool
    logger_name: str


@dataclass(frozen=True, slots=True)
class AppSettings:
    environment: str
    database: DatabaseSettings
    email: EmailSettings
    limits: LimitsSettings
    pages: PageSettings
    monitoring: MonitoringSettings

    @property
    def is_production(self) -> bool:
        return self.environment == APP_ENV_PRODUCTION


__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "EmailSettings",
    "LimitsSettings",
    "MonitoringSettings",
    "PageSettings",
]
