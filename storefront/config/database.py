"""PostgreSQL configuration (env names and defaults only)."""

from __future__ import annotations

ENV_DATABASE_URL = "DATABASE_URL"
ENV_DB_HOST = "DB_HOST"
ENV_DB_PORT = "DB_PORT"
ENV_DB_NAME = "DB_NAME"
ENV_DB_USER = "DB_USER"
ENV_DB_PASSWORD = "DB_PASSWORD"
ENV_DB_POOL_MIN_SIZE = "DB_POOL_MIN_SIZE"
ENV_DB_POOL_MAX_SIZE = "DB_POOL_MAX_SIZE"
ENV_DB_CONNECT_TIMEOUT_S = "DB_CONNECT_TIMEOUT_S"
ENV_DB_IDLE_LIFETIME_S = "DB_IDLE_LIFETIME_S"
ENV_DB_SSL_CA_PATH = "DB_SSL_CA_PATH"
ENV_DB_SLOW_ACQUIRE_MS = "DB_SLOW_ACQUIRE_MS"
ENV_DB_HEALTH_CHECK_INTERVAL_S = "DB_HEALTH_CHECK_INTERVAL_S"
ENV_DB_RECONNECT_ATTEMPTS = "DB_RECONNECT_ATTEMPTS"
ENV_DB_RECONNECT_DELAY_S = "DB_RECONNECT_DELAY_S"

DEFAULT_DB_HOST = "localhost"
DEFAULT_DB_PORT = 5432
DEFAULT_DB_NAME = "benew"
DEFAULT_DB_USER = "postgres"

# Sized for a low-traffic storefront.
DEFAULT_DB_POOL_MIN_SIZE = 10
DEFAULT_DB_POOL_MAX_SIZE = 20
DEFAULT_DB_CONNECT_TIMEOUT_S = 5.0
DEFAULT_DB_IDLE_LIFETIME_S = 30.0
DEFAULT_DB_SLOW_ACQUIRE_MS = 2000.0

# Hourly in production, every 5 minutes elsewhere; 0 disables the monitor.
DEFAULT_DB_HEALTH_CHECK_INTERVAL_S = 60 * 60.0
DEFAULT_DB_HEALTH_CHECK_INTERVAL_DEV_S = 5 * 60.0
DEFAULT_DB_RECONNECT_ATTEMPTS = 3
DEFAULT_DB_RECONNECT_DELAY_S = 2.0

# Searched in order when DB_SSL_CA_PATH is unset (production only).
DEFAULT_DB_SSL_CA_PATHS: tuple[str, ...] = (
    "/var/www/benew/certs/ca-certificate.crt",
    "certs/ca-certificate.crt",
)

__all__ = [
    "DEFAULT_DB_CONNECT_TIMEOUT_S",
    "DEFAULT_DB_HEALTH_CHECK_INTERVAL_DEV_S",
    "DEFAULT_DB_HEALTH_CHECK_INTERVAL_S",
    "DEFAULT_DB_HOST",
    "DEFAULT_DB_IDLE_LIFETIME_S",
    "DEFAULT_DB_NAME",
    "DEFAULT_DB_POOL_MAX_SIZE",
    "DEFAULT_DB_POOL_MIN_SIZE",
    "DEFAULT_DB_PORT",
    "DEFAULT_DB_RECONNECT_ATTEMPTS",
    "DEFAULT_DB_RECONNECT_DELAY_S",
    "DEFAULT_DB_SLOW_ACQUIRE_MS",
    "DEFAULT_DB_SSL_CA_PATHS",
    "DEFAULT_DB_USER",
    "ENV_DATABASE_URL",
    "ENV_DB_CONNECT_TIMEOUT_S",
    "ENV_DB_HEALTH_CHECK_INTERVAL_S",
    "ENV_DB_HOST",
    "ENV_DB_IDLE_LIFETIME_S",
    "ENV_DB_NAME",
    "ENV_DB_PASSWORD",
    "ENV_DB_POOL_MAX_SIZE",
    "ENV_DB_POOL_MIN_SIZE",
    "ENV_DB_PORT",
    "ENV_DB_RECONNECT_ATTEMPTS",
    "ENV_DB_RECONNECT_DELAY_S",
    "ENV_DB_SLOW_ACQUIRE_MS",
    "ENV_DB_SSL_CA_PATH",
    "ENV_DB_USER",
]
