from __future__ import annotations

import pytest

from storefront.state.rate import RateCategory
from storefront.runtime.settings import load_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "APP_ENV",
        "DATABASE_URL",
        "RATE_LIMIT_CONTACT_REQUESTS",
        "RATE_LIMIT_CACHE_MAX_SIZE",
        "RATE_LIMIT_ALLOWLIST",
        "PAGE_QUERY_TIMEOUT_MS",
        "RESEND_API_KEY",
        "TRUST_PROXY_HEADERS",
        "TRUSTED_PROXIES",
        "RATE_LIMIT_STATS_TOKEN",
        "DB_HEALTH_CHECK_INTERVAL_S",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.environment == "production"
    assert settings.is_production is True
    assert settings.database.dsn is None
    assert settings.database.pool_min_size == 10
    assert settings.database.pool_max_size == 20
    assert settings.limits.policies[RateCategory.PUBLIC].limit == 30
    assert settings.limits.policies[RateCategory.API].limit == 20
    assert settings.limits.policies[RateCategory.CONTACT].limit == 3
    assert settings.limits.policies[RateCategory.CONTACT].window_seconds == 600.0
    assert settings.limits.policies[RateCategory.ORDER].limit == 2
    assert settings.limits.policies[RateCategory.ORDER].window_seconds == 300.0
    assert settings.limits.cache_max_size == 200
    assert settings.limits.allowlist == frozenset({"127.0.0.1", "::1"})
    assert settings.limits.trust_proxy_headers is False
    assert settings.limits.trusted_proxies == frozenset()
    assert settings.limits.stats_token == ""
    assert settings.database.health_check_interval_s == 3600.0
    assert settings.database.reconnect_attempts == 3
    assert settings.pages.query_timeout_ms == 5000
    assert settings.pages.read_retry.max_attempts == 2
    assert settings.pages.read_retry.base_delay_ms == 100
    assert settings.pages.write_retry.base_delay_ms == 200
    assert settings.email.configured is False


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "Development")
    monkeypatch.setenv("RATE_LIMIT_CONTACT_REQUESTS", "5")
    monkeypatch.setenv("RATE_LIMIT_ALLOWLIST", "10.0.0.1, 10.0.0.2")
    monkeypatch.setenv("RESEND_API_KEY", "re_test")
    monkeypatch.setenv("RESEND_FROM_EMAIL", "site@example.com")
    monkeypatch.setenv("RESEND_TO_EMAIL", "owner@example.com")
    monkeypatch.setenv("TRUST_PROXY_HEADERS", "true")
    monkeypatch.setenv("TRUSTED_PROXIES", "10.0.0.5, 10.0.0.6")
    monkeypatch.delenv("DB_HEALTH_CHECK_INTERVAL_S", raising=False)

    settings = load_settings()

    assert settings.environment == "development"
    assert settings.is_production is False
    assert settings.limits.policies[RateCategory.CONTACT].limit == 5
    assert settings.limits.allowlist == frozenset({"10.0.0.1", "10.0.0.2"})
    assert settings.email.configured is True
    assert settings.limits.trust_proxy_headers is True
    assert settings.limits.trusted_proxies == frozenset({"10.0.0.5", "10.0.0.6"})
    assert settings.database.health_check_interval_s == 300.0


def test_malformed_numbers_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RATE_LIMIT_CACHE_MAX_SIZE", "lots")
    monkeypatch.setenv("PAGE_RETRY_MAX_ATTEMPTS", "0")
    monkeypatch.setenv("DB_POOL_MIN_SIZE", "30")
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "5")

    settings = load_settings()

    assert settings.limits.cache_max_size == 200
    assert settings.pages.read_retry.max_attempts == 1
    assert settings.database.pool_max_size == 30
