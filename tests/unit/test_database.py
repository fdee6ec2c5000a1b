from __future__ import annotations

import asyncio
from typing import Any

import pytest

from storefront.state.settings import DatabaseSettings
from storefront.backend.database import Database, build_ssl, normalize_database_url


def _settings(**overrides: Any) -> DatabaseSettings:
    values: dict[str, Any] = {
        "dsn": None,
        "host": "db.internal",
        "port": 5432,
        "name": "benew",
        "user": "app",
        "password": "secret",
        "pool_min_size": 1,
        "pool_max_size": 2,
        "connect_timeout_s": 5.0,
        "idle_lifetime_s": 30.0,
        "ssl_ca_path": None,
        "slow_acquire_ms": 2000.0,
    }
    values.update(overrides)
    return DatabaseSettings(**values)


class _FakeConnection:
    def __init__(self, delay_s: float = 0.0) -> None:
        self.delay_s = delay_s
        self.queries: list[tuple[str, tuple[Any, ...]]] = []

    async def fetch(self, query: str, *args: Any) -> list[dict[str, Any]]:
        self.queries.append((query, args))
        await asyncio.sleep(self.delay_s)
        return [{"value": 1}]

    async def fetchrow(self, query: str, *args: Any) -> dict[str, Any]:
        self.queries.append((query, args))
        await asyncio.sleep(self.delay_s)
        return {"value": 1}

    async def fetchval(self, query: str, *args: Any) -> int:
        self.queries.append((query, args))
        await asyncio.sleep(self.delay_s)
        return 1


class _Acquire:
    def __init__(self, pool: _FakePool) -> None:
        self._pool = pool

    async def __aenter__(self) -> _FakeConnection:
        self._pool.acquired += 1
        return self._pool.connection

    async def __aexit__(self, *exc: Any) -> None:
        self._pool.released += 1


class _FakePool:
    def __init__(self, connection: _FakeConnection) -> None:
        self.connection = connection
        self.acquired = 0
        self.released = 0
        self.closed = False

    def acquire(self) -> _Acquire:
        return _Acquire(self)

    async def close(self) -> None:
        self.closed = True

    def get_size(self) -> int:
        return 1

    def get_idle_size(self) -> int:
        return 1

    def get_max_size(self) -> int:
        return 2


class _PoolFactory:
    def __init__(self, pool: _FakePool) -> None:
        self.pool = pool
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, **kwargs: Any) -> _FakePool:
        self.calls.append(kwargs)
        await asyncio.sleep(0)
        return self.pool


def test_normalize_database_url() -> None:
    assert normalize_database_url("postgresql+asyncpg://u@h/db") == "postgresql://u@h/db"
    assert normalize_database_url("postgresql://u@h/db?sslmode=require") == "postgresql://u@h/db"


def test_build_ssl_disabled_outside_production() -> None:
    assert build_ssl(_settings(), production=False) is None


def test_build_ssl_requires_tls_without_ca(tmp_path) -> None:
    missing = tmp_path / "missing.crt"
    assert build_ssl(_settings(ssl_ca_path=str(missing)), production=True) == "require"


@pytest.mark.asyncio
async def test_pool_created_once_under_concurrency() -> None:
    factory = _PoolFactory(_FakePool(_FakeConnection()))
    db = Database(_settings(), production=False, pool_factory=factory)

    await asyncio.gather(db.connect(), db.connect(), db.connect())

    assert len(factory.calls) == 1
    kwargs = factory.calls[0]
    assert kwargs["host"] == "db.internal"
    assert kwargs["database"] == "benew"
    assert kwargs["min_size"] == 1
    assert kwargs["max_size"] == 2


@pytest.mark.asyncio
async def test_dsn_takes_precedence() -> None:
    factory = _PoolFactory(_FakePool(_FakeConnection()))
    db = Database(_settings(dsn="postgresql+asyncpg://u:p@h/db"), production=False, pool_factory=factory)
    await db.connect()
    assert factory.calls[0]["dsn"] == "postgresql://u:p@h/db"
    assert "host" not in factory.calls[0]


@pytest.mark.asyncio
async def test_query_acquires_and_releases_connection() -> None:
    pool = _FakePool(_FakeConnection())
    db = Database(_settings(), production=False, pool_factory=_PoolFactory(pool))

    rows = await db.fetch("SELECT 1", timeout_ms=1000)
    row = await db.fetchrow("SELECT $1", "x")

    assert rows == [{"value": 1}]
    assert row == {"value": 1}
    assert pool.acquired == pool.released == 2
    assert pool.connection.queries[1] == ("SELECT $1", ("x",))


@pytest.mark.asyncio
async def test_query_timeout_raises_timeout_error_and_releases() -> None:
    pool = _FakePool(_FakeConnection(delay_s=0.5))
    db = Database(_settings(), production=False, pool_factory=_PoolFactory(pool))

    with pytest.raises(TimeoutError, match="Database query timeout"):
        await db.fetchval("SELECT pg_sleep(1)", timeout_ms=10)

    assert pool.acquired == pool.released == 1


@pytest.mark.asyncio
async def test_health_check_and_close() -> None:
    pool = _FakePool(_FakeConnection())
    db = Database(_settings(), production=False, pool_factory=_PoolFactory(pool))

    health = await db.health_check()
    assert health["healthy"] is True
    assert health["max_size"] == 2

    await db.close()
    assert pool.closed is True
    assert db.connected is False


@pytest.mark.asyncio
async def test_health_check_reports_failure() -> None:
    async def _failing_factory(**_kwargs: Any) -> Any:
        raise ConnectionRefusedError("connection refused")

    db = Database(_settings(), production=False, pool_factory=_failing_factory)
    health = await db.health_check()
    assert health["healthy"] is False
    assert "refused" in health["error"]


@pytest.mark.asyncio
async def test_reconnect_replaces_pool_and_verifies_it() -> None:
    first = _FakePool(_FakeConnection())
    second = _FakePool(_FakeConnection())
    pools = [first, second]

    async def _factory(**_kwargs: Any) -> _FakePool:
        return pools.pop(0)

    db = Database(_settings(), production=False, pool_factory=_factory)
    await db.connect()
    await db.reconnect()

    assert first.closed is True
    assert second.closed is False
    assert second.connection.queries == [("SELECT 1", ())]
