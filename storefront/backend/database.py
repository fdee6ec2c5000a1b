"""asyncpg connection pool with per-query timeouts.

The pool is created lazily on first use (and warmed at startup). Every query
acquires a connection with `async with pool.acquire()` so it is returned to
the pool on every exit path.
"""

from __future__ import annotations

import os
import re
import ssl
import time
import asyncio
import logging
from typing import Any
from collections.abc import Callable, Awaitable

import asyncpg

from storefront.state.settings import DatabaseSettings
from storefront.config.database import DEFAULT_DB_SSL_CA_PATHS

logger = logging.getLogger(__name__)

PoolFactory = Callable[..., Awaitable[Any]]


def normalize_database_url(url: str) -> str:
    """Strip SQLAlchemy driver suffixes and `sslmode`, which asyncpg rejects."""
    if url.startswith("postgresql+asyncpg://"):
        url = url.replace("postgresql+asyncpg://", "postgresql://", 1)
    if "?sslmode=" in url or "&sslmode=" in url:
        url = re.sub(r"[?&]sslmode=[^&]*", "", url)
    return url


def find_ca_certificate(explicit_path: str | None, candidates: tuple[str, ...] = DEFAULT_DB_SSL_CA_PATHS) -> str | None:
    paths = (explicit_path,) if explicit_path else candidates
    for path in paths:
        if path and os.path.isfile(path):
            return path
    return None


def build_ssl(settings: DatabaseSettings, *, production: bool) -> ssl.SSLContext | str | None:
    if not production:
        return None
    ca_path = find_ca_certificate(settings.ssl_ca_path)
    if ca_path is None:
        logger.warning("database CA certificate not found; using TLS without CA verification")
        return "require"
    logger.info("database CA certificate loaded from %s", ca_path)
    return ssl.create_default_context(cafile=ca_path)


class Database:
    def __init__(
        self,
        settings: DatabaseSettings,
        *,
        production: bool = True,
        pool_factory: PoolFactory | None = None,
    ) -> None:
        self._settings = settings
        self._production = production
        self._pool_factory = pool_factory or asyncpg.create_pool
        self._pool: Any = None
        self._lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> Any:
        if self._pool is not None:
            return self._pool
        async with self._lock:
            if self._pool is None:
                self._pool = await self._create_pool()
        return self._pool

    async def _create_pool(self) -> Any:
        settings = self._settings
        kwargs: dict[str, Any] = {
            "min_size": settings.pool_min_size,
            "max_size": settings.pool_max_size,
            "timeout": settings.connect_timeout_s,
            "max_inactive_connection_lifetime": settings.idle_lifetime_s,
            "ssl": build_ssl(settings, production=self._production),
        }
        if settings.dsn:
            kwargs["dsn"] = normalize_database_url(settings.dsn)
        else:
            kwargs.update(
                host=settings.host,
                port=settings.port,
                database=settings.name,
                user=settings.user,
                password=settings.password,
            )

        logger.info(
            "creating database pool (min=%s, max=%s)",
            settings.pool_min_size,
            settings.pool_max_size,
        )
        pool = await self._pool_factory(**kwargs)
        if pool is None:
            raise RuntimeError("Failed to create connection pool")
        return pool

    async def fetch(self, query: str, *args: Any, timeout_ms: int | None = None) -> list[Any]:
        return await self._run("fetch", query, args, timeout_ms)

    async def fetchrow(self, query: str, *args: Any, timeout_ms: int | None = None) -> Any:
        return await self._run("fetchrow", query, args, timeout_ms)

    async def fetchval(self, query: str, *args: Any, timeout_ms: int | None = None) -> Any:
        return await self._run("fetchval", query, args, timeout_ms)

    async def _run(self, method: str, query: str, args: tuple[Any, ...], timeout_ms: int | None) -> Any:
        pool = await self.connect()

        async def _execute() -> Any:
            started = time.perf_counter()
            async with pool.acquire() as conn:
                acquire_ms = (time.perf_counter() - started) * 1000.0
                if acquire_ms > self._settings.slow_acquire_ms:
                    logger.warning("slow database connection acquire: %.0fms", acquire_ms)
                return await getattr(conn, method)(query, *args)

        if timeout_ms is None or timeout_ms <= 0:
            return await _execute()
        try:
            return await asyncio.wait_for(_execute(), timeout=timeout_ms / 1000.0)
        except asyncio.TimeoutError as exc:
            raise TimeoutError("Database query timeout") from exc

    async def health_check(self) -> dict[str, Any]:
        started = time.perf_counter()
        try:
            await self.fetchval("SELECT 1")
        except Exception as exc:
            logger.error("database health check failed: %s", exc)
            return {"healthy": False, "error": str(exc)}

        pool = self._pool
        return {
            "healthy": True,
            "response_ms": round((time.perf_counter() - started) * 1000.0, 1),
            "size": pool.get_size(),
            "idle": pool.get_idle_size(),
            "max_size": pool.get_max_size(),
        }

    async def reconnect(self) -> None:
        """Replace the pool with a fresh one and prove it answers a query."""
        async with self._lock:
            pool, self._pool = self._pool, None
            if pool is not None:
                try:
                    await pool.close()
                except Exception as exc:
                    logger.warning("closing stale database pool failed: %s", exc)
            self._pool = await self._create_pool()
        await self.fetchval("SELECT 1")

    async def close(self) -> None:
        async with self._lock:
            pool, self._pool = self._pool, None
        if pool is not None:
            logger.info("closing database pool")
            await pool.close()


__all__ = ["Database", "build_ssl", "find_ca_certificate", "normalize_database_url"]
