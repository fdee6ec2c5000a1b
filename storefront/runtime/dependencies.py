"""Runtime dependency construction (database pool, mailer, rate governance, pages, forms)."""

from __future__ import annotations

import logging

import httpx

from storefront.state import RuntimeDeps
from storefront.forms.order import OrderSubmitter
from storefront.pages.loader import PageLoader
from storefront.pages.contact import ContactPage
from storefront.pages.catalog import CatalogPages
from storefront.backend.orders import OrderRepository
from storefront.state.settings import AppSettings
from storefront.backend.catalog import CatalogRepository
from storefront.forms.contact import ContactSubmitter
from storefront.backend.mailer import ResendMailer
from storefront.handlers.limits import RateGovernor
from storefront.backend.database import Database, PoolFactory
from storefront.backend.health import DatabaseHealthMonitor
from storefront.handlers.sweeper import RateCacheSweeper
from storefront.monitoring.reporter import Reporter

from .settings import load_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(
    settings: AppSettings | None = None,
    *,
    pool_factory: PoolFactory | None = None,
    email_client: httpx.AsyncClient | None = None,
) -> RuntimeDeps:
    settings = settings or load_settings()
    production = settings.is_production

    reporter = Reporter(enabled=settings.monitoring.enabled, logger_name=settings.monitoring.logger_name)
    governor = RateGovernor(
        policies=settings.limits.policies,
        capacity=settings.limits.cache_max_size,
        allowlist=settings.limits.allowlist,
    )
    sweeper = RateCacheSweeper(governor, interval_s=settings.limits.sweep_interval_s)

    database = Database(settings.database, production=production, pool_factory=pool_factory)
    health_monitor = DatabaseHealthMonitor(
        database,
        reporter,
        interval_s=settings.database.health_check_interval_s,
        reconnect_attempts=settings.database.reconnect_attempts,
        reconnect_delay_s=settings.database.reconnect_delay_s,
    )
    mailer = ResendMailer(settings.email, client=email_client)
    if not mailer.configured:
        logger.warning("email service is not configured; contact submissions will fail")

    timeout_ms = settings.pages.query_timeout_ms
    catalog = CatalogRepository(database, timeout_ms=timeout_ms)
    orders = OrderRepository(database, timeout_ms=timeout_ms)
    loader = PageLoader(reporter=reporter, retry_policy=settings.pages.read_retry, production=production)

    return RuntimeDeps(
        settings=settings,
        reporter=reporter,
        governor=governor,
        sweeper=sweeper,
        database=database,
        health_monitor=health_monitor,
        mailer=mailer,
        catalog_pages=CatalogPages(loader=loader, catalog=catalog),
        contact_page=ContactPage(loader=loader, mailer=mailer),
        contact_form=ContactSubmitter(
            mailer=mailer,
            governor=governor,
            reporter=reporter,
            retry_policy=settings.pages.write_retry,
            production=production,
        ),
        order_form=OrderSubmitter(
            orders=orders,
            governor=governor,
            reporter=reporter,
            retry_policy=settings.pages.write_retry,
            production=production,
        ),
    )


async def start_runtime(deps: RuntimeDeps) -> None:
    """Start background tasks and warm the database pool."""
    deps.sweeper.start()
    deps.health_monitor.start()
    try:
        await deps.database.connect()
    except Exception as exc:
        logger.error("database warm-up failed; pool will be created on first use: %s", exc)
        deps.reporter.report_exception(exc, {"tags": {"component": "database", "operation": "warm_up"}})


__all__ = ["RuntimeDeps", "build_runtime_deps", "start_runtime"]
