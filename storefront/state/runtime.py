"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from storefront.forms.order import OrderSubmitter
    from storefront.pages.contact import ContactPage
    from storefront.pages.catalog import CatalogPages
    from storefront.state.settings import AppSettings
    from storefront.backend.database import Database
    from storefront.backend.health import DatabaseHealthMonitor
    from storefront.forms.contact import ContactSubmitter
    from storefront.backend.mailer import ResendMailer
    from storefront.handlers.limits import RateGovernor
    from storefront.handlers.sweeper import RateCacheSweeper
    from storefront.monitoring.reporter import Reporter


@dataclass(slots=True)
class RuntimeDeps:
    settings: AppSettings
    reporter: Reporter
    governor: RateGovernor
    sweeper: RateCacheSweeper
    database: Database
    health_monitor: DatabaseHealthMonitor
    mailer: ResendMailer
    catalog_pages: CatalogPages
    contact_page: ContactPage
    contact_form: ContactSubmitter
    order_form: OrderSubmitter

    async def shutdown(self) -> None:
        try:
            await self.sweeper.stop()
        except Exception:
            logger.exception("rate cache sweeper shutdown failed")
        try:
            await self.health_monitor.stop()
        except Exception:
            logger.exception("database health monitor shutdown failed")
        try:
            await self.mailer.aclose()
        except Exception:
            logger.exception("mailer shutdown failed")
        try:
            await self.database.close()
        except Exception:
            logger.exception("database shutdown failed")


__all__ = ["RuntimeDeps"]
