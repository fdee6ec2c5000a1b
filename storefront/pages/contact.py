"""Contact page service check."""

from __future__ import annotations

from typing import Any

from storefront.state.pages import PageView
from storefront.errors import ConfigurationError
from storefront.config.pages import SLOW_THRESHOLD_CONTACT_MS

from .loader import PageLoader


class ContactPage:
    def __init__(self, *, loader: PageLoader, mailer: Any) -> None:
        self._loader = loader
        self._mailer = mailer

    async def _check_services(self) -> dict[str, Any]:
        if not self._mailer.configured:
            raise ConfigurationError("Email service not configured")
        return {"services": {"email_service": True, "form_validation": True, "rate_limit": True}}

    async def load(self) -> PageView:
        return await self._loader.load(
            "contact",
            self._check_services,
            slow_threshold_ms=SLOW_THRESHOLD_CONTACT_MS,
        )


__all__ = ["ContactPage"]
