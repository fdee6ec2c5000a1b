"""Catalog pages: template listing, template detail, application detail."""

from __future__ import annotations

from typing import Any

from storefront.state.pages import PageView
from storefront.forms.validation import normalize_uuid
from storefront.backend.catalog import CatalogRepository
from storefront.config.pages import (
    SLOW_THRESHOLD_TEMPLATE_MS,
    SLOW_THRESHOLD_TEMPLATES_MS,
    SLOW_THRESHOLD_APPLICATION_MS,
)

from .loader import PageLoader, not_found

APPLICATION_FIELDS = (
    "application_id",
    "application_name",
    "application_link",
    "application_admin_link",
    "application_description",
    "application_category",
    "application_fee",
    "application_rent",
    "application_images",
    "application_other_versions",
    "application_level",
    "application_sales",
)


class CatalogPages:
    def __init__(self, *, loader: PageLoader, catalog: CatalogRepository) -> None:
        self._loader = loader
        self._catalog = catalog

    async def templates(self) -> PageView:
        return await self._loader.load(
            "templates",
            self._catalog.list_active_templates,
            slow_threshold_ms=SLOW_THRESHOLD_TEMPLATES_MS,
            is_empty=lambda data: not data,
        )

    async def template(self, template_id: str) -> PageView:
        normalized = normalize_uuid(template_id)
        if normalized is None:
            return not_found("template", reason="invalid_template_id")

        async def _fetch() -> dict[str, Any] | None:
            template = await self._catalog.get_template(normalized)
            if template is None:
                return None
            applications = await self._catalog.list_template_applications(normalized)
            platforms = await self._catalog.list_active_platforms()
            return {"template": template, "applications": applications, "platforms": platforms}

        return await self._loader.load(
            "template",
            _fetch,
            slow_threshold_ms=SLOW_THRESHOLD_TEMPLATE_MS,
            is_empty=lambda data: not data["applications"],
            context={"extra": {"template_id": normalized}},
        )

    async def application(self, template_id: str, application_id: str) -> PageView:
        template_key = normalize_uuid(template_id)
        application_key = normalize_uuid(application_id)
        if template_key is None or application_key is None:
            return not_found("application", reason="invalid_identifier")

        async def _fetch() -> dict[str, Any] | None:
            row = await self._catalog.get_application(application_key, template_key)
            if row is None:
                return None
            return {
                "application": {field: row.get(field) for field in APPLICATION_FIELDS},
                "template": {
                    "template_id": row.get("template_id"),
                    "template_name": row.get("template_name"),
                    "total_applications": row.get("template_total_applications"),
                },
                "related_applications": row.get("related_applications") or [],
                "platforms": row.get("platforms") or [],
            }

        return await self._loader.load(
            "application",
            _fetch,
            slow_threshold_ms=SLOW_THRESHOLD_APPLICATION_MS,
            context={"extra": {"template_id": template_key, "application_id": application_key}},
        )

    async def platforms(self) -> PageView:
        return await self._loader.load(
            "platforms",
            self._catalog.list_active_platforms,
            slow_threshold_ms=SLOW_THRESHOLD_TEMPLATES_MS,
            is_empty=lambda data: not data,
        )


__all__ = ["CatalogPages"]
