"""Catalog read queries (templates, applications, payment platforms)."""

from __future__ import annotations

import json
import uuid
from typing import Any
from decimal import Decimal
from datetime import date, datetime

from storefront.config.pages import RELATED_APPLICATIONS_LIMIT

from .database import Database

JSON_COLUMNS = ("related_applications", "platforms")

ACTIVE_TEMPLATES_QUERY = """
SELECT template_id, template_name, template_images, template_has_web,
       template_has_mobile, template_added
FROM catalog.templates
WHERE is_active = true
ORDER BY template_added DESC
"""

TEMPLATE_QUERY = """
SELECT template_id, template_name, template_images, template_has_web, template_has_mobile
FROM catalog.templates
WHERE template_id = $1 AND is_active = true
"""

TEMPLATE_APPLICATIONS_QUERY = """
SELECT application_id, application_name, application_category, application_fee,
       application_rent, application_images, application_other_versions,
       application_level, sales_count
FROM catalog.applications
WHERE application_template_id = $1 AND is_active = true
ORDER BY application_level ASC, created_at DESC
"""

ACTIVE_PLATFORMS_QUERY = """
SELECT platform_id, platform_name, account_name, account_number,
       COALESCE(is_cash_payment, false) AS is_cash_payment, description
FROM admin.platforms
WHERE is_active = true
ORDER BY CASE WHEN is_cash_payment = true THEN 0 ELSE 1 END, platform_name ASC
"""

APPLICATION_QUERY = f"""
SELECT
  a.application_id, a.application_name, a.application_link, a.application_admin_link,
  a.application_description, a.application_category, a.application_fee,
  a.application_rent, a.application_images, a.application_other_versions,
  a.application_level, a.sales_count AS application_sales,
  t.template_id, t.template_name,
  (SELECT COUNT(*) FROM catalog.applications
   WHERE application_template_id = t.template_id AND is_active = true
  ) AS template_total_applications,
  (SELECT COALESCE(json_agg(related ORDER BY related.application_level ASC, related.sales_count DESC), '[]'::json)
   FROM (
     SELECT app.application_id, app.application_name, app.application_category,
            app.application_fee, app.application_level,
            app.application_images[1] AS primary_image, app.sales_count
     FROM catalog.applications app
     WHERE app.application_template_id = $2
       AND app.application_id != $1
       AND app.is_active = true
     ORDER BY app.application_level ASC, app.sales_count DESC
     LIMIT {RELATED_APPLICATIONS_LIMIT}
   ) related
  ) AS related_applications,
  (SELECT COALESCE(json_agg(json_build_object(
     'platform_id', p.platform_id,
     'platform_name', p.platform_name,
     'is_cash_payment', COALESCE(p.is_cash_payment, false),
     'account_name', p.account_name,
     'account_number', p.account_number,
     'description', p.description
   ) ORDER BY p.platform_name ASC), '[]'::json)
   FROM admin.platforms p
   WHERE p.is_active = true
  ) AS platforms
FROM catalog.applications a
JOIN catalog.templates t ON a.application_template_id = t.template_id
WHERE a.application_id = $1
  AND a.application_template_id = $2
  AND a.is_active = true
  AND t.is_active = true
"""


def _plain(value: Any) -> Any:
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def record_to_dict(record: Any) -> dict[str, Any]:
    row = {key: _plain(value) for key, value in dict(record).items()}
    # asyncpg returns json columns as text unless a codec is registered.
    for key in JSON_COLUMNS:
        if isinstance(row.get(key), str):
            row[key] = json.loads(row[key])
    return row


class CatalogRepository:
    def __init__(self, db: Database, *, timeout_ms: int | None = None) -> None:
        self._db = db
        self._timeout_ms = timeout_ms

    async def list_active_templates(self) -> list[dict[str, Any]]:
        rows = await self._db.fetch(ACTIVE_TEMPLATES_QUERY, timeout_ms=self._timeout_ms)
        return [record_to_dict(row) for row in rows]

    async def get_template(self, template_id: str) -> dict[str, Any] | None:
        row = await self._db.fetchrow(TEMPLATE_QUERY, template_id, timeout_ms=self._timeout_ms)
        return record_to_dict(row) if row is not None else None

    async def list_template_applications(self, template_id: str) -> list[dict[str, Any]]:
        rows = await self._db.fetch(TEMPLATE_APPLICATIONS_QUERY, template_id, timeout_ms=self._timeout_ms)
        return [record_to_dict(row) for row in rows]

    async def list_active_platforms(self) -> list[dict[str, Any]]:
        rows = await self._db.fetch(ACTIVE_PLATFORMS_QUERY, timeout_ms=self._timeout_ms)
        return [record_to_dict(row) for row in rows]

    async def get_application(self, application_id: str, template_id: str) -> dict[str, Any] | None:
        row = await self._db.fetchrow(
            APPLICATION_QUERY,
            application_id,
            template_id,
            timeout_ms=self._timeout_ms,
        )
        return record_to_dict(row) if row is not None else None


__all__ = ["CatalogRepository", "record_to_dict"]
