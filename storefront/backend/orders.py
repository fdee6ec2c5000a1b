"""Order write-path queries."""

from __future__ import annotations

from storefront.state.orders import NewOrder, OrderRecord, PaymentPlatform, OrderApplication

from .database import Database

ACTIVE_APPLICATION_QUERY = """
SELECT application_id, application_name, application_fee
FROM catalog.applications
WHERE application_id = $1 AND is_active = true
"""

ACTIVE_PLATFORM_QUERY = """
SELECT platform_id, platform_name, COALESCE(is_cash_payment, false) AS is_cash_payment
FROM admin.platforms
WHERE platform_id = $1 AND is_active = true
"""

INSERT_ORDER_QUERY = """
INSERT INTO admin.orders (
  order_client, order_platform_id, order_payment_name,
  order_payment_number, order_application_id, order_price, order_payment_status
) VALUES ($1, $2, $3, $4, $5, $6, $7)
RETURNING order_id, order_created, order_payment_status
"""


class OrderRepository:
    def __init__(self, db: Database, *, timeout_ms: int | None = None) -> None:
        self._db = db
        self._timeout_ms = timeout_ms

    async def get_active_application(self, application_id: str) -> OrderApplication | None:
        row = await self._db.fetchrow(ACTIVE_APPLICATION_QUERY, application_id, timeout_ms=self._timeout_ms)
        if row is None:
            return None
        return OrderApplication(
            application_id=str(row["application_id"]),
            name=row["application_name"],
            fee=float(row["application_fee"]),
        )

    async def get_active_platform(self, platform_id: str) -> PaymentPlatform | None:
        row = await self._db.fetchrow(ACTIVE_PLATFORM_QUERY, platform_id, timeout_ms=self._timeout_ms)
        if row is None:
            return None
        return PaymentPlatform(
            platform_id=str(row["platform_id"]),
            name=row["platform_name"],
            is_cash_payment=bool(row["is_cash_payment"]),
        )

    async def insert_order(self, order: NewOrder) -> OrderRecord | None:
        client_info = [order.last_name, order.first_name, order.email, order.phone]
        row = await self._db.fetchrow(
            INSERT_ORDER_QUERY,
            client_info,
            order.platform_id,
            order.account_name,
            order.account_number,
            order.application_id,
            order.price,
            order.payment_status,
            timeout_ms=self._timeout_ms,
        )
        if row is None or row["order_id"] is None:
            return None
        return OrderRecord(
            order_id=str(row["order_id"]),
            payment_status=row["order_payment_status"],
            created=row["order_created"],
        )


__all__ = ["OrderRepository"]
