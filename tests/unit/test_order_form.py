from __future__ import annotations

from datetime import datetime, timezone

import pytest

from storefront.state.retry import RetryPolicy
from storefront.state.forms import SubmitStatus
from storefront.forms.order import OrderSubmitter
from storefront.handlers.limits import RateGovernor
from storefront.state.rate import RateCategory, RateLimitPolicy
from storefront.state.orders import NewOrder, OrderRecord, PaymentPlatform, OrderApplication

APPLICATION_ID = "7c9e6679-7425-40de-944b-e07fc1f90ae7"
CASH_PLATFORM_ID = "0f8fad5b-d9cb-469f-a165-70867728950e"
WALLET_PLATFORM_ID = "16fd2706-8baf-433b-82eb-8c7fada847da"

BASE = {
    "last_name": "Doe",
    "first_name": "Jane",
    "email": "jane@example.com",
    "phone": "+253 77 12 34 56",
    "application_id": APPLICATION_ID,
    "application_fee": 1500,
}


class _FakeOrders:
    def __init__(self) -> None:
        self.application: OrderApplication | None = OrderApplication(APPLICATION_ID, "Boutique", 1500.0)
        self.platforms = {
            CASH_PLATFORM_ID: PaymentPlatform(CASH_PLATFORM_ID, "Cash", True),
            WALLET_PLATFORM_ID: PaymentPlatform(WALLET_PLATFORM_ID, "Waafi", False),
        }
        self.lookup_failures: list[BaseException] = []
        self.inserted: list[NewOrder] = []

    async def get_active_application(self, application_id: str) -> OrderApplication | None:
        if self.lookup_failures:
            raise self.lookup_failures.pop(0)
        return self.application

    async def get_active_platform(self, platform_id: str) -> PaymentPlatform | None:
        return self.platforms.get(platform_id)

    async def insert_order(self, order: NewOrder) -> OrderRecord:
        self.inserted.append(order)
        return OrderRecord(
            order_id="42",
            payment_status=order.payment_status,
            created=datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc),
        )


def _submitter(orders: _FakeOrders, reporter, clock) -> OrderSubmitter:
    governor = RateGovernor(
        policies={RateCategory.ORDER: RateLimitPolicy(limit=2, window_seconds=300.0)},
        now_fn=clock,
    )
    return OrderSubmitter(
        orders=orders,
        governor=governor,
        reporter=reporter,
        retry_policy=RetryPolicy(max_attempts=2, base_delay_ms=0),
    )


@pytest.mark.asyncio
async def test_cash_order_succeeds_without_account_fields(reporter, clock) -> None:
    orders = _FakeOrders()
    outcome = await _submitter(orders, reporter, clock).submit(
        {**BASE, "payment_method": CASH_PLATFORM_ID},
        "10.0.0.1",
    )

    assert outcome.status is SubmitStatus.SUCCESS
    assert outcome.http_status == 201
    assert outcome.data["order_id"] == "42"
    assert outcome.data["status"] == "unpaid"
    assert outcome.data["platform"] == "Cash"
    assert outcome.data["application_name"] == "Boutique"
    order = orders.inserted[0]
    assert order.account_name == "CASH"
    assert order.account_number == "N/A"
    assert order.payment_status == "unpaid"


@pytest.mark.asyncio
async def test_non_cash_order_without_account_fields_rejected_before_insert(reporter, clock) -> None:
    orders = _FakeOrders()
    outcome = await _submitter(orders, reporter, clock).submit(
        {**BASE, "payment_method": WALLET_PLATFORM_ID},
        "10.0.0.1",
    )

    assert outcome.status is SubmitStatus.REJECTED
    assert outcome.http_status == 400
    assert set(outcome.field_errors) == {"account_name", "account_number"}
    assert orders.inserted == []


@pytest.mark.asyncio
async def test_non_cash_order_with_account_fields(reporter, clock) -> None:
    orders = _FakeOrders()
    outcome = await _submitter(orders, reporter, clock).submit(
        {
            **BASE,
            "payment_method": WALLET_PLATFORM_ID,
            "account_name": "Jane <b>Doe</b>",
            "account_number": "77123456",
        },
        "10.0.0.1",
    )

    assert outcome.ok
    assert orders.inserted[0].account_name == "Jane bDoe/b"
    assert orders.inserted[0].account_number == "77123456"


@pytest.mark.asyncio
async def test_schema_errors(reporter, clock) -> None:
    orders = _FakeOrders()
    outcome = await _submitter(orders, reporter, clock).submit(
        {**BASE, "phone": "call me maybe", "payment_method": "cash", "application_fee": 0},
        "10.0.0.1",
    )

    assert outcome.status is SubmitStatus.REJECTED
    assert set(outcome.field_errors) == {"phone", "payment_method", "application_fee"}
    assert orders.inserted == []


@pytest.mark.asyncio
async def test_price_mismatch_rejected(reporter, clock) -> None:
    orders = _FakeOrders()
    outcome = await _submitter(orders, reporter, clock).submit(
        {**BASE, "payment_method": CASH_PLATFORM_ID, "application_fee": 1400},
        "10.0.0.1",
    )
    assert outcome.code == "price_mismatch"
    assert orders.inserted == []


@pytest.mark.asyncio
async def test_unknown_application_and_platform(reporter, clock) -> None:
    orders = _FakeOrders()
    submitter = _submitter(orders, reporter, clock)

    unknown_platform = await submitter.submit(
        {**BASE, "payment_method": "11111111-1111-1111-1111-111111111111"},
        "10.0.0.1",
    )
    assert unknown_platform.code == "platform_not_found"

    orders.application = None
    unknown_application = await submitter.submit({**BASE, "payment_method": CASH_PLATFORM_ID}, "10.0.0.1")
    assert unknown_application.code == "application_not_found"


@pytest.mark.asyncio
async def test_third_order_is_rate_limited(reporter, clock) -> None:
    orders = _FakeOrders()
    submitter = _submitter(orders, reporter, clock)
    payload = {**BASE, "payment_method": CASH_PLATFORM_ID}
    assert (await submitter.submit(payload, "10.0.0.1")).ok
    assert (await submitter.submit(payload, "10.0.0.1")).ok

    outcome = await submitter.submit(payload, "10.0.0.1")
    assert outcome.http_status == 429
    assert outcome.retry_after_ms == 300_000
    assert len(orders.inserted) == 2


@pytest.mark.asyncio
async def test_transient_lookup_failure_is_retried(reporter, clock) -> None:
    class _PgError(Exception):
        sqlstate = "08006"

    orders = _FakeOrders()
    orders.lookup_failures = [_PgError("connection failure")]
    outcome = await _submitter(orders, reporter, clock).submit({**BASE, "payment_method": CASH_PLATFORM_ID}, "10.0.0.1")
    assert outcome.ok
    assert len(reporter.messages) == 1


@pytest.mark.asyncio
async def test_terminal_lookup_failure_returns_classified_outcome(reporter, clock) -> None:
    orders = _FakeOrders()
    orders.lookup_failures = [TimeoutError("Database query timeout"), TimeoutError("Database query timeout")]
    outcome = await _submitter(orders, reporter, clock).submit({**BASE, "payment_method": CASH_PLATFORM_ID}, "10.0.0.1")

    assert outcome.status is SubmitStatus.FAILED
    assert outcome.http_status == 503
    assert outcome.data["error_type"] == "timeout"
    assert orders.inserted == []
    _fault, context = reporter.exceptions[0]
    assert context["tags"]["component"] == "order_form"


@pytest.mark.asyncio
async def test_insert_without_row_is_reported(reporter, clock) -> None:
    class _NoRowOrders(_FakeOrders):
        async def insert_order(self, order: NewOrder) -> OrderRecord | None:
            self.inserted.append(order)
            return None

    orders = _NoRowOrders()
    outcome = await _submitter(orders, reporter, clock).submit({**BASE, "payment_method": CASH_PLATFORM_ID}, "10.0.0.1")

    assert outcome.status is SubmitStatus.FAILED
    assert outcome.http_status == 500
    assert outcome.code == "insert_failed"
    text, context, level = reporter.messages[-1]
    assert text == "Order insert returned no row"
    assert level == "error"
    assert context["tags"]["component"] == "order_form"
    assert context["extra"]["application_id"] == APPLICATION_ID


@pytest.mark.asyncio
async def test_forwarded_loopback_is_still_rate_limited(reporter, clock) -> None:
    orders = _FakeOrders()
    submitter = _submitter(orders, reporter, clock)
    payload = {**BASE, "payment_method": CASH_PLATFORM_ID}
    for _ in range(2):
        assert (await submitter.submit(payload, "127.0.0.1", forwarded=True)).ok

    outcome = await submitter.submit(payload, "127.0.0.1", forwarded=True)
    assert outcome.http_status == 429
    assert len(orders.inserted) == 2
