"""Order form submission: validate, govern, verify catalog, insert."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from storefront.state.rate import RateCategory
from storefront.state.retry import RetryPolicy
from storefront.state.orders import NewOrder
from storefront.handlers.retry import run_with_retry
from storefront.handlers.limits import RateGovernor
from storefront.handlers.classifier import classify
from storefront.handlers.identity import anonymize_ip
from storefront.monitoring.reporter import Reporter
from storefront.state.forms import SubmitStatus, SubmitOutcome
from storefront.config.forms import (
    FEE_TOLERANCE,
    CODE_INSERT_FAILED,
    CASH_ACCOUNT_NAME,
    CODE_PRICE_MISMATCH,
    CASH_ACCOUNT_NUMBER,
    ORDER_STATUS_UNPAID,
    CODE_PLATFORM_NOT_FOUND,
    CODE_APPLICATION_NOT_FOUND,
)

from .schemas import OrderForm
from .validation import field_errors
from .outcomes import failed, rate_limited, validation_rejected

logger = logging.getLogger(__name__)


def _rejected(http_status: int, message: str, code: str) -> SubmitOutcome:
    return SubmitOutcome(status=SubmitStatus.REJECTED, http_status=http_status, message=message, code=code)


def _account_fields(form: OrderForm, platform: Any) -> tuple[str, str] | dict[str, str]:
    """Return the account pair to store, or field errors when a non-cash platform lacks one."""
    if platform.is_cash_payment:
        return CASH_ACCOUNT_NAME, CASH_ACCOUNT_NUMBER
    missing = {
        field: f"{label} is required for this payment method"
        for field, label, value in (
            ("account_name", "Account name", form.account_name),
            ("account_number", "Account number", form.account_number),
        )
        if not value
    }
    if missing:
        return missing
    return form.account_name, form.account_number


def _created(form: OrderForm, record: Any, application: Any, platform: Any) -> SubmitOutcome:
    return SubmitOutcome(
        status=SubmitStatus.SUCCESS,
        http_status=201,
        message="Order created successfully.",
        data={
            "order_id": record.order_id,
            "status": record.payment_status,
            "created": record.created.isoformat() if record.created is not None else None,
            "application_name": application.name,
            "amount": form.application_fee,
            "platform": platform.name,
        },
    )


class OrderSubmitter:
    def __init__(
        self,
        *,
        orders: Any,
        governor: RateGovernor,
        reporter: Reporter,
        retry_policy: RetryPolicy,
        production: bool = True,
    ) -> None:
        self._orders = orders
        self._governor = governor
        self._reporter = reporter
        self._retry_policy = retry_policy
        self._production = production

    async def submit(self, payload: dict[str, Any], identity: str, *, forwarded: bool = False) -> SubmitOutcome:
        try:
            form = OrderForm.model_validate(payload)
        except ValidationError as exc:
            return validation_rejected(field_errors(exc))

        decision = await self._governor.admit(identity, RateCategory.ORDER, forwarded=forwarded)
        if not decision.allowed:
            return rate_limited(decision.retry_after_ms)

        context: dict[str, Any] = {
            "tags": {"component": "order_form", "operation": "create_order"},
            "extra": {"application_id": form.application_id, "application_fee": form.application_fee},
        }

        try:
            return await self._place(form, context)
        except Exception as exc:
            classified = classify(exc)
            logger.warning(
                "order failed: kind=%s identity=%s",
                classified.kind.value,
                anonymize_ip(identity),
            )
            self._reporter.report_exception(
                exc,
                {**context, "extra": {**context["extra"], "error_type": classified.kind.value}},
            )
            return failed(
                classified,
                code=CODE_INSERT_FAILED,
                detail=None if self._production else str(exc),
            )

    async def _place(self, form: OrderForm, context: dict[str, Any]) -> SubmitOutcome:
        async def _lookup() -> tuple[Any, Any]:
            application = await self._orders.get_active_application(form.application_id)
            platform = await self._orders.get_active_platform(form.payment_method)
            return application, platform

        application, platform = await run_with_retry(
            _lookup,
            self._retry_policy,
            reporter=self._reporter,
            context=context,
        )

        if application is None:
            return _rejected(404, "The selected application is not available.", CODE_APPLICATION_NOT_FOUND)
        if platform is None:
            return _rejected(404, "The selected payment method is not available.", CODE_PLATFORM_NOT_FOUND)
        if abs(form.application_fee - application.fee) > FEE_TOLERANCE:
            return _rejected(409, "The amount has changed. Please refresh the page and try again.", CODE_PRICE_MISMATCH)

        account = _account_fields(form, platform)
        if isinstance(account, dict):
            return validation_rejected(account)
        account_name, account_number = account

        order = NewOrder(
            last_name=form.last_name,
            first_name=form.first_name,
            email=form.email,
            phone=form.phone,
            platform_id=form.payment_method,
            account_name=account_name,
            account_number=account_number,
            application_id=form.application_id,
            price=form.application_fee,
            payment_status=ORDER_STATUS_UNPAID,
        )
        record = await run_with_retry(
            lambda: self._orders.insert_order(order),
            self._retry_policy,
            reporter=self._reporter,
            context=context,
        )
        if record is None:
            logger.error("order insert returned no row: application_id=%s", form.application_id)
            self._reporter.report_message(
                "Order insert returned no row",
                {**context, "extra": {**context["extra"], "error_type": "insert_failed"}},
                level="error",
            )
            return SubmitOutcome(
                status=SubmitStatus.FAILED,
                http_status=500,
                message="The order could not be created. Please try again.",
                code=CODE_INSERT_FAILED,
            )

        logger.info("order created: order_id=%s", record.order_id)
        return _created(form, record, application, platform)


__all__ = ["OrderSubmitter"]
