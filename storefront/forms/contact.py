"""Contact form submission: validate, govern, deduplicate, send."""

from __future__ import annotations

import math
import logging
from typing import Any

from pydantic import ValidationError

from storefront.state.rate import RateCategory
from storefront.state.retry import RetryPolicy
from storefront.handlers.retry import run_with_retry
from storefront.handlers.limits import RateGovernor
from storefront.state.email import EmailMessage
from storefront.handlers.classifier import classify
from storefront.handlers.identity import anonymize_ip
from storefront.monitoring.reporter import Reporter
from storefront.state.forms import SubmitStatus, SubmitOutcome
from storefront.config.forms import CODE_DUPLICATE, CODE_SEND_FAILED
from storefront.config.email import CONTACT_SOURCE_HEADER, CONTACT_SUBJECT_PREFIX, CONTACT_VERSION_HEADER

from .schemas import ContactForm
from .duplicates import DuplicateGuard
from .validation import field_errors
from .outcomes import failed, rate_limited, make_reference, validation_rejected

logger = logging.getLogger(__name__)


def render_contact_email(form: ContactForm, *, reference: str) -> str:
    return (
        "NEW CONTACT MESSAGE\n"
        "===================\n\n"
        f"From: {form.name} <{form.email}>\n"
        f"Subject: {form.subject}\n\n"
        f"{form.message}\n\n"
        "---\n"
        f"Reply to this email to contact {form.name} directly.\n"
        f"Reference: {reference}\n"
    )


def _duplicate_rejected(wait_s: float) -> SubmitOutcome:
    wait_minutes = max(1, math.ceil(wait_s / 60))
    return SubmitOutcome(
        status=SubmitStatus.REJECTED,
        http_status=409,
        message=f"An identical message was sent recently. Please wait {wait_minutes} minute(s).",
        code=CODE_DUPLICATE,
        retry_after_ms=int(wait_s * 1000),
    )


class ContactSubmitter:
    def __init__(
        self,
        *,
        mailer: Any,
        governor: RateGovernor,
        reporter: Reporter,
        retry_policy: RetryPolicy,
        duplicates: DuplicateGuard | None = None,
        production: bool = True,
    ) -> None:
        self._mailer = mailer
        self._governor = governor
        self._reporter = reporter
        self._retry_policy = retry_policy
        self._duplicates = duplicates or DuplicateGuard()
        self._production = production

    def _build_message(self, form: ContactForm, reference: str) -> EmailMessage:
        return EmailMessage(
            to=(self._mailer.recipient,),
            subject=f"{CONTACT_SUBJECT_PREFIX} {form.subject}",
            text=render_contact_email(form, reference=reference),
            reply_to=form.email,
            headers={
                "X-Contact-Source": CONTACT_SOURCE_HEADER,
                "X-Contact-Version": CONTACT_VERSION_HEADER,
            },
        )

    async def submit(self, payload: dict[str, Any], identity: str, *, forwarded: bool = False) -> SubmitOutcome:
        try:
            form = ContactForm.model_validate(payload)
        except ValidationError as exc:
            return validation_rejected(field_errors(exc))

        decision = await self._governor.admit(identity, RateCategory.CONTACT, forwarded=forwarded)
        if not decision.allowed:
            return rate_limited(decision.retry_after_ms)

        duplicate_key = f"{form.email.lower()}:{form.subject.lower()}"
        wait_s = self._duplicates.claim(duplicate_key)
        if wait_s is not None:
            return _duplicate_rejected(wait_s)

        reference = make_reference()
        message = self._build_message(form, reference)
        context = {"tags": {"component": "contact_form", "operation": "send_email"}}

        try:
            receipt = await run_with_retry(
                lambda: self._mailer.send(message),
                self._retry_policy,
                reporter=self._reporter,
                context=context,
            )
        except Exception as exc:
            self._duplicates.release(duplicate_key)
            classified = classify(exc)
            logger.warning(
                "contact email failed: kind=%s identity=%s",
                classified.kind.value,
                anonymize_ip(identity),
            )
            self._reporter.report_exception(
                exc,
                {**context, "extra": {"error_type": classified.kind.value, "reference": reference}},
            )
            return failed(
                classified,
                code=CODE_SEND_FAILED,
                reference=reference,
                detail=None if self._production else str(exc),
            )

        logger.info("contact email sent: reference=%s", reference)
        return SubmitOutcome(
            status=SubmitStatus.SUCCESS,
            http_status=200,
            message="Your message has been sent. We will get back to you shortly.",
            reference=reference,
            data={"email_id": receipt.message_id},
        )


__all__ = ["ContactSubmitter", "render_contact_email"]
