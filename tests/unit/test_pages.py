from __future__ import annotations

from typing import Any

import pytest

from storefront.state.pages import PageView, PageState
from storefront.state.retry import RetryPolicy
from storefront.pages.contact import ContactPage
from storefront.pages.catalog import CatalogPages
from storefront.pages.loader import CLIENT_RETRY_HINT, PageLoader

TEMPLATE_ID = "0f8fad5b-d9cb-469f-a165-70867728950e"
APPLICATION_ID = "7c9e6679-7425-40de-944b-e07fc1f90ae7"


class _PgError(Exception):
    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


class _FakeCatalog:
    def __init__(self) -> None:
        self.templates: list[dict[str, Any]] = [{"template_id": TEMPLATE_ID, "template_name": "Shop"}]
        self.template: dict[str, Any] | None = {"template_id": TEMPLATE_ID, "template_name": "Shop"}
        self.applications: list[dict[str, Any]] = [{"application_id": APPLICATION_ID}]
        self.platforms: list[dict[str, Any]] = [{"platform_id": "p1", "is_cash_payment": True}]
        self.application: dict[str, Any] | None = {
            "application_id": APPLICATION_ID,
            "application_name": "Boutique",
            "application_fee": 1500.0,
            "template_id": TEMPLATE_ID,
            "template_name": "Shop",
            "template_total_applications": 3,
            "related_applications": [{"application_id": "other"}],
            "platforms": [{"platform_id": "p1"}],
        }
        self.failures: list[BaseException] = []
        self.calls: list[str] = []

    def _maybe_fail(self, name: str) -> None:
        self.calls.append(name)
        if self.failures:
            raise self.failures.pop(0)

    async def list_active_templates(self) -> list[dict[str, Any]]:
        self._maybe_fail("list_active_templates")
        return self.templates

    async def get_template(self, template_id: str) -> dict[str, Any] | None:
        self._maybe_fail("get_template")
        return self.template

    async def list_template_applications(self, template_id: str) -> list[dict[str, Any]]:
        return self.applications

    async def list_active_platforms(self) -> list[dict[str, Any]]:
        self._maybe_fail("list_active_platforms")
        return self.platforms

    async def get_application(self, application_id: str, template_id: str) -> dict[str, Any] | None:
        self._maybe_fail("get_application")
        return self.application


def _pages(reporter, no_sleep, *, production: bool = True) -> tuple[CatalogPages, _FakeCatalog]:
    catalog = _FakeCatalog()
    loader = PageLoader(
        reporter=reporter,
        retry_policy=RetryPolicy(max_attempts=2, base_delay_ms=100),
        production=production,
        sleep=no_sleep,
    )
    return CatalogPages(loader=loader, catalog=catalog), catalog  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_templates_content(reporter, no_sleep) -> None:
    pages, _catalog = _pages(reporter, no_sleep)
    view = await pages.templates()
    assert view.state is PageState.CONTENT
    assert view.status == 200
    assert view.data[0]["template_name"] == "Shop"


@pytest.mark.asyncio
async def test_templates_empty_is_not_an_error(reporter, no_sleep) -> None:
    pages, catalog = _pages(reporter, no_sleep)
    catalog.templates = []
    view = await pages.templates()
    assert view.state is PageState.EMPTY
    assert view.status == 200
    assert reporter.exceptions == []


@pytest.mark.asyncio
async def test_malformed_template_id_is_not_found_without_query(reporter, no_sleep) -> None:
    pages, catalog = _pages(reporter, no_sleep)
    view = await pages.template("not-a-uuid")
    assert view.state is PageState.NOT_FOUND
    assert view.status == 404
    assert catalog.calls == []


@pytest.mark.asyncio
async def test_missing_template_is_not_found(reporter, no_sleep) -> None:
    pages, catalog = _pages(reporter, no_sleep)
    catalog.template = None
    view = await pages.template(TEMPLATE_ID)
    assert view.state is PageState.NOT_FOUND


@pytest.mark.asyncio
async def test_template_with_applications_and_platforms(reporter, no_sleep) -> None:
    pages, _catalog = _pages(reporter, no_sleep)
    view = await pages.template(TEMPLATE_ID.upper())
    assert view.state is PageState.CONTENT
    assert view.data["template"]["template_id"] == TEMPLATE_ID
    assert view.data["platforms"][0]["is_cash_payment"] is True


@pytest.mark.asyncio
async def test_application_detail_shape(reporter, no_sleep) -> None:
    pages, _catalog = _pages(reporter, no_sleep)
    view = await pages.application(TEMPLATE_ID, APPLICATION_ID)
    assert view.state is PageState.CONTENT
    assert view.data["application"]["application_name"] == "Boutique"
    assert view.data["template"]["total_applications"] == 3
    assert view.data["related_applications"] == [{"application_id": "other"}]


@pytest.mark.asyncio
async def test_transient_failure_is_retried_transparently(reporter, no_sleep) -> None:
    pages, catalog = _pages(reporter, no_sleep)
    catalog.failures = [_PgError("connection lost", "08006")]
    view = await pages.templates()
    assert view.state is PageState.CONTENT
    assert no_sleep.calls == [0.1]
    assert len(reporter.messages) == 1
    assert reporter.exceptions == []


@pytest.mark.asyncio
async def test_retryable_failure_in_production_offers_retry(reporter, no_sleep) -> None:
    pages, catalog = _pages(reporter, no_sleep)
    catalog.failures = [TimeoutError("Database query timeout"), TimeoutError("Database query timeout")]
    view = await pages.templates()

    assert view.state is PageState.ERROR
    assert view.status == 503
    assert view.retry is not None
    assert view.retry.max_auto_retries == 3
    assert view.retry.delays_ms == (1000, 2000, 4000)
    assert "detail" not in view.error
    assert len(reporter.exceptions) == 1


@pytest.mark.asyncio
async def test_non_retryable_failure_in_production_is_not_found(reporter, no_sleep) -> None:
    pages, catalog = _pages(reporter, no_sleep)
    catalog.failures = [_PgError("permission denied for schema catalog", "42501")]
    view = await pages.templates()

    assert view.state is PageState.NOT_FOUND
    assert view.status == 404
    assert no_sleep.calls == []
    _fault, context = reporter.exceptions[0]
    assert context["tags"]["error_type"] == "permission_error"


@pytest.mark.asyncio
async def test_development_failure_is_detailed(reporter, no_sleep) -> None:
    pages, catalog = _pages(reporter, no_sleep, production=False)
    catalog.failures = [_PgError('relation "catalog.templates" does not exist', "42P01")]
    view = await pages.templates()

    assert view.state is PageState.ERROR
    assert view.status == 500
    assert view.error["kind"] == "config_error"
    assert "does not exist" in view.error["detail"]
    assert view.retry is None


@pytest.mark.asyncio
async def test_slow_load_is_reported(reporter, no_sleep) -> None:
    ticks = iter([0.0, 2.0])
    loader = PageLoader(
        reporter=reporter,
        retry_policy=RetryPolicy(),
        sleep=no_sleep,
        clock=lambda: next(ticks),
    )

    async def _fetch() -> list[int]:
        return [1]

    view = await loader.load("templates", _fetch, slow_threshold_ms=1500.0)
    assert view.state is PageState.CONTENT
    text, context, level = reporter.messages[0]
    assert text == "Slow templates load"
    assert level == "warning"
    assert context["extra"]["duration_ms"] == 2000.0


class _Mailer:
    def __init__(self, configured: bool) -> None:
        self.configured = configured


@pytest.mark.asyncio
async def test_contact_page_requires_email_configuration(reporter, no_sleep) -> None:
    loader = PageLoader(reporter=reporter, retry_policy=RetryPolicy(), sleep=no_sleep)

    ok = await ContactPage(loader=loader, mailer=_Mailer(True)).load()
    assert ok.state is PageState.CONTENT
    assert ok.data["services"]["email_service"] is True

    missing = await ContactPage(loader=loader, mailer=_Mailer(False)).load()
    assert missing.state is PageState.NOT_FOUND
    assert no_sleep.calls == []
    fault, _context = reporter.exceptions[0]
    assert "not configured" in str(fault)


def test_page_view_payload_includes_retry_hint() -> None:
    payload = PageView(page="templates", state=PageState.ERROR, status=503, retry=CLIENT_RETRY_HINT).to_payload()
    assert payload["state"] == "error"
    assert payload["retry"] == {"manual": True, "max_auto_retries": 3, "delays_ms": [1000, 2000, 4000]}
