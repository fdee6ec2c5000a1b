"""Main FastAPI server for the storefront catalog, contact and order flows."""

from __future__ import annotations

import math
import logging
from typing import Any
from contextlib import asynccontextmanager
from collections.abc import Callable, Awaitable

from fastapi import Body, FastAPI, Depends, Request
from fastapi.responses import ORJSONResponse

from storefront.state import RuntimeDeps
from storefront.errors import RateLimitError
from storefront.state.rate import RateCategory
from storefront.state.forms import SubmitOutcome
from storefront.state.pages import PageView
from storefront.runtime.logging import configure_logging
from storefront.runtime.dependencies import start_runtime, build_runtime_deps
from storefront.handlers.http import (
    governed,
    get_runtime_deps,
    request_identity,
    stats_authorized,
    rate_limit_headers,
    rate_limit_exception_handler,
)

logger = logging.getLogger(__name__)

configure_logging()

BuildDeps = Callable[[], RuntimeDeps]
StartDeps = Callable[[RuntimeDeps], Awaitable[None]]


def _page_response(view: PageView) -> ORJSONResponse:
    return ORJSONResponse(view.to_payload(), status_code=view.status)


def _submit_response(outcome: SubmitOutcome) -> ORJSONResponse:
    headers: dict[str, str] = {}
    if outcome.http_status == 429 and outcome.retry_after_ms is not None:
        headers["Retry-After"] = str(max(1, math.ceil(outcome.retry_after_ms / 1000)))
    return ORJSONResponse(outcome.to_payload(), status_code=outcome.http_status, headers=headers)


def create_app(
    build_deps: BuildDeps = build_runtime_deps,
    start_deps: StartDeps = start_runtime,
) -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        runtime_deps = build_deps()
        app.state.runtime_deps = runtime_deps
        await start_deps(runtime_deps)
        logger.info("runtime: ready (environment=%s)", runtime_deps.settings.environment)
        try:
            yield
        finally:
            deps = getattr(app.state, "runtime_deps", None)
            if deps is not None:
                await deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)
    app.add_exception_handler(RateLimitError, rate_limit_exception_handler)

    public = [Depends(governed(RateCategory.PUBLIC))]
    api = [Depends(governed(RateCategory.API))]

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/healthz")
    async def healthz(request: Request) -> ORJSONResponse:
        deps = get_runtime_deps(request)
        database = await deps.database.health_check()
        status = "ok" if database.get("healthy") else "degraded"
        return ORJSONResponse(
            {"status": status, "database": database, "email_configured": deps.mailer.configured},
            status_code=200 if status == "ok" else 503,
        )

    @app.get("/templates", dependencies=public)
    async def templates(request: Request) -> ORJSONResponse:
        return _page_response(await get_runtime_deps(request).catalog_pages.templates())

    @app.get("/templates/{template_id}", dependencies=public)
    async def template(template_id: str, request: Request) -> ORJSONResponse:
        return _page_response(await get_runtime_deps(request).catalog_pages.template(template_id))

    @app.get("/templates/{template_id}/applications/{application_id}", dependencies=public)
    async def application(template_id: str, application_id: str, request: Request) -> ORJSONResponse:
        view = await get_runtime_deps(request).catalog_pages.application(template_id, application_id)
        return _page_response(view)

    @app.get("/contact", dependencies=public)
    async def contact_page(request: Request) -> ORJSONResponse:
        return _page_response(await get_runtime_deps(request).contact_page.load())

    @app.post("/contact")
    async def contact_submit(request: Request, payload: dict[str, Any] = Body(...)) -> ORJSONResponse:
        deps = get_runtime_deps(request)
        client = request_identity(request)
        outcome = await deps.contact_form.submit(payload, client.address, forwarded=client.forwarded)
        return _submit_response(outcome)

    @app.post("/orders")
    async def order_submit(request: Request, payload: dict[str, Any] = Body(...)) -> ORJSONResponse:
        deps = get_runtime_deps(request)
        client = request_identity(request)
        outcome = await deps.order_form.submit(payload, client.address, forwarded=client.forwarded)
        return _submit_response(outcome)

    @app.get("/api/platforms", dependencies=api)
    async def platforms(request: Request) -> ORJSONResponse:
        view = await get_runtime_deps(request).catalog_pages.platforms()
        decision = getattr(request.state, "rate_decision", None)
        headers = rate_limit_headers(decision.limit, decision.remaining) if decision is not None else {}
        return ORJSONResponse(view.to_payload(), status_code=view.status, headers=headers)

    @app.get("/api/rate-limits", dependencies=api)
    async def rate_limits(request: Request) -> ORJSONResponse:
        if not stats_authorized(request):
            return ORJSONResponse({"detail": "Not Found"}, status_code=404)
        return ORJSONResponse(get_runtime_deps(request).governor.stats())

    return app


app = create_app()


__all__ = ["app", "create_app"]
