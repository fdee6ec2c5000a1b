"""Fire-and-forget error and event reporting over stdlib logging.

Reports are emitted on a dedicated logger so an external collector can be
attached with a handler. Reporting never raises into the caller.
"""

from __future__ import annotations

import logging
from typing import Any

from storefront.config.monitoring import DEFAULT_MONITORING_LOGGER

from .scrub import filter_message, scrub_mapping

logger = logging.getLogger(__name__)

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}


class Reporter:
    def __init__(self, *, enabled: bool = True, logger_name: str = DEFAULT_MONITORING_LOGGER) -> None:
        self._enabled = enabled
        self._events = logging.getLogger(logger_name)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def report_exception(self, fault: BaseException, context: dict[str, Any] | None = None) -> None:
        if not self._enabled:
            return
        try:
            tags, extra = self._secure_context(context)
            self._events.error(
                "%s: %s",
                type(fault).__name__,
                filter_message(str(fault)),
                extra={"tags": tags, "context": extra},
            )
        except Exception:
            logger.debug("exception report dropped", exc_info=True)

    def report_message(self, text: str, context: dict[str, Any] | None = None, level: str | None = None) -> None:
        if not self._enabled:
            return
        try:
            tags, extra = self._secure_context(context)
            resolved = level or (context or {}).get("level") or "info"
            self._events.log(
                _LEVELS.get(str(resolved).lower(), logging.INFO),
                "%s",
                filter_message(text),
                extra={"tags": tags, "context": extra},
            )
        except Exception:
            logger.debug("message report dropped", exc_info=True)

    @staticmethod
    def _secure_context(context: dict[str, Any] | None) -> tuple[dict[str, Any], dict[str, Any]]:
        context = context or {}
        return dict(context.get("tags") or {}), scrub_mapping(context.get("extra"))


__all__ = ["Reporter"]
