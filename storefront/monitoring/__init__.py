"""Error and event reporting."""

from .reporter import Reporter

__all__ = ["Reporter"]
