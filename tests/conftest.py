from __future__ import annotations

import sys
from typing import Any
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Keep `import storefront...` working when running `pytest` from the repo root.
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


class RecordingReporter:
    """Reporter double that keeps every report in memory."""

    enabled = True

    def __init__(self) -> None:
        self.exceptions: list[tuple[BaseException, dict[str, Any]]] = []
        self.messages: list[tuple[str, dict[str, Any], str | None]] = []

    def report_exception(self, fault: BaseException, context: dict[str, Any] | None = None) -> None:
        self.exceptions.append((fault, context or {}))

    def report_message(self, text: str, context: dict[str, Any] | None = None, level: str | None = None) -> None:
        self.messages.append((text, context or {}, level))


class ManualClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def no_sleep() -> RecordingSleep:
    return RecordingSleep()
