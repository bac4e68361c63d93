"""
Pytest configuration and fixtures for website checker tests.
"""

import os
import logging
import threading
from typing import Dict, List, Tuple

import pytest
from hypothesis import settings, Verbosity

from website_checker.checks.http_client import CheckExecutor
from website_checker.data.models import CheckOutcome, Reached, Unreachable

# Configure Hypothesis for faster test runs
settings.register_profile("fast", max_examples=10, deadline=None, verbosity=Verbosity.quiet)
settings.register_profile("thorough", max_examples=100, deadline=None, verbosity=Verbosity.normal)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "fast"))


class ScriptedExecutor(CheckExecutor):
    """
    Executor that replays a per-URL script of outcomes instead of touching
    the network. The last scripted outcome repeats once the script runs out.
    URLs without a script answer Reached(200).

    Several executors may share one ScriptBook, the way worker units share
    the target list.
    """

    def __init__(self, book: "ScriptBook", elapsed: float = 0.001):
        self.book = book
        self.elapsed = elapsed
        self.closed = False

    def check(self, url: str) -> Tuple[CheckOutcome, float]:
        return self.book.next_outcome(url), self.elapsed

    def close(self) -> None:
        self.closed = True


class ScriptBook:
    """Shared outcome scripts plus a thread-safe log of every attempt."""

    def __init__(self, scripts: Dict[str, List[CheckOutcome]] = None):
        self.scripts = scripts or {}
        self.calls: List[str] = []
        self._lock = threading.Lock()
        self._positions: Dict[str, int] = {}
        self.executors: List[ScriptedExecutor] = []

    def next_outcome(self, url: str) -> CheckOutcome:
        with self._lock:
            self.calls.append(url)
            script = self.scripts.get(url)
            if not script:
                return Reached(200)
            position = self._positions.get(url, 0)
            self._positions[url] = position + 1
            return script[min(position, len(script) - 1)]

    def attempts_for(self, url: str) -> int:
        with self._lock:
            return self.calls.count(url)

    def executor_factory(self):
        executor = ScriptedExecutor(self)
        with self._lock:
            self.executors.append(executor)
        return executor


@pytest.fixture
def script_book():
    """Fresh shared script book for fake executors."""
    return ScriptBook()


@pytest.fixture
def unreachable():
    """Factory for transport failure outcomes."""
    def _make(reason: str = "transport error: connection refused") -> Unreachable:
        return Unreachable(reason)
    return _make


def pytest_configure(config):
    """Configure pytest with custom settings."""
    logging.getLogger("website_checker").setLevel(logging.WARNING)
    logging.getLogger("hypothesis").setLevel(logging.WARNING)


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        if "properties" in item.fspath.basename:
            item.add_marker(pytest.mark.property)

        if "integration" in item.fspath.basename:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
