"""Shared fakes for the guard tests."""

import pytest

from phpunit_guard_mcp.services import get_guard_service


class FakeRunner:
    """Records every run and answers with the queued outcomes (the last one repeats)."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes) or [True]
        self.calls = []
        self.last_result = None

    def run(self, targets, options):
        self.calls.append((list(targets), options))
        if len(self.outcomes) > 1:
            return self.outcomes.pop(0)
        return self.outcomes[0]


class IdentityInspector:
    """Inspector that keeps every path as given."""

    def __init__(self):
        self.tests_path = None
        self.src_path = None
        self.cleaned = []

    def clean(self, paths):
        self.cleaned.append(list(paths))
        return list(paths)


@pytest.fixture
def identity_inspector():
    return IdentityInspector()


@pytest.fixture
def fresh_guard_service():
    """Reset the process-wide guard service around a test."""
    get_guard_service.cache_clear()
    yield
    get_guard_service.cache_clear()


@pytest.fixture
def make_runner():
    """Build a FakeRunner with the given outcomes."""
    return FakeRunner
