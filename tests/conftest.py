"""Shared pytest fixtures."""

from collections.abc import Iterator

import pytest

from action_toolkit.http.metrics import ClientMetrics
from tests.helpers.clock import FakeClock


@pytest.fixture(autouse=True)
def reset_client_metrics() -> Iterator[None]:
    """Give every test a fresh metrics singleton."""
    ClientMetrics.reset()
    yield
    ClientMetrics.reset()


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic clock starting at a fixed instant."""
    return FakeClock()
