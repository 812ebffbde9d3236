"""Shared fixtures."""

from collections.abc import Iterator

import pytest

from ether import api
from ether.metrics import RequestMetrics


@pytest.fixture(autouse=True)
def reset_process_state() -> Iterator[None]:
    """Isolate the metrics singleton and module-level defaults per test."""
    RequestMetrics.reset()
    api.reset()
    yield
    RequestMetrics.reset()
    api.reset()
