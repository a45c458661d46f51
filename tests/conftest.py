"""Pytest configuration and shared fixtures."""

import pytest
from structlog.testing import capture_logs


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "filesystem: tests that create or inspect real directories")


@pytest.fixture(autouse=True)
def captured_logs():
    """Capture structlog events instead of printing them; yields the list of event dicts."""
    with capture_logs() as logs:
        yield logs
