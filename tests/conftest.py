"""Shared pytest configuration."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by plugin runs."""
    yield
    structlog.reset_defaults()
