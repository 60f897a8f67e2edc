"""Pytest-bdd configuration and shared fixtures for generator feature tests."""

import pytest


@pytest.fixture
def context():
    """Shared test context for scenario state."""
    return {
        "files": {},
        "index": None,
        "consumer": None,
        "reference": None,
        "error": None,
    }
