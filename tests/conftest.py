"""Pytest configuration."""

import os

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (run offline)")
    config.addinivalue_line("markers", "live: Integration tests against the public API")


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless explicitly requested."""
    if os.environ.get("PARCL_LIVE_TESTS"):
        return

    skip_live = pytest.mark.skip(reason="Live tests skipped by default. Set PARCL_LIVE_TESTS=1")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)
