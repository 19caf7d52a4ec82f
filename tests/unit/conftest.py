"""Shared fixtures for errchain unit tests."""

import pytest

from errchain.config import set_config


@pytest.fixture(autouse=True)
def reset_active_config():
    """Restore default configuration around every test."""
    set_config(None)
    yield
    set_config(None)
