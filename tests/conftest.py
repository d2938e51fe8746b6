"""Pytest configuration for the probe test suite."""

import logging

import pytest
import structlog

from probe.config import Config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep config overrides from the developer's shell out of the tests."""
    for env_var in Config.ENV_MAPPINGS:
        monkeypatch.delenv(env_var, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo setup_logging() calls made by front end tests."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
