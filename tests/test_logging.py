"""
Tests for Logging Setup
"""

import logging

import pytest
import structlog

from cineflow.config import Settings
from cineflow.core.logging import NOISY_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    saved = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)
    structlog.reset_defaults()


@pytest.mark.parametrize("requested,expected", [
    ("WARNING", logging.WARNING),
    ("INFO", logging.WARNING),
    ("DEBUG", logging.DEBUG),
])
def test_http_request_logs_only_in_debug(requested, expected):
    setup_logging(requested)
    
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == expected


@pytest.mark.parametrize("environment,renderer", [
    ("development", structlog.dev.ConsoleRenderer),
    ("production", structlog.processors.JSONRenderer),
])
def test_renderer_follows_environment(monkeypatch, environment, renderer):
    settings = Settings(_env_file=None, environment=environment)
    monkeypatch.setattr("cineflow.core.logging.get_settings", lambda: settings)
    
    setup_logging("INFO")
    
    assert isinstance(structlog.get_config()["processors"][-1], renderer)
