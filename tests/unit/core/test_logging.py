"""Unit tests for structured logging setup."""

import structlog

from hypixel_resolver.core.config import Settings
from hypixel_resolver.core.logging import configure_logging


def test_configure_logging_json_renderer():
    """Test JSON rendering is selected from settings."""
    configure_logging(Settings(_env_file=None, LOG_JSON=True, LOG_LEVEL="WARNING"))

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    structlog.reset_defaults()


def test_configure_logging_console_renderer():
    """Test console rendering is the default."""
    configure_logging(Settings(_env_file=None))

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    structlog.reset_defaults()
