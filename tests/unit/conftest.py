"""
Unit test fixtures and configuration.

Fixtures specific to unit tests (fast, isolated tests).
"""

import logging
from unittest.mock import MagicMock

import pytest

from rastergrid.reporting.echo import EchoWriter

# ============================================================================
# Common Mock Fixtures
# ============================================================================

@pytest.fixture
def mock_logger():
    """Create a mock logger for unit tests."""
    return MagicMock()


@pytest.fixture
def mock_exit():
    """Exit function that records the status instead of ending the process."""
    return MagicMock()


class ListHandler(logging.Handler):
    """Collects formatted messages in memory."""

    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


@pytest.fixture
def make_capture_logger(request):
    """Factory for fresh, isolated loggers whose messages land in ``logger.messages``."""
    created = []

    def _make(suffix: str) -> logging.Logger:
        logger = logging.getLogger(f"rastergrid.tests.{request.node.name}.{suffix}")
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        handler = ListHandler()
        logger.addHandler(handler)
        logger.messages = handler.messages
        created.append((logger, handler))
        return logger

    yield _make
    for logger, handler in created:
        logger.removeHandler(handler)


@pytest.fixture
def capture_logger(make_capture_logger):
    """Isolated logger standing in for the echo file."""
    return make_capture_logger("echo")


@pytest.fixture
def console_capture(make_capture_logger):
    """Isolated logger standing in for the console."""
    return make_capture_logger("console")


@pytest.fixture
def echo_writer(capture_logger):
    """EchoWriter writing into ``capture_logger``."""
    return EchoWriter(capture_logger)
