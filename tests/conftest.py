"""Root test configuration: isolates logging configuration between tests."""

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _restore_logging_configuration():
    """
    Restore the root logger and structlog defaults after each test, so that
    handlers bound to a test's captured stdout do not leak into later tests.
    """
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level

    yield

    root_logger.handlers[:] = original_handlers
    root_logger.setLevel(original_level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
