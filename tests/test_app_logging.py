"""Tests for logging configuration."""

import logging

from nutricoach.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("nutricoach")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.propagate is False


def test_module_loggers_use_package_level() -> None:
    logger = logging.getLogger("nutricoach")
    logger.handlers.clear()
    configure_logging()

    child = logging.getLogger("nutricoach.services.diary")

    assert child.getEffectiveLevel() == logging.INFO
