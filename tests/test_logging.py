"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from typegen.logging_config import configure_logging, get_logger


def test_get_logger_names():
    assert get_logger().name == "typegen"
    assert get_logger("typegen.cli").name == "typegen.cli"
    assert get_logger("plugins").name == "typegen.plugins"


def test_configure_logging_levels():
    logger = configure_logging(verbose=True)
    assert logger.level == logging.DEBUG
    assert isinstance(logger.handlers[0], RichHandler)

    logger = configure_logging()
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1


def test_log_file(tmp_path):
    log_file = tmp_path / "typegen.log"
    logger = configure_logging(log_file=log_file)
    get_logger("tests").info("hello from tests")
    for handler in logger.handlers:
        handler.flush()

    assert "hello from tests" in log_file.read_text(encoding="utf-8")

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
