from __future__ import annotations

import logging
from io import StringIO

from csvtable.logging.init import LabeledFormatter, get_logger, reset_logging, setup_logging


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == "csvtable"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    handler = logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert isinstance(handler.formatter, LabeledFormatter)
    assert logger.propagate is False


def test_logging_labeled_prefixes():
    captured_output = StringIO()
    logger = logging.getLogger("test_csvtable_labels")
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(captured_output)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug("Test debug message")
    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "DEBUG Test debug message",
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
    ]


def test_child_loggers_use_configured_handler(capsys):
    setup_logging()
    logging.getLogger("csvtable.services.session").info("hello from child")
    assert "INFO hello from child" in capsys.readouterr().out


def test_get_logger_returns_configured_logger():
    configured = setup_logging()
    assert get_logger() is configured


def test_setup_logging_idempotent_and_updates_level():
    logger1 = setup_logging()
    logger2 = setup_logging("DEBUG")
    assert logger1 is logger2
    assert len(logger1.handlers) == 1
    assert logger1.level == logging.DEBUG


def test_reset_logging_allows_fresh_setup():
    first = setup_logging()
    reset_logging()
    assert first.handlers == []
    second = setup_logging()
    assert len(second.handlers) == 1
