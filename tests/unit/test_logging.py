"""Unit tests for the logging module."""

import logging

from geobridge.logging import GEOBRIDGE_LOGGER, ColoredFormatter, set_log_level


def test_colored_formatter_adds_colors():
    fmt = ColoredFormatter(fmt="%(levelname)s %(message)s")
    record = logging.LogRecord("test", logging.INFO, "", 0, "hello", (), None)
    result = fmt.format(record)
    assert "hello" in result
    assert "\033[92m" in result
    assert record.levelname == "INFO"


def test_colored_formatter_all_levels():
    fmt = ColoredFormatter(fmt="%(levelname)s")
    for level in [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL]:
        record = logging.LogRecord("test", level, "", 0, "msg", (), None)
        result = fmt.format(record)
        assert logging.getLevelName(level) in result
        assert result.endswith(ColoredFormatter.RESET)


def test_logger_writes_to_single_stream_handler():
    assert len(GEOBRIDGE_LOGGER.handlers) == 1
    assert isinstance(GEOBRIDGE_LOGGER.handlers[0].formatter, ColoredFormatter)


def test_set_log_level():
    previous = GEOBRIDGE_LOGGER.level
    try:
        set_log_level("debug")
        assert GEOBRIDGE_LOGGER.level == logging.DEBUG
        set_log_level("nonsense")
        assert GEOBRIDGE_LOGGER.level == logging.DEBUG
    finally:
        GEOBRIDGE_LOGGER.setLevel(previous)
