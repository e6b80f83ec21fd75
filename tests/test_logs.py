"""Tests for the logging helpers."""

import io
import logging

from cmdpalette import logs


def test_paint():
    assert logs.paint("hello", "31;1") == "\x1b[31;1mhello\x1b[0m"
    assert logs.paint("hello", None) == "hello"
    assert logs.paint("hello", "") == "hello"


def test_use_colors_no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert logs.use_colors() is False


def test_use_colors_force(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert logs.use_colors(io.StringIO()) is True


def test_use_colors_not_a_tty(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    assert logs.use_colors(io.StringIO()) is False


def make_record(level, message="something happened"):
    return logging.LogRecord("palette", level, __file__, 1, message, None, None)


def test_formatter_colors_by_level():
    formatter = logs.ColorFormatter("%(message)s", colored=True)
    assert formatter.format(make_record(logging.INFO)) == "something happened"
    assert formatter.format(make_record(logging.ERROR)) == logs.paint("something happened", logs.LEVEL_STYLES[logging.ERROR])


def test_formatter_plain():
    formatter = logs.ColorFormatter("%(levelname)s %(message)s", colored=False)
    assert formatter.format(make_record(logging.CRITICAL)) == "CRITICAL something happened"


def test_get_logger_debug_level():
    """Tests run in debug mode (see conftest)."""
    assert logs.is_debug()
    logger = logs.get_logger("tests.level")
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert logs.get_logger("tests.level", logging.ERROR).level == logging.ERROR


def test_get_logger_handlers_added_once():
    logger = logs.get_logger("tests.handlers")
    count = len(logger.handlers)
    assert count >= 1
    assert len(logs.get_logger("tests.handlers").handlers) == count


def test_set_debug(monkeypatch):
    monkeypatch.setattr(logs._LogState, "debug", False)
    assert logs.get_logger("tests.quiet").level == logging.WARNING
    logs.set_debug(True)
    assert logs.is_debug()
