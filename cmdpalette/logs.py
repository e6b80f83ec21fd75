"""Logging for the palette and its extensions.

Every logger returned by `get_logger` writes to the handlers installed by
`init_logger`: the terminal, colored by level when it supports it, and
optionally a file. Debug mode (`CMDPALETTE_DEBUG` or `--debug`) lowers the level
to DEBUG and prefixes each terminal line with the logger name.

Colors honor `NO_COLOR` and `FORCE_COLOR`.
"""

import logging
import os
import sys
from typing import ClassVar, TextIO

__all__ = [
    "ASYNC_CALL_STYLE",
    "CALL_STYLE",
    "LEVEL_STYLES",
    "ColorFormatter",
    "get_logger",
    "init_logger",
    "is_debug",
    "paint",
    "set_debug",
    "use_colors",
]

SGR_RESET = "\x1b[0m"

# SGR parameters: 31 red, 33 yellow, 36 cyan; 1 bold, 2 dim
LEVEL_STYLES = {
    logging.WARNING: "33;2",
    logging.ERROR: "31;2",
    logging.CRITICAL: "31;1",
}

CALL_STYLE = "33;1"
ASYNC_CALL_STYLE = "36;1"

SCREEN_FORMAT = "%(message)s"
SCREEN_DEBUG_FORMAT = "%(name)20s - %(message)s // %(filename)s:%(lineno)d"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"


class _LogState:
    """Process-wide logging state."""

    debug: bool = bool(os.environ.get("CMDPALETTE_DEBUG"))
    handlers: ClassVar[list[logging.Handler]] = []


def is_debug() -> bool:
    """Tell whether debug mode is on."""
    return _LogState.debug


def set_debug(value: bool) -> None:
    """Switch debug mode; loggers created afterwards pick the matching level."""
    _LogState.debug = value


def use_colors(stream: TextIO | None = None) -> bool:
    """Tell whether ANSI colors should be written to `stream` (stderr by default)."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    stream = stream or sys.stderr
    return bool(getattr(stream, "isatty", None) and stream.isatty())


def paint(text: str, style: str | None) -> str:
    """Wrap `text` in the SGR `style` (e.g. "31;1"), unchanged when style is empty."""
    if not style:
        return text
    return f"\x1b[{style}m{text}{SGR_RESET}"


class ColorFormatter(logging.Formatter):
    """Formats records, painting warnings and errors.

    Args:
        fmt: Format string
        colored: Apply LEVEL_STYLES
    """

    def __init__(self, fmt: str, colored: bool) -> None:
        super().__init__(fmt)
        self.colored = colored

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        return paint(text, LEVEL_STYLES.get(record.levelno)) if self.colored else text


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Install the shared handlers.

    Args:
        filename: Also log to this file, with timestamps
        force_debug: Turn debug mode on
    """
    if force_debug:
        set_debug(True)

    screen = logging.StreamHandler()
    screen.setFormatter(ColorFormatter(SCREEN_DEBUG_FORMAT if is_debug() else SCREEN_FORMAT, use_colors()))
    handlers: list[logging.Handler] = [screen]
    if filename:
        to_file = logging.FileHandler(filename)
        to_file.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.insert(0, to_file)
    _LogState.handlers[:] = handlers


def get_logger(name: str = "palette", level: int | None = None) -> logging.Logger:
    """Return the logger `name`, wired to the shared handlers.

    Args:
        name: Logger name; extensions use their own name
        level: Explicit level, DEBUG or WARNING depending on debug mode otherwise

    Returns:
        A non-propagating logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level if level is not None else (logging.DEBUG if is_debug() else logging.WARNING))
    logger.propagate = False
    for handler in _LogState.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    return logger
