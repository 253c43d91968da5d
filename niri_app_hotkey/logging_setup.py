"""Logging setup and utilities."""

import logging
import os
import sys
from typing import TextIO

from .debug import is_debug, set_debug

__all__ = [
    "LogObjects",
    "get_logger",
    "init_logger",
    "should_colorize",
]

_ESC = "\x1b["
_RESET = f"{_ESC}0m"

# (prefix codes) per level, see ECMA-48
_LEVEL_STYLES = {
    logging.WARNING: "33;2",
    logging.ERROR: "31;2",
    logging.CRITICAL: "31;1",
}


class LogObjects:
    """Handlers shared by every logger of the application."""

    handlers: list[logging.Handler] = []


def should_colorize(stream: TextIO | None = None) -> bool:
    """Tell if ANSI colors should be written to `stream` (stderr by default).

    NO_COLOR wins over FORCE_COLOR, which wins over TTY detection.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


class ScreenLogFormatter(logging.Formatter):
    """Formatter for the terminal, coloring warnings and errors."""

    def __init__(self, use_colors: bool | None = None) -> None:
        super().__init__()
        log_format = r"%(name)20s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s"
        if use_colors is None:
            use_colors = should_colorize()
        self._default = logging.Formatter(log_format)
        self._formatters: dict[int, logging.Formatter] = {}
        if use_colors:
            for level, codes in _LEVEL_STYLES.items():
                self._formatters[level] = logging.Formatter(f"{_ESC}{codes}m{log_format}{_RESET}")

    def format(self, record: logging.LogRecord) -> str:
        return self._formatters.get(record.levelno, self._default).format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Args:
        filename: Optional file receiving every record, with timestamps
        force_debug: If True, force debug level
    """
    if force_debug:
        set_debug(True)

    for handler in LogObjects.handlers:
        handler.close()
    LogObjects.handlers.clear()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ScreenLogFormatter())
    LogObjects.handlers.append(stream_handler)


def get_logger(name: str = "niri_app_hotkey", level: int | None = None) -> logging.Logger:
    """Return a named logger.

    Args:
        name: logger's name
        level: logger's level (DEBUG in debug mode, WARNING otherwise, if not set)
    """
    logger = logging.getLogger(name)
    if level is None:
        logger.setLevel(logging.DEBUG if is_debug() else logging.WARNING)
    else:
        logger.setLevel(level)
    logger.propagate = False
    # drop handlers of a previous init_logger() call
    for handler in [h for h in logger.handlers if h not in LogObjects.handlers]:
        logger.removeHandler(handler)
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    return logger
