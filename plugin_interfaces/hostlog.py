"""Coloured console logging for plugins running inside a host."""

from __future__ import annotations

import os
import sys
from enum import Enum, IntEnum


class ColorCode(IntEnum):
    """ANSI foreground colour codes."""

    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    WHITE = 37
    BRIGHT_BLACK = 90
    BRIGHT_RED = 91
    BRIGHT_GREEN = 92
    BRIGHT_YELLOW = 93
    BRIGHT_BLUE = 94
    BRIGHT_MAGENTA = 95
    BRIGHT_CYAN = 96
    BRIGHT_WHITE = 97


class LogLevel(Enum):
    """Severity of a log line."""

    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"
    DEBUG = "DEBUG"
    TRACE = "TRACE"

    def __str__(self) -> str:
        return self.value


_LEVEL_COLORS = {
    LogLevel.ERROR: ColorCode.BRIGHT_RED,
    LogLevel.WARN: ColorCode.BRIGHT_YELLOW,
    LogLevel.INFO: ColorCode.BRIGHT_GREEN,
    LogLevel.DEBUG: ColorCode.BRIGHT_CYAN,
    LogLevel.TRACE: ColorCode.BRIGHT_BLACK,
}

_MESSAGE_COLORS = {
    LogLevel.ERROR: ColorCode.RED,
    LogLevel.WARN: ColorCode.YELLOW,
    LogLevel.INFO: ColorCode.GREEN,
    LogLevel.DEBUG: ColorCode.CYAN,
    LogLevel.TRACE: ColorCode.BRIGHT_BLACK,
}


def with_color(color: ColorCode, text: str) -> str:
    """Wrap text in an ANSI colour escape and a reset."""
    return f"\x1b[{int(color)}m{text}\x1b[m"


def format_log_line(level: LogLevel, message: str, location: str) -> str:
    """Build the coloured line for a message logged at ``location``."""
    return "[{} {} {}".format(
        with_color(_LEVEL_COLORS[level], str(level).ljust(5)),
        with_color(ColorCode.WHITE, f"{location}]"),
        with_color(_MESSAGE_COLORS[level], message),
    )


def _emit(level: LogLevel, message: object, depth: int) -> None:
    frame = sys._getframe(depth)
    location = f"{os.path.basename(frame.f_code.co_filename)}:{frame.f_lineno}"
    print(format_log_line(level, str(message), location))


def log_print(level: LogLevel, message: object) -> None:
    """Print a message at the given level, tagged with the caller's location."""
    _emit(level, message, 2)


def log_error(message: object) -> None:
    """Print an error message."""
    _emit(LogLevel.ERROR, message, 2)


def log_warn(message: object) -> None:
    """Print a warning message."""
    _emit(LogLevel.WARN, message, 2)


def log_info(message: object) -> None:
    """Print an informational message."""
    _emit(LogLevel.INFO, message, 2)


def log_debug(message: object) -> None:
    """Print a debug message."""
    _emit(LogLevel.DEBUG, message, 2)


def log_trace(message: object) -> None:
    """Print a trace message."""
    _emit(LogLevel.TRACE, message, 2)