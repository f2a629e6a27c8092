"""Minimal timestamped logging to standard output."""

from __future__ import annotations

import enum
import sys
from datetime import datetime


class LogLevel(enum.IntEnum):
    """Message severity."""

    ALL = 0
    TRACE = 1
    DEBUG = 2
    INFO = 3
    WARNING = 4
    ERROR = 5
    FATAL = 6
    NONE = 7


_PREFIXES = {
    LogLevel.INFO: "[INFO] : ",
    LogLevel.ERROR: "[ERROR]: ",
    LogLevel.WARNING: "[WARN] : ",
    LogLevel.DEBUG: "[DEBUG]: ",
}


def format_log_line(
    level: LogLevel, text: str, now: datetime | None = None
) -> str:
    """Return a log line with a timestamp and level tag."""
    if now is None:
        now = datetime.now()
    stamp = now.strftime("%Y-%m-%d %H:%M:%S")
    return f"[{stamp}] {_PREFIXES.get(level, '')}{text}"


def log(text: str, level: LogLevel = LogLevel.INFO) -> None:
    """Write a log line to standard output."""
    sys.stdout.write(format_log_line(level, text) + "\n")
    sys.stdout.flush()