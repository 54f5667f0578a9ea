"""
Severity levels and verbosity parsing.
"""

from __future__ import annotations

from enum import IntEnum


class LogLevel(IntEnum):
    """Ordered severity. Higher value means more verbose."""

    ERROR = 0
    WARN = 1
    INFO = 2
    DEBUG = 3


DEFAULT_LEVEL = LogLevel.INFO

_LEVELS_BY_NAME = {
    "error": LogLevel.ERROR,
    "warn": LogLevel.WARN,
    "info": LogLevel.INFO,
    "debug": LogLevel.DEBUG,
}


def parse_level(value: str | None) -> LogLevel:
    """Map a verbosity string to a LogLevel, case-insensitively.

    Absent, empty or unrecognized values fall back to INFO.
    """
    if not value:
        return DEFAULT_LEVEL
    return _LEVELS_BY_NAME.get(value.strip().lower(), DEFAULT_LEVEL)
