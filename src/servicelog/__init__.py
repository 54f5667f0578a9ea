"""
Structured JSON logging for microservices.

Each call renders one single-line JSON record carrying a timestamp, level,
message, service name and calling function. ERROR records go to stderr,
everything else to stdout. Verbosity comes from the `LOG_LEVEL` environment
variable, read once when a Logger is built.

Library: structlog + orjson for the rendering pipeline, pydantic-settings for
configuration.
"""

from .caller import UNKNOWN_CALLER, get_caller
from .config import LoggerSettings
from .core import Logger
from .levels import LogLevel, parse_level
from .sanitize import CIRCULAR, sanitize

__all__ = [
    "CIRCULAR",
    "UNKNOWN_CALLER",
    "LogLevel",
    "Logger",
    "LoggerSettings",
    "get_caller",
    "parse_level",
    "sanitize",
]
