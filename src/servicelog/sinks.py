"""
Output sinks and the wrapped logger that routes rendered records to them.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import IO, Any, Literal

import orjson

Channel = Literal["stdout", "stderr"]


def orjson_dumps(v: Any, *, default: Any = str) -> str:
    """Compact JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def emit(self, line: str) -> None:
        """Write one rendered record."""
        ...


class StdioSink(BaseSink):
    """Writes records to one of the process's standard streams.

    Args:
        channel: "stdout" or "stderr". The stream is looked up on ``sys``
            at write time unless ``stream`` is given.
        stream: Fixed stream overriding ``channel``.
    """

    def __init__(self, channel: Channel = "stdout", stream: IO[str] | None = None):
        self._channel = channel
        self._stream = stream

    @property
    def stream(self) -> IO[str]:
        return self._stream or getattr(sys, self._channel)

    def emit(self, line: str) -> None:
        stream = self.stream
        stream.write(line + "\n")
        stream.flush()


class StreamRouter:
    """structlog wrapped logger sending ERROR records to stderr, the rest to stdout."""

    def __init__(self, out: BaseSink | None = None, err: BaseSink | None = None):
        self._out = out or StdioSink("stdout")
        self._err = err or StdioSink("stderr")

    def msg(self, line: str) -> None:
        self._out.emit(line)

    def error(self, line: str) -> None:
        self._err.emit(line)

    debug = info = warn = msg
