"""
Core Logger: level gating, caller resolution and emission.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

import structlog
from structlog.typing import Processor

from .caller import get_caller
from .config import LoggerSettings
from .levels import LogLevel
from .processors import add_timestamp, build_log_record, rename_event_key
from .sanitize import error_message, format_stack, sanitize
from .sinks import StreamRouter, orjson_dumps

LogMessage = str | Mapping[str, Any]
LogMethod = Callable[[LogMessage], None]

# Logger frames between get_caller and user code: Logger._emit, then the
# bound level method or log_complex_error.
_CALLER_SKIP = 2


def build_processors() -> list[Processor]:
    """Processor chain rendering one record as a single JSON line."""
    return [
        add_timestamp,
        rename_event_key,
        build_log_record,
        structlog.processors.JSONRenderer(serializer=orjson_dumps),
    ]


def _noop(message: LogMessage) -> None:
    return None


class Logger:
    """Structured JSON logger bound to one service.

    The verbosity threshold is resolved once, here, from ``settings`` or the
    ``LOG_LEVEL`` environment variable. Methods for levels above the
    threshold are bound to a no-op and never touch their argument.

    Args:
        service_name: Written to every record as ``microservice``.
        settings: Explicit configuration; read from the environment if omitted.
        router: Destination for rendered lines; stdout/stderr by default.
    """

    error: LogMethod
    warn: LogMethod
    info: LogMethod
    debug: LogMethod

    def __init__(
        self,
        service_name: str,
        settings: LoggerSettings | None = None,
        *,
        router: StreamRouter | None = None,
    ):
        settings = settings or LoggerSettings()
        self._service_name = service_name
        self._threshold = settings.threshold
        self._logger = structlog.wrap_logger(
            router or StreamRouter(),
            processors=build_processors(),
            wrapper_class=structlog.BoundLogger,
            context_class=dict,
        ).bind(microservice=service_name)

        self.error = self._method_for(LogLevel.ERROR)
        self.warn = self._method_for(LogLevel.WARN)
        self.info = self._method_for(LogLevel.INFO)
        self.debug = self._method_for(LogLevel.DEBUG)

    def __repr__(self) -> str:
        return f"Logger(service_name={self._service_name!r}, threshold={self._threshold.name})"

    @property
    def service_name(self) -> str:
        return self._service_name

    @property
    def threshold(self) -> LogLevel:
        return self._threshold

    def is_enabled(self, level: LogLevel) -> bool:
        return self._threshold >= level

    def log_complex_error(self, error: BaseException | Mapping[str, Any]) -> None:
        """Log an exception or error-like mapping as one flattened string.

        The text lands under ``complexError`` with every newline replaced by
        a space, so stack traces stay on the record's single line.
        """
        if self._threshold >= LogLevel.ERROR:
            if isinstance(error, BaseException):
                text = f"{type(error).__name__}: {error_message(error)}\n{format_stack(error)}"
            else:
                text = orjson_dumps(sanitize(error))

            self._emit(LogLevel.ERROR, {"complexError": text.replace("\n", " ")})

    def _method_for(self, level: LogLevel) -> LogMethod:
        if not self.is_enabled(level):
            return _noop

        def log(message: LogMessage) -> None:
            self._emit(level, message)

        return log

    def _emit(self, level: LogLevel, message: LogMessage) -> None:
        caller = get_caller(_CALLER_SKIP)
        log_method = getattr(self._logger, level.name.lower())
        log_method(message, level=level.name, caller=caller)
