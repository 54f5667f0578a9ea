"""
structlog processors that turn a log call into a record envelope.
"""

from __future__ import annotations

from datetime import datetime, timezone

from structlog.typing import EventDict, WrappedLogger

from .caller import UNKNOWN_CALLER
from .sanitize import sanitize
from .sinks import orjson_dumps

RESERVED_KEYS = ("timestamp", "level", "message", "microservice", "caller")


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 UTC timestamp with millisecond precision."""
    now = datetime.now(timezone.utc)
    event_dict["timestamp"] = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def build_log_record(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Order the envelope keys and flatten structured messages into the record.

    A non-string message is sanitized and serialized into ``message``; when
    it sanitizes to a mapping its keys are also merged at the top level,
    overwriting envelope keys of the same name.
    """
    message = event_dict.get("message")
    record: EventDict = {
        "timestamp": event_dict.get("timestamp"),
        "level": event_dict.get("level"),
        "message": message,
        "microservice": event_dict.get("microservice"),
        "caller": event_dict.get("caller", UNKNOWN_CALLER),
    }

    if not isinstance(message, str):
        sanitized = sanitize(message)
        record["message"] = orjson_dumps(sanitized)
        if isinstance(sanitized, dict):
            record.update(sanitized)

    return record
