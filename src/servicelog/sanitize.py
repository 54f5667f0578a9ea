"""
Conversion of arbitrary runtime values into JSON-safe data.

Every value is classified into one of a closed set of shapes (``ValueKind``)
and converted by the rule registered for that shape:

- primitive: passed through
- callable: its source text
- error: ``{"name", "message", "stack"}``
- array / record / object: recursed into, with cycle tracking

``sanitize`` never raises. Containers already visited during one call are
replaced with ``"[Circular]"``, and containers nested deeper than
``MAX_DEPTH`` with ``"[Depth]"``. A container that cannot be read falls back
to its repr.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import textwrap
import traceback
from collections import deque
from collections.abc import Mapping
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Callable
from uuid import UUID

CIRCULAR = "[Circular]"
DEPTH_LIMIT = "[Depth]"

# Containers nested deeper than this are cut off; orjson rejects more than
# 254 levels and each level costs several interpreter frames.
MAX_DEPTH = 128

_INT64_MIN = -(2**63)
_UINT64_MAX = 2**64 - 1

_PRIMITIVE_TYPES = (str, int, float, bool, type(None), datetime, date, time, UUID, Enum)
_ARRAY_TYPES = (list, tuple, set, frozenset, deque)

# Frames from these modules are left out of a stack captured on demand.
_INTERNAL_MODULES = ("servicelog.", "structlog")


class ValueKind(str, Enum):
    PRIMITIVE = "primitive"
    CALLABLE = "callable"
    ERROR = "error"
    ARRAY = "array"
    RECORD = "record"
    OBJECT = "object"
    OPAQUE = "opaque"


_CONTAINER_KINDS = frozenset({ValueKind.ARRAY, ValueKind.RECORD, ValueKind.OBJECT})


def classify(value: Any) -> ValueKind:
    """Return the shape a value is sanitized as."""
    if isinstance(value, _PRIMITIVE_TYPES):
        return ValueKind.PRIMITIVE
    if isinstance(value, BaseException):
        return ValueKind.ERROR
    if inspect.isroutine(value) or inspect.isclass(value) or isinstance(value, functools.partial):
        return ValueKind.CALLABLE
    if isinstance(value, _ARRAY_TYPES):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.RECORD
    if dataclasses.is_dataclass(value) or _has_instance_dict(value):
        return ValueKind.OBJECT
    return ValueKind.OPAQUE


def sanitize(value: Any) -> Any:
    """Convert ``value`` into data that serializes to JSON without error."""
    seen: set[int] = set()
    return _sanitize_value(value, seen, 0)


def _sanitize_value(value: Any, seen: set[int], depth: int) -> Any:
    kind = classify(value)
    if kind in _CONTAINER_KINDS:
        if id(value) in seen:
            return CIRCULAR
        if depth >= MAX_DEPTH:
            return DEPTH_LIMIT
        seen.add(id(value))
    return _RULES[kind](value, seen, depth + 1)


# =============================================================================
# Rules
# =============================================================================


def _sanitize_primitive(value: Any, seen: set[int], depth: int) -> Any:
    if isinstance(value, int) and not isinstance(value, (bool, Enum)):
        if not _INT64_MIN <= value <= _UINT64_MAX:
            return str(value)
    return value


def _sanitize_callable(value: Any, seen: set[int], depth: int) -> str:
    target = value.func if isinstance(value, functools.partial) else value
    try:
        return textwrap.dedent(inspect.getsource(target)).strip()
    except (OSError, TypeError):
        return _safe_repr(value)


def _sanitize_error(value: BaseException, seen: set[int], depth: int) -> dict[str, str]:
    return {
        "name": type(value).__name__,
        "message": error_message(value),
        "stack": format_stack(value),
    }


def _sanitize_array(value: Any, seen: set[int], depth: int) -> Any:
    try:
        items = list(value)
    except Exception:
        return _safe_repr(value)
    return [_sanitize_value(item, seen, depth) for item in items]


def _sanitize_record(value: Mapping[Any, Any], seen: set[int], depth: int) -> Any:
    try:
        items = list(value.items())
    except Exception:
        return _safe_repr(value)
    return {key: _sanitize_value(item, seen, depth) for key, item in items if isinstance(key, str)}


def _sanitize_object(value: Any, seen: set[int], depth: int) -> Any:
    try:
        attributes = _public_attributes(value)
    except Exception:
        return _safe_repr(value)
    return {
        name: _sanitize_value(item, seen, depth)
        for name, item in attributes.items()
        if isinstance(name, str) and not name.startswith("_")
    }


def _sanitize_opaque(value: Any, seen: set[int], depth: int) -> str:
    return _safe_repr(value)


_RULES: dict[ValueKind, Callable[[Any, set[int], int], Any]] = {
    ValueKind.PRIMITIVE: _sanitize_primitive,
    ValueKind.CALLABLE: _sanitize_callable,
    ValueKind.ERROR: _sanitize_error,
    ValueKind.ARRAY: _sanitize_array,
    ValueKind.RECORD: _sanitize_record,
    ValueKind.OBJECT: _sanitize_object,
    ValueKind.OPAQUE: _sanitize_opaque,
}


# =============================================================================
# Errors
# =============================================================================


def error_message(error: BaseException) -> str:
    try:
        return str(error)
    except Exception:
        return _safe_repr(error)


def format_stack(error: BaseException) -> str:
    """Render an exception as a header line plus one ``at`` line per frame.

    Frames are listed innermost first. An exception that was never raised
    has no traceback, so the current stack is used instead.
    """
    if error.__traceback__ is not None:
        frames = list(reversed(traceback.extract_tb(error.__traceback__)))
    else:
        frames = _current_frames()

    lines = [f"{type(error).__name__}: {error_message(error)}"]
    for frame in frames:
        lines.append(f"    at {frame.name} ({frame.filename}:{frame.lineno})")
    return "\n".join(lines)


def _current_frames() -> list[traceback.FrameSummary]:
    frames = []
    frame = inspect.currentframe()
    try:
        while frame is not None:
            module = frame.f_globals.get("__name__", "")
            if not module.startswith(_INTERNAL_MODULES):
                code = frame.f_code
                frames.append(
                    traceback.FrameSummary(code.co_filename, frame.f_lineno, code.co_name, lookup_line=False)
                )
            frame = frame.f_back
    finally:
        del frame
    return frames


# =============================================================================
# Helpers
# =============================================================================


def _has_instance_dict(value: Any) -> bool:
    try:
        vars(value)
    except Exception:
        return False
    return True


def _public_attributes(value: Any) -> dict[str, Any]:
    if dataclasses.is_dataclass(value):
        return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}
    return dict(vars(value))


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return f"<unrepresentable {type(value).__name__}>"
