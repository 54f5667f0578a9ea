"""
Resolution of the function that invoked a logging method.
"""

from __future__ import annotations

import inspect
from types import CodeType

UNKNOWN_CALLER = "unknown"
MODULE_CODE_NAME = "<module>"


def get_caller(skip: int = 0) -> str:
    """Return the name of the first named function above the logger's frames.

    Args:
        skip: Number of frames, starting with the immediate caller of
            ``get_caller``, that belong to the logger and are stepped over.

    Frames without a usable name (lambdas, comprehensions) are passed over
    while scanning outward. The scan stops at a module body, since frames
    beyond it belong to the import or run machinery. Returns ``"unknown"``
    when no frame qualifies.
    """
    frame = inspect.currentframe()
    try:
        for _ in range(skip + 1):
            if frame is None:
                return UNKNOWN_CALLER
            frame = frame.f_back

        while frame is not None:
            if frame.f_code.co_name == MODULE_CODE_NAME:
                return UNKNOWN_CALLER
            name = function_name(frame.f_code)
            if name:
                return name
            frame = frame.f_back
        return UNKNOWN_CALLER
    finally:
        del frame


def function_name(code: CodeType) -> str | None:
    """Trailing segment of a code object's qualified name, if it is an identifier."""
    qualname = getattr(code, "co_qualname", code.co_name)
    name = qualname.rsplit(".", 1)[-1]
    return name if name.isidentifier() else None
