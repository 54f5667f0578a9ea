from __future__ import annotations

import typing as t

import orjson
import pytest


@pytest.fixture(autouse=True)
def clear_log_level(monkeypatch):
    """
    Every test starts without LOG_LEVEL so the default threshold applies.
    """
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def read_records(capsys) -> t.Callable[[], tuple[list[dict], list[dict]]]:
    """
    Returns a reader that drains captured output and parses one JSON record
    per line, as (stdout records, stderr records).
    """

    def _read() -> tuple[list[dict], list[dict]]:
        captured = capsys.readouterr()
        out = [orjson.loads(line) for line in captured.out.split("\n") if line]
        err = [orjson.loads(line) for line in captured.err.split("\n") if line]
        return out, err

    return _read
