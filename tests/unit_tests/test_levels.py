"""
Severity ordering and verbosity parsing.
"""

from __future__ import annotations

import pytest

from servicelog.levels import DEFAULT_LEVEL, LogLevel, parse_level


class TestLogLevel:
    def test_order_is_by_verbosity(self) -> None:
        assert LogLevel.ERROR < LogLevel.WARN < LogLevel.INFO < LogLevel.DEBUG

    def test_numeric_ranks(self) -> None:
        assert [int(level) for level in LogLevel] == [0, 1, 2, 3]

    def test_names_are_record_level_strings(self) -> None:
        assert [level.name for level in LogLevel] == ["ERROR", "WARN", "INFO", "DEBUG"]


class TestParseLevel:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("error", LogLevel.ERROR),
            ("warn", LogLevel.WARN),
            ("info", LogLevel.INFO),
            ("debug", LogLevel.DEBUG),
            ("ERROR", LogLevel.ERROR),
            ("Debug", LogLevel.DEBUG),
            ("  warn\n", LogLevel.WARN),
        ],
    )
    def test_recognized_values(self, value: str, expected: LogLevel) -> None:
        assert parse_level(value) is expected

    @pytest.mark.parametrize("value", [None, "", "invalid_level", "warning", "trace", "3"])
    def test_unrecognized_values_default_to_info(self, value: str | None) -> None:
        assert parse_level(value) is LogLevel.INFO
        assert DEFAULT_LEVEL is LogLevel.INFO
