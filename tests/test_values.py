"""Tests for clause value coercion."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import pytest

from jobfilter.values import (
    ByteSize,
    ValueKind,
    as_byte_count,
    as_duration,
    as_number,
    coerce_value,
    format_cluster_duration,
    parse_bool,
    parse_cluster_duration,
    parse_duration,
    parse_memory_size,
    to_display,
)


class TestCoerceValue:
    """The interpretation order decides the kind of each value."""

    @pytest.mark.req("VALUE-001")
    @pytest.mark.parametrize(
        ("text", "kind", "value"),
        [
            ("42", ValueKind.INTEGER, 42),
            ("-7", ValueKind.INTEGER, -7),
            ("3.14", ValueKind.FLOAT, 3.14),
            ("1e3", ValueKind.FLOAT, 1000.0),
            ("true", ValueKind.BOOLEAN, True),
            ("F", ValueKind.BOOLEAN, False),
            ("4G", ValueKind.MEMORY, 4 * 1024**3),
            ("512MB", ValueKind.MEMORY, 512 * 1024**2),
            ("2:30:00", ValueKind.CLUSTER_DURATION, timedelta(hours=2, minutes=30)),
            ("1-12:00:00", ValueKind.CLUSTER_DURATION, timedelta(days=1, hours=12)),
            ("1h30m", ValueKind.DURATION, timedelta(hours=1, minutes=30)),
            ("300ms", ValueKind.DURATION, timedelta(milliseconds=300)),
            ("running", ValueKind.STRING, "running"),
        ],
    )
    def test_kinds(self, text: str, kind: ValueKind, value: object) -> None:
        coercion = coerce_value(text)
        assert coercion.kind is kind
        assert coercion.value == value
        assert coercion.raw == text

    def test_one_and_zero_are_integers_not_booleans(self) -> None:
        """Integer parsing runs before boolean parsing."""
        assert coerce_value("1").kind is ValueKind.INTEGER
        assert coerce_value("0").value == 0

    def test_minutes_suffix_reads_as_memory(self) -> None:
        """``30m`` hits the memory pattern before the duration pattern."""
        coercion = coerce_value("30m")
        assert coercion.kind is ValueKind.MEMORY
        assert coercion.value == 30 * 1024**2
        assert isinstance(coercion.value, ByteSize)

    def test_fallback_keeps_text(self) -> None:
        coercion = coerce_value("^compute[0-9]+$")
        assert coercion.is_fallback
        assert coercion.value == "^compute[0-9]+$"

    def test_empty_text_is_string(self) -> None:
        assert coerce_value("").kind is ValueKind.STRING


class TestParsers:
    """Tests for the individual value parsers."""

    def test_memory_units_are_binary_and_case_insensitive(self) -> None:
        assert parse_memory_size("1k") == 1024
        assert parse_memory_size("1KB") == 1024
        assert parse_memory_size("2T") == 2 * 1024**4
        assert parse_memory_size("100") == 100

    def test_memory_fraction_truncates(self) -> None:
        assert parse_memory_size("1.5K") == 1536
        assert parse_memory_size("2.5") == 2

    def test_memory_allows_space_before_unit(self) -> None:
        assert parse_memory_size("1.5 G") == int(1.5 * 1024**3)

    @pytest.mark.parametrize("text", ["", "G", "4X", "-4G", "four"])
    def test_memory_rejects(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_memory_size(text)

    def test_cluster_duration_requires_three_components(self) -> None:
        with pytest.raises(ValueError):
            parse_cluster_duration("10:00")
        with pytest.raises(ValueError):
            parse_cluster_duration("1-2:3")

    def test_cluster_duration_rejects_non_numeric_days(self) -> None:
        with pytest.raises(ValueError):
            parse_cluster_duration("x-01:00:00")

    def test_generic_duration_forms(self) -> None:
        assert parse_duration("0") == timedelta(0)
        assert parse_duration("-1.5h") == -timedelta(minutes=90)
        assert parse_duration("2h45m30s") == timedelta(hours=2, minutes=45, seconds=30)
        assert parse_duration("1500us") == timedelta(microseconds=1500)

    @pytest.mark.parametrize("text", ["", "5", "h", "1d", "1h-30m"])
    def test_generic_duration_rejects(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_duration(text)

    def test_bool_spellings(self) -> None:
        assert parse_bool("TRUE") is True
        assert parse_bool("t") is True
        assert parse_bool("False") is False
        with pytest.raises(ValueError):
            parse_bool("yes")


class TestDisplay:
    """Canonical text used by equality, substring and list checks."""

    def test_scalars(self) -> None:
        assert to_display(True) == "true"
        assert to_display(4.0) == "4"
        assert to_display(4.5) == "4.5"
        assert to_display(ByteSize(1024)) == "1024"
        assert to_display(None) == ""

    def test_durations(self) -> None:
        assert to_display(timedelta(hours=2, minutes=30)) == "2:30:00"
        assert format_cluster_duration(timedelta(days=1, hours=2)) == "1-02:00:00"
        assert format_cluster_duration(timedelta(milliseconds=300)) == "0:00:00.300000"


class TestComparisonViews:
    """Helpers used by ordered comparisons."""

    def test_byte_count(self) -> None:
        assert as_byte_count("8G") == 8 * 1024**3
        assert as_byte_count(100) == 100
        assert as_byte_count(True) is None
        assert as_byte_count("running") is None

    def test_duration(self) -> None:
        assert as_duration("1:00:00") == timedelta(hours=1)
        assert as_duration("90s") == timedelta(seconds=90)
        assert as_duration("idle") is None

    def test_number(self) -> None:
        assert as_number("2.5") == 2.5
        assert as_number(3) == 3.0
        assert as_number(False) is None
        assert as_number("abc") is None


class TestOutOfRange:
    """Values too large for their type are rejected, never overflow."""

    @pytest.mark.parametrize(
        ("parser", "text"),
        [
            (parse_memory_size, "9" * 400 + "T"),
            (parse_cluster_duration, "99999999999:00:00"),
            (parse_duration, "99999999999h"),
            (parse_duration, "9" * 400 + "s"),
        ],
    )
    def test_parser_raises_value_error(self, parser: Any, text: str) -> None:
        with pytest.raises(ValueError, match="out of range"):
            parser(text)

    @pytest.mark.parametrize("text", ["99999999999h", "99999999999:00:00"])
    def test_huge_durations_fall_back_to_string(self, text: str) -> None:
        coercion = coerce_value(text)
        assert coercion.is_fallback
        assert coercion.value == text

    def test_huge_memory_size_falls_back(self) -> None:
        text = "9" * 400 + "T"
        assert coerce_value(text).kind is ValueKind.STRING

    def test_views_return_none(self) -> None:
        assert as_byte_count("9" * 400) is None
        assert as_duration("99999999999h") is None
