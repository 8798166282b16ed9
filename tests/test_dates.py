"""Tests for date range expressions."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from jobfilter.dates import DateRange, parse_date, parse_date_range
from jobfilter.exceptions import DateRangeError

# Wednesday
NOW = datetime(2024, 3, 13, 15, 30, 0)
END_OF_DAY = timedelta(days=1) - timedelta(microseconds=1)


class TestRelativeRanges:
    def test_today_and_yesterday(self) -> None:
        today = parse_date_range("today", now=NOW)
        assert today.start == datetime(2024, 3, 13)
        assert today.end == datetime(2024, 3, 13) + END_OF_DAY

        yesterday = parse_date_range("Yesterday", now=NOW)
        assert yesterday.start == datetime(2024, 3, 12)

    def test_weeks_start_on_monday(self) -> None:
        this_week = parse_date_range("this week", now=NOW)
        assert this_week.start == datetime(2024, 3, 11)
        assert this_week.end == datetime(2024, 3, 17) + END_OF_DAY

        last_week = parse_date_range("last week", now=NOW)
        assert last_week.start == datetime(2024, 3, 4)
        assert last_week.end == datetime(2024, 3, 10) + END_OF_DAY

    def test_months(self) -> None:
        this_month = parse_date_range("this month", now=NOW)
        assert this_month.start == datetime(2024, 3, 1)
        assert this_month.end == datetime(2024, 3, 31) + END_OF_DAY

        last_month = parse_date_range("last month", now=NOW)
        assert last_month.start == datetime(2024, 2, 1)
        assert last_month.end == datetime(2024, 2, 29) + END_OF_DAY

    def test_last_month_in_january(self) -> None:
        last_month = parse_date_range("last month", now=datetime(2024, 1, 10))
        assert last_month.start == datetime(2023, 12, 1)
        assert last_month.end == datetime(2023, 12, 31) + END_OF_DAY

    @pytest.mark.parametrize(
        ("text", "delta"),
        [
            ("last 24h", timedelta(hours=24)),
            ("last 24 hours", timedelta(hours=24)),
            ("last 7d", timedelta(days=7)),
            ("last 30 days", timedelta(days=30)),
            ("last 5 hours", timedelta(hours=5)),
            ("last 90 minutes", timedelta(minutes=90)),
            ("last 3 days", timedelta(days=3)),
            ("last 15m", timedelta(minutes=15)),
        ],
    )
    def test_last_n(self, text: str, delta: timedelta) -> None:
        rng = parse_date_range(text, now=NOW)
        assert rng.start == NOW - delta
        assert rng.end == NOW


class TestAbsoluteRanges:
    def test_explicit_range(self) -> None:
        rng = parse_date_range("2024-01-01..2024-01-31", now=NOW)
        assert rng == DateRange(start=datetime(2024, 1, 1), end=datetime(2024, 1, 31))

    def test_single_date_is_whole_day(self) -> None:
        rng = parse_date_range("2024-03-15", now=NOW)
        assert rng.start == datetime(2024, 3, 15)
        assert rng.end == datetime(2024, 3, 15) + END_OF_DAY

    def test_bad_start(self) -> None:
        with pytest.raises(DateRangeError, match="invalid start date"):
            parse_date_range("soon..2024-01-31", now=NOW)

    def test_bad_end(self) -> None:
        with pytest.raises(DateRangeError, match="invalid end date"):
            parse_date_range("2024-01-01..later", now=NOW)

    def test_too_many_parts(self) -> None:
        with pytest.raises(DateRangeError, match="invalid date range format"):
            parse_date_range("2024-01-01..2024-01-02..2024-01-03", now=NOW)

    def test_unrecognised(self) -> None:
        with pytest.raises(DateRangeError, match="unrecognized date format"):
            parse_date_range("next tuesday", now=NOW)


class TestParseDate:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2024-01-02", datetime(2024, 1, 2)),
            ("2024-01-02 10:20:30", datetime(2024, 1, 2, 10, 20, 30)),
            ("2024-01-02T10:20:30Z", datetime(2024, 1, 2, 10, 20, 30)),
            ("01/02/2024", datetime(2024, 1, 2)),
            ("Jan 02, 2024", datetime(2024, 1, 2)),
            ("January 02, 2024 10:20:30", datetime(2024, 1, 2, 10, 20, 30)),
        ],
    )
    def test_formats(self, text: str, expected: datetime) -> None:
        assert parse_date(text, now=NOW) == expected

    def test_time_only_is_today(self) -> None:
        assert parse_date("08:15:00", now=NOW) == datetime(2024, 3, 13, 8, 15)


def test_contains() -> None:
    rng = parse_date_range("today", now=NOW)
    assert rng.contains(NOW)
    assert rng.contains(date(2024, 3, 13))
    assert not rng.contains(datetime(2024, 3, 14))


class TestOutOfRangeDates:
    @pytest.mark.parametrize(
        "text",
        ["last 99999999999 days", "last 99999999999 minutes", "9999-12-31"],
    )
    def test_raises_date_range_error(self, text: str) -> None:
        with pytest.raises(DateRangeError, match="date out of range"):
            parse_date_range(text, now=NOW)


class TestFieldRanges:
    def test_field_is_attached(self) -> None:
        rng = parse_date_range("today", now=NOW, field="SubmitTime")
        assert rng.field == "SubmitTime"
        assert parse_date_range("today", now=NOW).field is None

    def test_matches_record(self) -> None:
        rng = parse_date_range("2024-03-01..2024-03-31", now=NOW, field="SubmitTime")
        assert rng.matches({"SubmitTime": "2024-03-10T08:00:00Z"})
        assert rng.matches({"SubmitTime": datetime(2024, 3, 2, 9, 0)})
        assert not rng.matches({"SubmitTime": "2024-04-02 00:00:00"})

    def test_unusable_values_never_match(self) -> None:
        rng = parse_date_range("this month", now=NOW, field="SubmitTime")
        assert not rng.matches({"State": "RUNNING"})
        assert not rng.matches({"SubmitTime": "Unknown"})
        assert not rng.matches({"SubmitTime": 1710000000})

    def test_range_without_field_never_matches(self) -> None:
        assert not parse_date_range("today", now=NOW).matches({"SubmitTime": NOW})
