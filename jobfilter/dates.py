"""
Date range expressions.

Used by callers that filter on timestamp fields (submit / start / end
times). Accepts relative phrases, ``start..end`` ranges and single dates::

    today, yesterday, this week, last week, this month, last month
    last 24h, last 7 days, last 30d, last 5 hours, last 90 minutes
    2024-01-01..2024-01-31
    2024-03-15               (the whole day)
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Any

from .exceptions import DateRangeError

DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%SZ",
    "%m/%d/%Y",
    "%H:%M:%S",
    "%b %d, %Y",
    "%B %d, %Y %H:%M:%S",
)

_LAST_N_RE = re.compile(r"^last (\d+)\s*(d|day|days|h|hour|hours|m|min|minute|minutes)s?$")
_ONE_TICK = timedelta(microseconds=1)


@dataclass(frozen=True)
class DateRange:
    """An inclusive ``[start, end]`` interval, optionally tied to a field."""

    start: datetime
    end: datetime
    field: str | None = None

    def contains(self, moment: datetime | date) -> bool:
        if not isinstance(moment, datetime):
            moment = datetime.combine(moment, datetime.min.time())
        return self.start <= moment <= self.end

    def matches(self, record: Mapping[str, Any]) -> bool:
        """
        True if the record's ``field`` holds a date inside the range.

        A missing field, or text in none of ``DATE_FORMATS``, never matches.
        """
        if self.field is None or self.field not in record:
            return False
        value = record[self.field]
        if isinstance(value, date):
            return self.contains(value)
        if not isinstance(value, str):
            return False
        try:
            return self.contains(parse_date(value.strip()))
        except DateRangeError:
            return False


def _start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _whole_day(moment: datetime) -> DateRange:
    start = _start_of_day(moment)
    return DateRange(start=start, end=start + timedelta(days=1) - _ONE_TICK)


def _add_months(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 + months
    return moment.replace(year=moment.year + month_index // 12, month=month_index % 12 + 1)


def parse_date(text: str, *, now: datetime | None = None) -> datetime:
    """
    Parse one date in any of ``DATE_FORMATS``.

    A bare ``HH:MM:SS`` is taken as that time today.
    """
    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        if fmt == "%H:%M:%S":
            today = (now or datetime.now()).date()
            parsed = datetime.combine(today, parsed.time())
        return parsed
    raise DateRangeError(f"unrecognized date format: {text}")


def _parse_relative(text: str, now: datetime) -> DateRange | None:
    if text == "today":
        return _whole_day(now)
    if text == "yesterday":
        return _whole_day(now - timedelta(days=1))
    if text in ("this week", "last week"):
        monday = _start_of_day(now - timedelta(days=now.weekday()))
        if text == "last week":
            monday -= timedelta(days=7)
        return DateRange(start=monday, end=monday + timedelta(days=7) - _ONE_TICK)
    if text in ("this month", "last month"):
        first = _start_of_day(now).replace(day=1)
        if text == "last month":
            first = _add_months(first, -1)
        return DateRange(start=first, end=_add_months(first, 1) - _ONE_TICK)
    if text in ("last 24h", "last 24 hours"):
        return DateRange(start=now - timedelta(hours=24), end=now)
    if text in ("last 7d", "last 7 days"):
        return DateRange(start=now - timedelta(days=7), end=now)
    if text in ("last 30d", "last 30 days"):
        return DateRange(start=now - timedelta(days=30), end=now)

    match = _LAST_N_RE.match(text)
    if match is None:
        return None
    count = int(match.group(1))
    unit = match.group(2)
    if unit in ("m", "min", "minute", "minutes"):
        delta = timedelta(minutes=count)
    elif unit in ("h", "hour", "hours"):
        delta = timedelta(hours=count)
    else:
        delta = timedelta(days=count)
    return DateRange(start=now - delta, end=now)


def parse_date_range(
    text: str, *, now: datetime | None = None, field: str | None = None
) -> DateRange:
    """
    Parse a date range expression.

    Args:
        text: Relative phrase, ``start..end`` range or single date.
        now: Reference time for relative phrases (defaults to local now).
        field: Record key the range applies to, used by ``DateRange.matches``.

    Raises:
        DateRangeError: If the text is not a recognised date or range, or
            falls outside the representable dates.
    """
    text = text.strip()
    try:
        rng = _parse_range(text, now or datetime.now())
    except OverflowError as exc:
        raise DateRangeError(f"date out of range: {text}") from exc
    return replace(rng, field=field) if field is not None else rng


def _parse_range(text: str, now: datetime) -> DateRange:
    relative = _parse_relative(text.lower(), now)
    if relative is not None:
        return relative

    if ".." in text:
        parts = text.split("..")
        if len(parts) != 2:
            raise DateRangeError(f"invalid date range format: {text}")
        try:
            start = parse_date(parts[0].strip(), now=now)
        except DateRangeError as exc:
            raise DateRangeError(f"invalid start date: {exc}") from exc
        try:
            end = parse_date(parts[1].strip(), now=now)
        except DateRangeError as exc:
            raise DateRangeError(f"invalid end date: {exc}") from exc
        return DateRange(start=start, end=end)

    return _whole_day(parse_date(text, now=now))
