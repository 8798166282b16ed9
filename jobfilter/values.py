"""
Value coercion for filter clauses.

The right-hand side of a clause arrives as untyped text. ``coerce_value`` turns
it into one typed scalar by trying a fixed list of interpretations and
returning the first that succeeds::

    integer -> float -> boolean -> memory size -> cluster duration
        -> generic duration -> string

The order is load-bearing. ``4G`` is not a number, so it becomes a byte count;
``2:30:00`` fails everything up to memory size and becomes a cluster duration.
A side effect worth knowing: ``30m`` matches the memory pattern before the
generic duration pattern, so it coerces to 30 MiB.

Memory sizes use binary multipliers (K = 1024 bytes).
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any


class ByteSize(int):
    """An integer byte count parsed from a size such as ``4G``."""

    def __repr__(self) -> str:
        return f"ByteSize({int(self)})"

    def __str__(self) -> str:
        return int.__repr__(self)


Scalar = int | float | bool | ByteSize | timedelta | str


class ValueKind(Enum):
    """Which interpretation produced a value."""

    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    MEMORY = "memory"
    CLUSTER_DURATION = "cluster_duration"
    DURATION = "duration"
    STRING = "string"
    # Only produced by the parser for in / not in value lists.
    STRING_LIST = "string_list"


@dataclass(frozen=True)
class Coercion:
    """Result of ``coerce_value``: the typed value and how it was obtained."""

    kind: ValueKind
    value: Scalar
    raw: str

    @property
    def is_fallback(self) -> bool:
        """True when no typed interpretation matched and the raw text was kept."""
        return self.kind is ValueKind.STRING


# =============================================================================
# Individual parsers (raise ValueError on mismatch)
# =============================================================================

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_TRUE_LITERALS = frozenset(["1", "t", "T", "TRUE", "true", "True"])
_FALSE_LITERALS = frozenset(["0", "f", "F", "FALSE", "false", "False"])

_MEMORY_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)\s*([KMGT]?B?)")
_MEMORY_MULTIPLIERS = {
    "": 1,
    "B": 1,
    "K": 1024,
    "KB": 1024,
    "M": 1024**2,
    "MB": 1024**2,
    "G": 1024**3,
    "GB": 1024**3,
    "T": 1024**4,
    "TB": 1024**4,
}

# Unit lengths in nanoseconds. "ms" must be tried before "m" and "s".
_DURATION_PART_RE = re.compile(r"([0-9]*(?:\.[0-9]*)?)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_UNITS_NS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}


def parse_int(text: str) -> int:
    """Parse a base-10 integer with an optional sign. No spaces or underscores."""
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def parse_float(text: str) -> float:
    """Parse a floating point literal, including ``inf`` and ``nan``."""
    if not _FLOAT_RE.fullmatch(text):
        raise ValueError(f"invalid float: {text!r}")
    return float(text)


def parse_bool(text: str) -> bool:
    """Parse the usual boolean spellings (``true``, ``F``, ``1``...)."""
    if text in _TRUE_LITERALS:
        return True
    if text in _FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean: {text!r}")


def parse_memory_size(text: str) -> ByteSize:
    """
    Parse a memory size such as ``4G``, ``1024M``, ``512MB`` or ``1.5 T``.

    Units are case-insensitive and binary. A bare number is a byte count.
    Fractional results are truncated to whole bytes.
    """
    match = _MEMORY_RE.fullmatch(text.strip().upper())
    if match is None:
        raise ValueError(f"invalid memory size format: {text!r}")
    number, unit = match.groups()
    size = float(number) * _MEMORY_MULTIPLIERS[unit]
    if not math.isfinite(size):
        raise ValueError(f"memory size out of range: {text!r}")
    return ByteSize(int(size))


def parse_cluster_duration(text: str) -> timedelta:
    """Parse a scheduler-style duration: ``HH:MM:SS`` or ``D-HH:MM:SS``."""
    text = text.strip()
    if ":" not in text:
        raise ValueError(f"invalid cluster duration: {text!r}")

    days = 0
    time_part = text
    if "-" in text:
        day_part, time_part = text.split("-", 1)
        days = parse_int(day_part)

    components = time_part.split(":")
    if len(components) != 3:
        raise ValueError(f"invalid time format: {time_part!r}")
    hours, minutes, seconds = (parse_int(c) for c in components)
    try:
        return timedelta(seconds=days * 86400 + hours * 3600 + minutes * 60 + seconds)
    except OverflowError as exc:
        raise ValueError(f"cluster duration out of range: {text!r}") from exc


def parse_duration(text: str) -> timedelta:
    """
    Parse a compact unit duration such as ``300ms``, ``1h30m`` or ``-1.5h``.

    Every number needs a unit except a bare ``0``. Precision is limited to
    microseconds.
    """
    rest = text
    sign = 1
    if rest and rest[0] in "+-":
        sign = -1 if rest[0] == "-" else 1
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ValueError(f"invalid duration: {text!r}")

    total_ns = 0.0
    pos = 0
    while pos < len(rest):
        match = _DURATION_PART_RE.match(rest, pos)
        if match is None or match.group(1) in ("", "."):
            raise ValueError(f"invalid duration: {text!r}")
        total_ns += float(match.group(1)) * _DURATION_UNITS_NS[match.group(2)]
        pos = match.end()
    try:
        return timedelta(microseconds=sign * total_ns / 1000)
    except OverflowError as exc:
        raise ValueError(f"duration out of range: {text!r}") from exc


# =============================================================================
# Coercion cascade
# =============================================================================

_COERCERS: tuple[tuple[ValueKind, Callable[[str], Scalar]], ...] = (
    (ValueKind.INTEGER, parse_int),
    (ValueKind.FLOAT, parse_float),
    (ValueKind.BOOLEAN, parse_bool),
    (ValueKind.MEMORY, parse_memory_size),
    (ValueKind.CLUSTER_DURATION, parse_cluster_duration),
    (ValueKind.DURATION, parse_duration),
)


def coerce_value(text: str) -> Coercion:
    """
    Convert clause text into a typed scalar.

    Never raises: text that matches no typed interpretation comes back as a
    ``ValueKind.STRING`` coercion holding the text unchanged.
    """
    for kind, parser in _COERCERS:
        try:
            return Coercion(kind=kind, value=parser(text), raw=text)
        except ValueError:
            continue
    return Coercion(kind=ValueKind.STRING, value=text, raw=text)


# =============================================================================
# Canonical text and comparison views
# =============================================================================


def format_cluster_duration(value: timedelta) -> str:
    """Render a duration as ``H:MM:SS`` or ``D-HH:MM:SS``."""
    total_us = (value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds
    sign = "-" if total_us < 0 else ""
    total_seconds, micros = divmod(abs(total_us), 1_000_000)
    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)
    if days:
        text = f"{days}-{hours:02d}:{minutes:02d}:{seconds:02d}"
    else:
        text = f"{hours}:{minutes:02d}:{seconds:02d}"
    if micros:
        text += f".{micros:06d}"
    return sign + text


def to_display(value: Any) -> str:
    """
    Canonical text form used for equality, substring, regex and list checks.

    Booleans render lower-case, integral floats drop their ``.0`` and
    durations use the cluster ``[D-]H:MM:SS`` form.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, timedelta):
        return format_cluster_duration(value)
    return str(value)


def as_byte_count(value: Any) -> int | None:
    """Read a value as a byte count, or None when it is not a memory size."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return int(value)
    try:
        return int(parse_memory_size(to_display(value)))
    except ValueError:
        return None


def as_duration(value: Any) -> timedelta | None:
    """Read a value as a duration (cluster style first), or None."""
    if isinstance(value, timedelta):
        return value
    text = to_display(value)
    for parser in (parse_cluster_duration, parse_duration):
        try:
            return parser(text)
        except ValueError:
            continue
    return None


def as_number(value: Any) -> float | None:
    """Read a value as a float, or None. Booleans are not numbers here."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return parse_float(value)
        except ValueError:
            return None
    return None


__all__ = [
    "ByteSize",
    "Coercion",
    "Scalar",
    "ValueKind",
    "as_byte_count",
    "as_duration",
    "as_number",
    "coerce_value",
    "format_cluster_duration",
    "parse_bool",
    "parse_cluster_duration",
    "parse_duration",
    "parse_float",
    "parse_int",
    "parse_memory_size",
    "to_display",
]
