"""
jobfilter: a small predicate language for filtering cluster jobs, nodes and
log lines.

Example:
    from jobfilter import FilterParser, parse

    flt = parse("state in (running,pending) memory>4G")
    rows = [job for job in jobs if flt.evaluate(job_to_record(job))]

    # Or, for many records, compile once
    matches = flt.compile()
"""

from __future__ import annotations

from .config import ParserConfig, load_config
from .dates import DateRange, parse_date_range
from .evaluator import compile_filter, evaluate_operator, select
from .exceptions import (
    ConfigError,
    DateRangeError,
    FilterParseError,
    InvalidListExpressionError,
    JobFilterError,
    NoOperatorError,
    UnparseableClauseError,
)
from .fields import DEFAULT_FIELD_ALIASES, normalize_field
from .models import Filter, FilterExpression
from .operators import FilterOperator
from .parser import FilterParser, parse
from .presets import DEFAULT_PRESETS, FilterPreset, presets_for
from .splitter import smart_split, split_respecting_quotes
from .values import ByteSize, Coercion, ValueKind, coerce_value

__version__ = "0.3.0"

__all__ = [
    "DEFAULT_FIELD_ALIASES",
    "DEFAULT_PRESETS",
    "ByteSize",
    "Coercion",
    "ConfigError",
    "DateRange",
    "DateRangeError",
    "Filter",
    "FilterExpression",
    "FilterOperator",
    "FilterParseError",
    "FilterParser",
    "FilterPreset",
    "InvalidListExpressionError",
    "JobFilterError",
    "NoOperatorError",
    "ParserConfig",
    "UnparseableClauseError",
    "ValueKind",
    "__version__",
    "coerce_value",
    "compile_filter",
    "evaluate_operator",
    "load_config",
    "normalize_field",
    "parse",
    "parse_date_range",
    "presets_for",
    "select",
    "smart_split",
    "split_respecting_quotes",
]
