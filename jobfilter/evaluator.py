"""
Filter evaluation against records.

A record is any mapping of field name to value; the caller decides which
fields exist and how domain objects are flattened into it.

Evaluation never raises. A missing field, an invalid regex or a value list of
the wrong type all turn into ``False`` (or ``True`` through negation).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from .operators import FilterOperator
from .values import as_byte_count, as_duration, as_number, to_display

if TYPE_CHECKING:
    from .models import Filter, FilterExpression

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]
RecordPredicate = Callable[[Record], bool]
OperatorFunc = Callable[[Any, Any], bool]

T = TypeVar("T")

# =============================================================================
# Comparators
# =============================================================================


def _equals(a: Any, b: Any) -> bool:
    return to_display(a) == to_display(b)


def _contains(a: Any, b: Any) -> bool:
    """Case-insensitive substring test."""
    return to_display(b).lower() in to_display(a).lower()


def _ordered(a: Any, b: Any, op: Callable[[Any, Any], bool]) -> bool:
    """
    Compare using the first interpretation both sides support.

    Memory sizes, then durations, then plain numbers, then text.
    """
    a_bytes = as_byte_count(a)
    if a_bytes is not None:
        b_bytes = as_byte_count(b)
        if b_bytes is not None:
            return op(a_bytes, b_bytes)

    a_duration = as_duration(a)
    if a_duration is not None:
        b_duration = as_duration(b)
        if b_duration is not None:
            return op(a_duration, b_duration)

    a_number = as_number(a)
    if a_number is not None:
        b_number = as_number(b)
        if b_number is not None:
            return op(a_number, b_number)

    return op(to_display(a), to_display(b))


def _greater(a: Any, b: Any) -> bool:
    return _ordered(a, b, lambda x, y: x > y)


def _less(a: Any, b: Any) -> bool:
    return _ordered(a, b, lambda x, y: x < y)


def _greater_equal(a: Any, b: Any) -> bool:
    # Composed from ">" and "="; not the negation of "<".
    return _greater(a, b) or _equals(a, b)


def _less_equal(a: Any, b: Any) -> bool:
    return _less(a, b) or _equals(a, b)


def _compile_pattern(pattern: Any) -> re.Pattern[str] | None:
    try:
        return re.compile(to_display(pattern))
    except re.error as exc:
        logger.debug(f"Ignoring invalid regex {pattern!r}: {exc}")
        return None


def _regex(a: Any, b: Any) -> bool:
    compiled = _compile_pattern(b)
    if compiled is None:
        return False
    return compiled.search(to_display(a)) is not None


def _is_string_list(value: Any) -> bool:
    return isinstance(value, (tuple, list)) and all(isinstance(item, str) for item in value)


def _in(a: Any, b: Any) -> bool:
    """Exact string membership. Anything but a list of strings never matches."""
    if not _is_string_list(b):
        return False
    return to_display(a) in b


# Operator registry
OPERATORS: dict[FilterOperator, OperatorFunc] = {
    FilterOperator.EQUALS: _equals,
    FilterOperator.NOT_EQUALS: lambda a, b: not _equals(a, b),
    FilterOperator.CONTAINS: _contains,
    FilterOperator.NOT_CONTAINS: lambda a, b: not _contains(a, b),
    FilterOperator.GREATER: _greater,
    FilterOperator.LESS: _less,
    FilterOperator.GREATER_EQUAL: _greater_equal,
    FilterOperator.LESS_EQUAL: _less_equal,
    FilterOperator.REGEX: _regex,
    FilterOperator.IN: _in,
    FilterOperator.NOT_IN: lambda a, b: not _in(a, b),
}


def evaluate_operator(operator: FilterOperator, value: Any, expected: Any) -> bool:
    """Apply ``operator`` to a record value and the clause value."""
    op_func = OPERATORS.get(operator)
    if op_func is None:
        return False
    return op_func(value, expected)


# =============================================================================
# Expression / filter evaluation
# =============================================================================


def evaluate_expression(expr: FilterExpression, record: Record) -> bool:
    """Evaluate one clause. A record without the field never matches."""
    if expr.field not in record:
        return False
    return evaluate_operator(expr.operator, record[expr.field], expr.value)


def evaluate_filter(flt: Filter, record: Record) -> bool:
    """Combine clause results with the filter's logic (``OR``, else ``AND``)."""
    if not flt.expressions:
        return True
    if flt.logic == "OR":
        return any(evaluate_expression(expr, record) for expr in flt.expressions)
    return all(evaluate_expression(expr, record) for expr in flt.expressions)


# =============================================================================
# Compilation
# =============================================================================


def _compile_expression(expr: FilterExpression) -> RecordPredicate:
    field = expr.field
    expected = expr.value

    if expr.operator is FilterOperator.REGEX:
        pattern = _compile_pattern(expected)
        if pattern is None:
            return lambda _: False

        def regex_func(record: Record) -> bool:
            if field not in record:
                return False
            return pattern.search(to_display(record[field])) is not None

        return regex_func

    op_func = OPERATORS[expr.operator]

    def filter_func(record: Record) -> bool:
        if field not in record:
            return False
        return op_func(record[field], expected)

    return filter_func


def compile_filter(flt: Filter) -> RecordPredicate:
    """
    Compile a filter into a record predicate.

    Results are identical to ``Filter.evaluate``; regex patterns are compiled
    once here instead of on every call, which matters when the same filter is
    run over many records.
    """
    if not flt.expressions:
        return lambda _: True

    predicates = [_compile_expression(expr) for expr in flt.expressions]
    if flt.logic == "OR":
        return lambda record: any(p(record) for p in predicates)
    return lambda record: all(p(record) for p in predicates)


def select(
    items: Iterable[T],
    flt: Filter | None,
    *,
    to_record: Callable[[T], Record] | None = None,
) -> list[T]:
    """
    Return the items whose record matches ``flt``, keeping their order.

    ``to_record`` flattens each item into a record; by default the items are
    records already. A missing or empty filter returns every item.
    """
    if flt is None or not flt.expressions:
        return list(items)

    predicate = compile_filter(flt)
    if to_record is None:
        return [item for item in items if predicate(item)]  # type: ignore[arg-type]
    return [item for item in items if predicate(to_record(item))]
