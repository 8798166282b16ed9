"""Comparison operators understood by the filter language."""

from __future__ import annotations

from enum import Enum


class FilterOperator(Enum):
    """Closed set of clause operators. The value is the operator text."""

    EQUALS = "="
    NOT_EQUALS = "!="
    CONTAINS = "~"
    NOT_CONTAINS = "!~"
    GREATER = ">"
    LESS = "<"
    GREATER_EQUAL = ">="
    LESS_EQUAL = "<="
    REGEX = "=~"
    IN = "in"
    NOT_IN = "not in"

    @property
    def is_list(self) -> bool:
        return self in (FilterOperator.IN, FilterOperator.NOT_IN)

    def __str__(self) -> str:
        return self.value


# Detection order for the symbolic operators. Longer operators come before the
# shorter ones they contain (">=" before ">", "=~" before "=").
SYMBOLIC_OPERATORS: tuple[FilterOperator, ...] = (
    FilterOperator.NOT_EQUALS,
    FilterOperator.NOT_CONTAINS,
    FilterOperator.GREATER_EQUAL,
    FilterOperator.LESS_EQUAL,
    FilterOperator.REGEX,
    FilterOperator.EQUALS,
    FilterOperator.CONTAINS,
    FilterOperator.GREATER,
    FilterOperator.LESS,
)

# Padded keyword operators; "not in" must be looked for before "in".
NOT_IN_TOKEN = " not in "
IN_TOKEN = " in "
