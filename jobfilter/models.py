"""Parsed filter structures."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any

from .evaluator import (
    Record,
    RecordPredicate,
    compile_filter,
    evaluate_expression,
    evaluate_filter,
)
from .operators import FilterOperator
from .values import Scalar, ValueKind, to_display

ExpressionValue = Scalar | tuple[str, ...]


@dataclass(frozen=True)
class FilterExpression:
    """A single ``field operator value`` clause."""

    field: str
    operator: FilterOperator
    value: ExpressionValue
    kind: ValueKind = ValueKind.STRING

    def evaluate(self, record: Record) -> bool:
        return evaluate_expression(self, record)

    def to_string(self) -> str:
        if isinstance(self.value, tuple):
            return f"{self.field} {self.operator.value} ({','.join(self.value)})"
        return f"{self.field}{self.operator.value}{to_display(self.value)}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterExpression):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> tuple[Any, ...]:
        # NaN never equals itself; give it a stable stand-in.
        value: Any = self.value
        if isinstance(value, float) and math.isnan(value):
            value = ("nan",)
        return (self.field, self.operator, value, self.kind)

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class Filter:
    """
    An ordered list of clauses joined by one logic, ``AND`` or ``OR``.

    Mixed AND/OR is not expressible. Any ``logic`` other than ``"OR"`` is
    treated as ``AND``.
    """

    expressions: tuple[FilterExpression, ...] = ()
    logic: str = "AND"
    name: str | None = None
    description: str | None = None

    def evaluate(self, record: Record) -> bool:
        """True if the record matches. An empty filter matches everything."""
        return evaluate_filter(self, record)

    def compile(self) -> RecordPredicate:
        """Return an equivalent predicate with regex patterns pre-compiled."""
        return compile_filter(self)

    def with_logic(self, logic: str) -> Filter:
        return replace(self, logic=logic)

    @property
    def is_empty(self) -> bool:
        return not self.expressions

    def to_string(self) -> str:
        return " ".join(expr.to_string() for expr in self.expressions)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly description, used by the CLI."""
        return {
            "name": self.name,
            "description": self.description,
            "logic": self.logic,
            "expressions": [
                {
                    "field": expr.field,
                    "operator": expr.operator.value,
                    "value": list(expr.value)
                    if isinstance(expr.value, tuple)
                    else _json_value(expr.value),
                    "kind": expr.kind.value,
                }
                for expr in self.expressions
            ],
        }

    def __str__(self) -> str:
        return self.to_string()


def _json_value(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        # inf and nan have no JSON literal
        return to_display(value)
    if isinstance(value, (bool, float, str)):
        return value
    if isinstance(value, int):
        # ByteSize -> plain int
        return int(value)
    return to_display(value)
