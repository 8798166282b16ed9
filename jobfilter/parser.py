"""
Filter string parser.

Turns text such as ``state=running memory>4G user in (alice,bob)`` into a
``Filter``. Each space separated clause holds one operator::

    name=test           equals              name!=test      not equals
    name~test           contains            name!~test      not contains
    cpus>4  cpus<4      greater / less      cpus>=4 cpus<=4 or-equal
    name=~^test.*$      regex               state in (a,b)  state not in (a,b)

Example:
    from jobfilter import parse

    flt = parse("state=running memory>4G")
    flt.evaluate({"State": "running", "Memory": "8G"})  # True
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from .config import ParserConfig
from .exceptions import InvalidListExpressionError, NoOperatorError, UnparseableClauseError
from .fields import normalize_field
from .models import Filter, FilterExpression
from .operators import IN_TOKEN, NOT_IN_TOKEN, SYMBOLIC_OPERATORS, FilterOperator
from .splitter import smart_split
from .values import ValueKind, coerce_value

logger = logging.getLogger(__name__)


def _strip_matching_quotes(text: str) -> str:
    """Remove one layer of matching surrounding quotes."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]
    return text


class FilterParser:
    """Parses filter strings using a fixed field alias table."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        self._config = config or ParserConfig()
        self._aliases: Mapping[str, str] = MappingProxyType(dict(self._config.field_aliases))

    @property
    def config(self) -> ParserConfig:
        return self._config

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def normalize_field(self, field: str) -> str:
        return normalize_field(field, self._aliases)

    def parse(
        self,
        filter_string: str,
        *,
        logic: str = "AND",
        name: str | None = None,
        description: str | None = None,
    ) -> Filter:
        """
        Parse a whole filter string.

        Empty or blank input gives an empty filter, which matches everything.

        Raises:
            FilterParseError: If any clause is invalid. No partial filter is
                returned.
        """
        expressions = tuple(self.parse_expression(clause) for clause in smart_split(filter_string))
        logger.debug(f"Parsed filter {filter_string!r} into {len(expressions)} expression(s)")
        return Filter(expressions=expressions, logic=logic, name=name, description=description)

    def parse_expression(self, clause: str) -> FilterExpression:
        """
        Parse one clause.

        Raises:
            NoOperatorError: If the clause has no recognised operator.
            InvalidListExpressionError: If an in / not in clause lacks a side.
            UnparseableClauseError: If the clause is blank.
        """
        if not clause.strip():
            raise UnparseableClauseError("empty clause", clause=clause)

        # " not in " contains " in ", so it is checked first.
        if NOT_IN_TOKEN in clause:
            return self._parse_list_expression(clause, NOT_IN_TOKEN, FilterOperator.NOT_IN)
        if IN_TOKEN in clause:
            return self._parse_list_expression(clause, IN_TOKEN, FilterOperator.IN)

        for operator in SYMBOLIC_OPERATORS:
            idx = clause.find(operator.value)
            if idx > 0:
                field = self.normalize_field(clause[:idx].strip())
                raw = _strip_matching_quotes(clause[idx + len(operator.value) :].strip())
                coercion = coerce_value(raw)
                return FilterExpression(
                    field=field,
                    operator=operator,
                    value=coercion.value,
                    kind=coercion.kind,
                )

        raise NoOperatorError("no valid operator found", clause=clause)

    def _parse_list_expression(
        self, clause: str, token: str, operator: FilterOperator
    ) -> FilterExpression:
        left, right = clause.split(token, 1)
        left = left.strip()
        right = right.strip()
        if not left or not right:
            raise InvalidListExpressionError(
                f"invalid '{operator.value}' expression", clause=clause
            )

        values = tuple(item.strip() for item in right.strip("()").split(","))
        return FilterExpression(
            field=self.normalize_field(left),
            operator=operator,
            value=values,
            kind=ValueKind.STRING_LIST,
        )


_default_parser = FilterParser()


def parse(
    filter_string: str,
    *,
    logic: str = "AND",
    name: str | None = None,
    description: str | None = None,
) -> Filter:
    """
    Parse a filter string with the default alias table.

    Examples:
        >>> parse("state=running").evaluate({"State": "running"})
        True

        >>> parse("memory>4G").evaluate({"Memory": "2G"})
        False

        >>> parse("state not in (running,pending)").evaluate({"State": "failed"})
        True
    """
    return _default_parser.parse(filter_string, logic=logic, name=name, description=description)
