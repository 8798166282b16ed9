"""
Exception hierarchy for the jobfilter package.

Only parsing raises. Evaluation degrades to ``False`` instead of raising, so
callers filtering table rows never need a try/except around ``evaluate()``.
"""

from __future__ import annotations


class JobFilterError(Exception):
    """Base class for all jobfilter errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class FilterParseError(JobFilterError):
    """
    A filter string (or one of its clauses) could not be parsed.

    The offending clause text is kept on ``clause`` and included in ``str()``.
    """

    def __init__(self, message: str, *, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause

    def __str__(self) -> str:
        if self.clause is None:
            return self.message
        return f"invalid filter expression '{self.clause}': {self.message}"


class NoOperatorError(FilterParseError):
    """No recognised operator in a clause."""


class InvalidListExpressionError(FilterParseError):
    """An ``in`` / ``not in`` clause is missing its field or its value list."""


class UnparseableClauseError(FilterParseError):
    """A clause is empty or otherwise unusable."""


class DateRangeError(JobFilterError):
    """A date or date range expression was not recognised."""


class ConfigError(JobFilterError):
    """A configuration file could not be read or validated."""


__all__ = [
    "ConfigError",
    "DateRangeError",
    "FilterParseError",
    "InvalidListExpressionError",
    "JobFilterError",
    "NoOperatorError",
    "UnparseableClauseError",
]
