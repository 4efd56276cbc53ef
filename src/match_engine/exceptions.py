"""Custom exception hierarchy for the match engine."""

from __future__ import annotations


class MatchEngineError(Exception):
    """Base exception for all match engine errors."""


class QueryError(MatchEngineError):
    """Malformed query. Raised at evaluation time, never scored as zero."""

    def __init__(self, message: str, field: object = None, operator: object = None) -> None:
        super().__init__(message)
        self.field = field
        self.operator = operator


class UnexpectedOperatorError(QueryError):
    """A combinator token was used where a leaf operator was expected."""


class InvalidOperatorError(QueryError):
    """Unknown leaf operator, or an operand shape the operator cannot handle."""


class IncomparableValuesError(QueryError):
    """A comparison operator was applied to values that cannot be ordered."""
