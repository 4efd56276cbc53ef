"""Recursive query-tree evaluation against a single document."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from match_engine.config.constants import COMBINATOR_TOKENS, LEAF_OPERATOR_TOKENS
from match_engine.exceptions import InvalidOperatorError, QueryError, UnexpectedOperatorError
from match_engine.models.domain import (
    Combinator,
    CombinatorKind,
    Leaf,
    Node,
    Operator,
    Result,
)
from match_engine.scoring.access import get_value
from match_engine.scoring.combine import COMBINERS, weigh
from match_engine.scoring.operators import LEAF_HANDLERS

# Negated operators are rewritten to NOT over their positive counterpart
_NEGATIONS = {Operator.NE: Operator.EQ, Operator.NIN: Operator.IN}


def _resolve_operator(leaf: Leaf) -> Operator:
    token = leaf.operator
    if isinstance(token, Operator):
        resolved = token
    elif token in COMBINATOR_TOKENS:
        raise UnexpectedOperatorError(
            f"Unexpected operator: {token}", field=leaf.field, operator=token
        )
    elif token in LEAF_OPERATOR_TOKENS:
        resolved = Operator(token)
    else:
        raise InvalidOperatorError(
            f"Unexpected operator {'.'.join(map(str, leaf.field))!r}, "
            f"or invalid arguments for operator {token}",
            field=leaf.field,
            operator=token,
        )

    if resolved is Operator.REGEX and leaf.modifiers.inverse:
        return Operator.REGEX_INVERSE
    return resolved


def _evaluate_leaf(leaf: Leaf, document: Any) -> Result:
    operator = _resolve_operator(leaf)

    if operator in _NEGATIONS:
        positive = replace(leaf, operator=_NEGATIONS[operator])
        return evaluate(Combinator(CombinatorKind.NOT, (positive,)), document)

    if operator is not leaf.operator:
        leaf = replace(leaf, operator=operator)

    raw = LEAF_HANDLERS[operator](get_value(document, leaf.field), leaf)
    return Result(weigh(raw.score, leaf.modifiers), raw.auxiliary)


def evaluate(node: Node, document: Any) -> Result:
    """Score ``document`` against a query-tree node.

    Raises a QueryError subclass for malformed trees; data problems in the
    document only ever lower the score.
    """
    if isinstance(node, Combinator):
        combiner = COMBINERS.get(node.kind)
        if combiner is None:
            raise QueryError(f"Unknown combinator: {node.kind!r}")
        return combiner([evaluate(child, document) for child in node.children])
    if isinstance(node, Leaf):
        return _evaluate_leaf(node, document)
    raise QueryError(f"Not a query node: {node!r}")


def filter_score(parts: Sequence[Node], document: Mapping[str, Any]) -> Result:
    """Implicit AND over the top-level parts. An empty filter matches nothing."""
    if not parts:
        return Result(0.0)
    return evaluate(Combinator(CombinatorKind.AND, tuple(parts)), document)


def match_score(parts: Sequence[Node], document: Mapping[str, Any]) -> Result:
    """Implicit OR over the top-level parts."""
    return evaluate(Combinator(CombinatorKind.OR, tuple(parts)), document)
