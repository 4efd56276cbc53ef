"""Leaf operator handlers.

Each handler maps a document value and a leaf to a raw, unweighted Result
whose score lies in [0, 1]. Messy data (missing fields, wrong types,
unparsable values) scores 0. A malformed leaf raises a QueryError.
"""

from __future__ import annotations

import math
import operator as op
import re
from collections.abc import Callable
from typing import Any

from match_engine.config.constants import REGEX_MATCH_GROUP
from match_engine.exceptions import IncomparableValuesError, InvalidOperatorError
from match_engine.models.domain import MISSING, Leaf, Operator, Result
from match_engine.scoring import geo, temporal
from match_engine.scoring.access import is_absent
from match_engine.scoring.similarity import string_sim

LeafHandler = Callable[[Any, Leaf], Result]


def log_score(value: float, max_value: float) -> float:
    """Log-scaled proximity: 1 at zero distance, decaying to 0 (never below)."""
    if value == 0:
        return 1.0
    if max_value <= 0:
        return 0.0
    return max(1.0 - math.log1p(value) / math.log1p(max_value), 0.0)


def truth_score(flag: bool) -> float:
    return 1.0 if flag else 0.0


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _invalid(leaf: Leaf, reason: str) -> InvalidOperatorError:
    op_token = getattr(leaf.operator, "value", leaf.operator)
    return InvalidOperatorError(
        f"Unexpected operator {'.'.join(map(str, leaf.field))!r}, or invalid arguments "
        f"for operator {op_token}: {reason}",
        field=leaf.field,
        operator=op_token,
    )


def same_value(a: Any, b: Any) -> bool:
    """Equality that also requires matching types, so True != 1 and 1.0 != 1."""
    return type(a) is type(b) and a == b


def _contains(items: Any, needle: Any) -> bool:
    return any(same_value(item, needle) for item in items)


def _list_difference(items: list, remove: list) -> list:
    """Multiset difference: each element of ``remove`` drops one occurrence."""
    remaining = list(items)
    for item in remove:
        for i, candidate in enumerate(remaining):
            if same_value(candidate, item):
                del remaining[i]
                break
    return remaining


def score_eq(value: Any, leaf: Leaf) -> Result:
    expected = leaf.operand
    if value is MISSING:
        return Result(0.0)
    if _is_sequence(value):
        if _is_sequence(expected):
            if not value:
                return Result(truth_score(not expected))
            if not expected:
                return Result(0.0)
            leftover = _list_difference(list(value), list(expected))
            return Result(1.0 - len(leftover) / max(len(expected), len(value)))
        if not value:
            return Result(0.0)
        return Result(truth_score(_contains(value, expected)))
    return Result(truth_score(same_value(value, expected)))


def score_in(value: Any, leaf: Leaf) -> Result:
    if not _is_sequence(leaf.operand):
        raise _invalid(leaf, "operand must be a list")
    if value is MISSING:
        return Result(0.0)
    return Result(truth_score(_contains(leaf.operand, value)))


_COMPARATORS: dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.LT: op.lt,
    Operator.LTE: op.le,
    Operator.GT: op.gt,
    Operator.GTE: op.ge,
}


def score_compare(value: Any, leaf: Leaf) -> Result:
    if is_absent(value):
        return Result(0.0)
    comparator = _COMPARATORS[leaf.operator]
    try:
        outcome = comparator(value, leaf.operand)
    except TypeError as exc:
        raise IncomparableValuesError(
            f"Cannot compare field {'.'.join(map(str, leaf.field))!r} value {value!r} "
            f"with {leaf.operand!r} using {leaf.operator.value}",
            field=leaf.field,
            operator=leaf.operator.value,
        ) from exc
    return Result(truth_score(bool(outcome)))


def score_regex(value: Any, leaf: Leaf) -> Result:
    pattern = leaf.operand
    if not isinstance(pattern, re.Pattern) or REGEX_MATCH_GROUP not in pattern.groupindex:
        raise _invalid(leaf, f"operand must be a compiled pattern with a '{REGEX_MATCH_GROUP}' group")
    if is_absent(value):
        value = ""
    if not isinstance(value, str):
        return Result(0.0)

    found = pattern.search(value)
    if found is None:
        return Result(0.0)
    matched = found.group(REGEX_MATCH_GROUP)
    if not matched:
        return Result(0.0)

    captures = {
        name: text
        for name, text in found.groupdict().items()
        if name != REGEX_MATCH_GROUP and text is not None
    }
    return Result(len(matched) / len(value), captures)


def score_regex_inverse(value: Any, leaf: Leaf) -> Result:
    subject = leaf.operand
    if not isinstance(subject, str):
        raise _invalid(leaf, "inverse regex operand must be a string")
    if is_absent(value):
        value = ""
    if not isinstance(value, str):
        return Result(0.0)
    try:
        pattern = re.compile(value, re.IGNORECASE)
    except re.error:
        return Result(0.0)

    found = pattern.search(subject)
    if found is None or not found.group(0):
        return Result(0.0)
    return Result(len(found.group(0)) / len(subject))


def score_sim(value: Any, leaf: Leaf) -> Result:
    expected = leaf.operand
    if not isinstance(expected, str):
        raise _invalid(leaf, "operand must be a string")
    if _is_sequence(value):
        best = 0.0
        for item in value:
            if isinstance(item, str):
                best = max(string_sim(item, expected), best)
        return Result(best)
    if isinstance(value, str):
        return Result(string_sim(value, expected))
    return Result(0.0)


def score_geo(value: Any, leaf: Leaf) -> Result:
    if is_absent(value):
        return Result(0.0)
    target = geo.coerce_location(leaf.operand)
    actual = geo.coerce_location(value)
    if target is None or actual is None:
        return Result(0.0)
    meters = geo.distance(target, actual)
    return Result(log_score(meters, leaf.modifiers.max_distance), {"distance": meters})


def score_time(value: Any, leaf: Leaf) -> Result:
    target = temporal.parse_time(leaf.operand)
    actual = temporal.parse_time(value)
    if target is None or actual is None:
        return Result(0.0)
    delta = temporal.seconds_between(target, actual)
    return Result(log_score(delta, leaf.modifiers.max_time))


LEAF_HANDLERS: dict[Operator, LeafHandler] = {
    Operator.EQ: score_eq,
    Operator.IN: score_in,
    Operator.LT: score_compare,
    Operator.LTE: score_compare,
    Operator.GT: score_compare,
    Operator.GTE: score_compare,
    Operator.REGEX: score_regex,
    Operator.REGEX_INVERSE: score_regex_inverse,
    Operator.SIM: score_sim,
    Operator.GEO: score_geo,
    Operator.TIME: score_time,
}
