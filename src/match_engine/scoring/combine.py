"""Weighting and combination of leaf results.

AND multiplies, OR adds, NOT sums the inversions of its children. Auxiliary
data merges left to right with the first-seen value of a key winning.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable

from match_engine.models.domain import CombinatorKind, Modifiers, Result

Reducer = Callable[[float, float], float]


def weigh(score: float, modifiers: Modifiers) -> float:
    """Apply the binary clamp and weight. Zero is absorbing."""
    if score == 0:
        return 0.0
    if modifiers.binary and score > 0:
        score = 1.0
    # Weights above 1 act as a boost; the result is intentionally not clamped
    return score * modifiers.weight


def invert(result: Result) -> Result:
    """NOT for a single result: any positive score counts as matched."""
    return Result(1.0 if result.score == 0 else 0.0, dict(result.auxiliary))


def merge(current: Result, accumulated: Result, reducer: Reducer) -> Result:
    auxiliary = dict(current.auxiliary)
    auxiliary.update(accumulated.auxiliary)
    return Result(reducer(current.score, accumulated.score), auxiliary)


def combine(results: Iterable[Result], identity: float, reducer: Reducer) -> Result:
    accumulated = Result(identity)
    for result in results:
        accumulated = merge(result, accumulated, reducer)
    return accumulated


def combine_and(results: Iterable[Result]) -> Result:
    return combine(results, 1.0, operator.mul)


def combine_or(results: Iterable[Result]) -> Result:
    return combine(results, 0.0, operator.add)


def combine_not(results: Iterable[Result]) -> Result:
    return combine_or(invert(result) for result in results)


COMBINERS: dict[CombinatorKind, Callable[[Iterable[Result]], Result]] = {
    CombinatorKind.AND: combine_and,
    CombinatorKind.OR: combine_or,
    CombinatorKind.NOT: combine_not,
}
