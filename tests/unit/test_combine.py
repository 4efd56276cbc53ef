"""Tests for weighting and combination of results."""

import pytest

from match_engine.models.domain import Modifiers, Result
from match_engine.scoring.combine import (
    combine_and,
    combine_not,
    combine_or,
    invert,
    weigh,
)


def test_weigh_zero_is_absorbing():
    assert weigh(0, Modifiers(weight=5, binary=True)) == 0


def test_weigh_binary_forces_one():
    assert weigh(0.25, Modifiers(binary=True)) == 1.0


def test_weigh_multiplies_without_clamping():
    assert weigh(0.4, Modifiers(weight=2)) == pytest.approx(0.8)
    assert weigh(0.9, Modifiers(weight=3)) == pytest.approx(2.7)


def test_binary_then_weight():
    assert weigh(0.1, Modifiers(weight=2, binary=True)) == 2.0


def test_empty_identities():
    assert combine_and([]).score == 1
    assert combine_or([]).score == 0
    assert combine_not([]).score == 0


def test_and_multiplies():
    assert combine_and([Result(0.5), Result(0.5)]).score == pytest.approx(0.25)
    assert combine_and([Result(1), Result(0)]).score == 0


def test_or_sums():
    assert combine_or([Result(0.5), Result(0.75)]).score == pytest.approx(1.25)


def test_invert_keeps_auxiliary():
    inverted = invert(Result(0.3, {"distance": 12.0}))
    assert inverted.score == 0
    assert inverted.auxiliary == {"distance": 12.0}
    assert invert(Result(0)).score == 1


def test_not_sums_inversions():
    assert combine_not([Result(0), Result(0.3)]).score == 1
    # OR-of-negations, not a logical complement
    assert combine_not([Result(0), Result(0)]).score == 2


def test_first_seen_auxiliary_value_wins():
    merged = combine_or([Result(1, {"a": 1}), Result(0.5, {"a": 2, "b": 3})])
    assert merged.score == pytest.approx(1.5)
    assert merged.auxiliary == {"a": 1, "b": 3}


def test_combine_does_not_mutate_inputs():
    first = Result(1, {"a": 1})
    second = Result(1, {"b": 2})
    combine_and([first, second])
    assert first.auxiliary == {"a": 1}
    assert second.auxiliary == {"b": 2}
