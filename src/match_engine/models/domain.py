"""Core domain objects: query-tree nodes and evaluation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from match_engine.config.constants import (
    DEFAULT_MAX_DISTANCE_M,
    DEFAULT_MAX_TIME_S,
    DEFAULT_WEIGHT,
)


class _Missing:
    """Sentinel for a field path that does not resolve in a document."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class CombinatorKind(str, Enum):
    AND = "_and"
    OR = "_or"
    NOT = "_not"


class Operator(str, Enum):
    EQ = "_eq"
    NE = "_ne"
    IN = "_in"
    NIN = "_nin"
    LT = "_lt"
    LTE = "_lte"
    GT = "_gt"
    GTE = "_gte"
    REGEX = "_regex"
    REGEX_INVERSE = "_regex_inverse"
    SIM = "_sim"
    GEO = "_geo"
    TIME = "_time"


@dataclass(frozen=True)
class Modifiers:
    weight: float = DEFAULT_WEIGHT
    binary: bool = False
    max_distance: float = DEFAULT_MAX_DISTANCE_M
    max_time: float = DEFAULT_MAX_TIME_S
    inverse: bool = False


@dataclass(frozen=True)
class Leaf:
    """A single field/operator/operand predicate.

    ``operator`` is normally an ``Operator``; a raw token string is kept when
    the query carried something the engine does not recognize, so that the
    evaluator can reject it with the offending field attached.
    """

    field: tuple[str, ...]
    operator: Operator | str
    operand: Any
    modifiers: Modifiers = field(default_factory=Modifiers)


@dataclass(frozen=True)
class Combinator:
    kind: CombinatorKind
    children: tuple[Node, ...] = ()


Node = Union[Combinator, Leaf]


@dataclass
class Result:
    score: float
    auxiliary: dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        """Flatten into the ``{"score": ..., **auxiliary}`` match record."""
        return {**self.auxiliary, "score": self.score}
