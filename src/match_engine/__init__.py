"""Score structured documents against declarative boolean queries."""

from match_engine.batch import filter_all, rank_all, score_all
from match_engine.exceptions import (
    IncomparableValuesError,
    InvalidOperatorError,
    MatchEngineError,
    QueryError,
    UnexpectedOperatorError,
)
from match_engine.models.domain import (
    MISSING,
    Combinator,
    CombinatorKind,
    Leaf,
    Modifiers,
    Operator,
    Result,
)
from match_engine.query.normalizer import normalize_query
from match_engine.scoring.evaluator import evaluate, filter_score, match_score

__version__ = "1.0.0"

__all__ = [
    "MISSING",
    "Combinator",
    "CombinatorKind",
    "IncomparableValuesError",
    "InvalidOperatorError",
    "Leaf",
    "MatchEngineError",
    "Modifiers",
    "Operator",
    "QueryError",
    "Result",
    "UnexpectedOperatorError",
    "evaluate",
    "filter_all",
    "filter_score",
    "match_score",
    "normalize_query",
    "rank_all",
    "score_all",
]
