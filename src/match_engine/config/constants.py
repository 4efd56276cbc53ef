"""Query language tokens and scoring defaults."""

from __future__ import annotations

# Combinator tokens; these take a sequence of sub-queries, never a single value
COMBINATOR_TOKENS = frozenset({"_and", "_or", "_not"})

LEAF_OPERATOR_TOKENS = frozenset(
    {
        "_eq",
        "_ne",
        "_in",
        "_nin",
        "_lt",
        "_lte",
        "_gt",
        "_gte",
        "_regex",
        "_sim",
        "_geo",
        "_time",
    }
)

OPERATOR_PREFIX = "_"

# Scoring defaults
DEFAULT_WEIGHT = 1.0
DEFAULT_MAX_DISTANCE_M = 100 * 1000.0
DEFAULT_MAX_TIME_S = 24 * 3600.0

# Name of the capture group whose length drives the regex score
REGEX_MATCH_GROUP = "match"

EARTH_RADIUS_M = 6_371_000.0

DEFAULT_MATCH_KEY = "_match"
