"""Translate raw declarative queries into query trees.

Two surface syntaxes are accepted::

    {"title": "Amsterdam", "population": {"_gte": 100000, "w": 2}}
    [("title", "Amsterdam"), ("population", [("_gte", 100000), ("w", 2)])]

Both produce a list of top-level parts; callers decide whether those parts
are AND-ed (filtering) or OR-ed (scoring).
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from match_engine.config.constants import (
    COMBINATOR_TOKENS,
    LEAF_OPERATOR_TOKENS,
    OPERATOR_PREFIX,
    REGEX_MATCH_GROUP,
)
from match_engine.config.settings import Settings
from match_engine.exceptions import QueryError
from match_engine.models.domain import (
    Combinator,
    CombinatorKind,
    Leaf,
    Modifiers,
    Node,
    Operator,
)
from match_engine.models.schemas import ModifierSpec
from match_engine.observability.logger import get_logger

logger = get_logger("normalizer")


def _is_token(key: Any) -> bool:
    return isinstance(key, str) and key.startswith(OPERATOR_PREFIX)


def _split_path(field: Any) -> tuple[str, ...]:
    if isinstance(field, str):
        return tuple(part for part in field.split(".") if part)
    if isinstance(field, (list, tuple)) and all(isinstance(k, str) for k in field):
        return tuple(field)
    raise QueryError(f"Invalid field reference: {field!r}", field=field)


def compile_regex(pattern: Any, field: tuple[str, ...] = ()) -> re.Pattern:
    """Compile a pattern so that it exposes the ``match`` capture group."""
    if isinstance(pattern, str):
        try:
            pattern = re.compile(pattern)
        except re.error as exc:
            raise QueryError(f"Invalid regex {pattern!r}: {exc}", field=field, operator="_regex") from exc
    elif not isinstance(pattern, re.Pattern):
        raise QueryError(f"Invalid regex operand: {pattern!r}", field=field, operator="_regex")
    if REGEX_MATCH_GROUP in pattern.groupindex:
        return pattern
    source, flags = pattern.pattern, pattern.flags
    try:
        return re.compile(f"(?P<{REGEX_MATCH_GROUP}>{source})", flags)
    except re.error as exc:
        raise QueryError(f"Invalid regex {source!r}: {exc}", field=field, operator="_regex") from exc


class QueryNormalizer:
    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()

    def normalize(self, query: Any) -> list[Node]:
        if isinstance(query, (Combinator, Leaf)):
            return [query]
        if isinstance(query, Mapping):
            parts = self._from_mapping(query, ())
        elif isinstance(query, (list, tuple)):
            parts = self._from_sequence(query)
        else:
            raise QueryError(f"Query must be a mapping or a list, got {type(query).__name__}")
        logger.debug("query_normalized", parts=len(parts))
        return parts

    def _subquery(self, query: Any) -> Node:
        parts = self.normalize(query)
        if len(parts) == 1:
            return parts[0]
        return Combinator(CombinatorKind.AND, tuple(parts))

    def _combinator(self, token: str, value: Any) -> Combinator:
        if not isinstance(value, (list, tuple)):
            raise QueryError(
                f"Combinator {token} takes a list of sub-queries, got {value!r}", operator=token
            )
        return Combinator(CombinatorKind(token), tuple(self._subquery(q) for q in value))

    def _from_mapping(self, query: Mapping, prefix: tuple[str, ...]) -> list[Node]:
        parts: list[Node] = []
        for key, spec in query.items():
            if not prefix and key in COMBINATOR_TOKENS:
                parts.append(self._combinator(key, spec))
                continue
            path = prefix + _split_path(key)
            if isinstance(spec, Mapping) and spec and not any(_is_token(k) for k in spec):
                parts.extend(self._from_mapping(spec, path))
            else:
                parts.extend(self._leaves(path, spec))
        return parts

    def _from_sequence(self, query: Sequence) -> list[Node]:
        parts: list[Node] = []
        for item in query:
            if isinstance(item, (Combinator, Leaf)):
                parts.append(item)
            elif isinstance(item, Mapping):
                parts.extend(self._from_mapping(item, ()))
            elif isinstance(item, (list, tuple)) and len(item) == 2:
                key, spec = item
                if isinstance(key, str) and key in COMBINATOR_TOKENS:
                    parts.append(self._combinator(key, spec))
                else:
                    parts.extend(self._leaves(_split_path(key), spec))
            else:
                raise QueryError(f"Expected a (field, spec) pair, got {item!r}")
        return parts

    def _leaves(self, path: tuple[str, ...], spec: Any) -> list[Leaf]:
        if isinstance(spec, Mapping) and spec:
            pairs = list(spec.items())
        elif (
            isinstance(spec, (list, tuple))
            and spec
            and all(isinstance(p, (list, tuple)) and len(p) == 2 and isinstance(p[0], str) for p in spec)
            and any(_is_token(p[0]) for p in spec)
        ):
            pairs = [tuple(p) for p in spec]
        else:
            pairs = [(Operator.EQ.value, spec)]

        operators = [(token, value) for token, value in pairs if _is_token(token)]
        if not operators:
            raise QueryError(f"No operator given for field {'.'.join(path)!r}", field=path)
        modifiers = self._modifiers(path, {k: v for k, v in pairs if not _is_token(k)})
        return [self._leaf(path, token, value, modifiers) for token, value in operators]

    def _modifiers(self, path: tuple[str, ...], raw: dict[str, Any]) -> Modifiers:
        try:
            spec = ModifierSpec.model_validate(raw)
        except ValidationError as exc:
            raise QueryError(f"Invalid modifiers for field {'.'.join(path)!r}: {exc}", field=path) from exc
        return Modifiers(
            weight=spec.weight,
            binary=spec.binary,
            max_distance=spec.max_distance or self._settings.default_max_distance,
            max_time=spec.max_time or self._settings.default_max_time,
            inverse=spec.inverse,
        )

    def _leaf(self, path: tuple[str, ...], token: str, value: Any, modifiers: Modifiers) -> Leaf:
        # Unknown tokens are kept verbatim; the evaluator rejects them with the field attached
        operator: Operator | str = Operator(token) if token in LEAF_OPERATOR_TOKENS else token
        if operator is Operator.REGEX and not modifiers.inverse:
            value = compile_regex(value, path)
        return Leaf(field=path, operator=operator, operand=value, modifiers=modifiers)


def normalize_query(query: Any, settings: Settings | None = None) -> list[Node]:
    return QueryNormalizer(settings).normalize(query)
