"""Batch wrappers: evaluate one query against a collection of documents."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from match_engine.config.settings import Settings
from match_engine.exceptions import QueryError
from match_engine.models.domain import Node, Result
from match_engine.observability.logger import get_logger
from match_engine.query.normalizer import normalize_query
from match_engine.scoring.evaluator import filter_score, match_score

logger = get_logger("batch")

Scorer = Callable[[Sequence[Node], Mapping[str, Any]], Result]


def _annotate(document: Mapping[str, Any], result: Result, match_key: str) -> dict[str, Any]:
    return {**document, match_key: result.to_record()}


def _run(
    documents: Iterable[Mapping[str, Any]],
    query: Any,
    scorer: Scorer,
    settings: Settings,
) -> list[dict[str, Any]]:
    try:
        parts = normalize_query(query, settings)
        annotated = [
            _annotate(doc, scorer(parts, doc), settings.match_key) for doc in documents
        ]
    except QueryError as e:
        logger.error("invalid_query", error=str(e), field=e.field, operator=e.operator)
        raise
    return annotated


def score_all(
    documents: Iterable[Mapping[str, Any]],
    query: Any,
    settings: Settings | None = None,
) -> list[dict[str, Any]]:
    """Annotate every document with its match record, in input order."""
    settings = settings or Settings()
    scored = _run(documents, query, match_score, settings)
    logger.info("documents_scored", count=len(scored))
    return scored


def filter_all(
    documents: Iterable[Mapping[str, Any]],
    query: Any,
    settings: Settings | None = None,
) -> list[dict[str, Any]]:
    """Keep only documents scoring strictly above zero, in input order."""
    settings = settings or Settings()
    scored = _run(documents, query, filter_score, settings)
    matched = [doc for doc in scored if doc[settings.match_key]["score"] > 0]
    logger.info("documents_filtered", count=len(scored), matched=len(matched))
    return matched


def rank_all(
    documents: Iterable[Mapping[str, Any]],
    query: Any,
    settings: Settings | None = None,
) -> list[dict[str, Any]]:
    """Score every document and order by descending score; ties keep input order."""
    settings = settings or Settings()
    scored = score_all(documents, query, settings)
    return sorted(scored, key=lambda doc: doc[settings.match_key]["score"], reverse=True)
