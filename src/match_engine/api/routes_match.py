"""Scoring, filtering and ranking endpoints."""

from __future__ import annotations

from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException

from match_engine.api.dependencies import get_settings
from match_engine.batch import filter_all, rank_all, score_all
from match_engine.config.settings import Settings
from match_engine.exceptions import QueryError
from match_engine.models.schemas import MatchRequest, MatchResponse

router = APIRouter()


def _execute(request: MatchRequest, settings: Settings, runner: Callable) -> MatchResponse:
    if len(request.documents) > settings.max_documents_per_request:
        raise HTTPException(
            status_code=413,
            detail=f"At most {settings.max_documents_per_request} documents per request",
        )
    try:
        documents = runner(request.documents, request.query, settings)
    except QueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MatchResponse(documents=documents, count=len(documents))


@router.post("/score", response_model=MatchResponse)
def score(request: MatchRequest, settings: Settings = Depends(get_settings)) -> MatchResponse:
    return _execute(request, settings, score_all)


@router.post("/filter", response_model=MatchResponse)
def filter_documents(
    request: MatchRequest, settings: Settings = Depends(get_settings)
) -> MatchResponse:
    return _execute(request, settings, filter_all)


@router.post("/rank", response_model=MatchResponse)
def rank(request: MatchRequest, settings: Settings = Depends(get_settings)) -> MatchResponse:
    return _execute(request, settings, rank_all)
