"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from match_engine import __version__
from match_engine.models.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)
