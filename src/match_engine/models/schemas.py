"""Pydantic models for query modifiers and API request/response serialization."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ModifierSpec(BaseModel):
    """Raw leaf modifiers as written in a query (``w``, ``b``, ...)."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    weight: float = Field(default=1.0, alias="w")
    binary: bool = Field(default=False, alias="b")
    max_distance: float | None = Field(default=None, gt=0)
    max_time: float | None = Field(default=None, gt=0)
    inverse: bool = False


class MatchRequest(BaseModel):
    documents: list[dict[str, Any]]
    query: dict[str, Any] | list[Any]


class MatchResponse(BaseModel):
    documents: list[dict[str, Any]]
    count: int


class HealthResponse(BaseModel):
    status: str
    version: str
