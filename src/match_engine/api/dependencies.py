"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Request

from match_engine.config.settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
