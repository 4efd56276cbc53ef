"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from match_engine import __version__
from match_engine.api.middleware import RequestTimingMiddleware
from match_engine.api.routes_health import router as health_router
from match_engine.api.routes_match import router as match_router
from match_engine.config.settings import Settings
from match_engine.observability.logger import get_logger, setup_logging

logger = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.json_logs)
    logger.info(
        "startup_complete",
        match_key=settings.match_key,
        max_documents_per_request=settings.max_documents_per_request,
    )
    yield
    logger.info("shutdown_complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(
        title="Match Engine",
        version=__version__,
        description="Score and filter JSON documents against declarative boolean queries",
        lifespan=lifespan,
    )
    app.state.settings = settings or Settings()
    app.add_middleware(RequestTimingMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(match_router, tags=["match"])
    return app
