"""FastAPI middleware binding a request ID into the structlog context."""

from __future__ import annotations

import time
from uuid import uuid4

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from match_engine.observability.logger import get_logger

logger = get_logger("middleware")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestTimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        # Honour a caller-supplied ID so batch clients can correlate their logs
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        start = time.monotonic()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id, method=request.method, path=request.url.path
        )

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request_failed", duration_ms=_elapsed_ms(start))
            raise

        duration_ms = _elapsed_ms(start)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Duration-MS"] = str(duration_ms)
        log = logger.warning if response.status_code >= 400 else logger.info
        log("request_completed", status=response.status_code, duration_ms=duration_ms)
        return response


def _elapsed_ms(start: float) -> float:
    return round((time.monotonic() - start) * 1000, 2)
