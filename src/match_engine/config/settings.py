"""Central configuration via Pydantic Settings. All values driven by env vars."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from match_engine.config.constants import (
    DEFAULT_MATCH_KEY,
    DEFAULT_MAX_DISTANCE_M,
    DEFAULT_MAX_TIME_S,
)


class Settings(BaseSettings):
    # Scoring defaults, used when a leaf omits the modifier
    default_max_distance: float = DEFAULT_MAX_DISTANCE_M
    default_max_time: float = DEFAULT_MAX_TIME_S

    # Key under which batch wrappers attach the match record
    match_key: str = DEFAULT_MATCH_KEY

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    max_documents_per_request: int = 10_000

    model_config = {"env_file": ".env", "env_prefix": "MATCH_"}
