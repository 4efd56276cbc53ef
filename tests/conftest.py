"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from match_engine.config.settings import Settings

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def settings():
    """Test settings, independent of any MATCH_* environment."""
    return Settings(
        default_max_distance=100_000,
        default_max_time=86_400,
        match_key="_match",
        max_documents_per_request=100,
    )


@pytest.fixture
def regio_documents():
    """CBS region records, Amsterdam first."""
    with open(FIXTURES / "regio.json") as f:
        return json.load(f)["value"]


@pytest.fixture
def geo_documents():
    return [
        {"city": "amsterdam", "location": {"lat": 52.363711, "lon": 4.882609}},
        {"city": "new york", "location": {"lat": 40.690902, "lon": -73.922038}},
    ]
