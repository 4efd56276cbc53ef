"""Tests for environment-driven settings."""

from match_engine.config.settings import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.match_key == "_match"
    assert settings.default_max_distance == 100_000
    assert settings.default_max_time == 86_400


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("MATCH_MATCH_KEY", "relevance")
    monkeypatch.setenv("MATCH_DEFAULT_MAX_DISTANCE", "2500")
    settings = Settings(_env_file=None)
    assert settings.match_key == "relevance"
    assert settings.default_max_distance == 2500
