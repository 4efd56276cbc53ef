"""Tests for timestamp parsing."""

from datetime import datetime, timezone

from match_engine.scoring.temporal import parse_time, seconds_between


def test_parse_iso_extended():
    parsed = parse_time("2024-01-01T12:30:00+01:00")
    assert parsed == datetime(2024, 1, 1, 11, 30, tzinfo=timezone.utc)


def test_naive_timestamp_is_utc():
    assert parse_time("2024-01-01T00:00:00").tzinfo is not None


def test_datetime_passthrough():
    moment = datetime(2024, 5, 1, tzinfo=timezone.utc)
    assert parse_time(moment) == moment


def test_unparsable_values():
    assert parse_time("yesterday") is None
    assert parse_time(None) is None
    assert parse_time(1700000000) is None


def test_seconds_between_is_absolute():
    a = parse_time("2024-01-01T00:00:00Z")
    b = parse_time("2024-01-01T01:00:00Z")
    assert seconds_between(a, b) == 3600
    assert seconds_between(b, a) == 3600
