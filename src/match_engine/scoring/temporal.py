"""Timestamp parsing for the ``_time`` operator."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from dateutil.parser import isoparse


def parse_time(value: Any) -> datetime | None:
    """Parse an ISO-8601 extended timestamp; None when it cannot be read.

    Naive timestamps are taken to be UTC so that any two parsed values
    can be subtracted.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = isoparse(value)
        except (ValueError, OverflowError):
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def seconds_between(a: datetime, b: datetime) -> float:
    return abs((a - b).total_seconds())
