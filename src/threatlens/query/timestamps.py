# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Helpers for the ISO-8601 timestamps stored in the dataset."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

CUTOFF_FORMAT = "%Y-%m-%dT%H:%M:%S"
STORED_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO date or datetime; naive values are taken as UTC.

    Raises:
        ValueError: If *value* is not ISO-8601.
    """
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def to_stored_timestamp(value: str) -> str:
    """Rewrite an ISO timestamp as UTC in the dataset's stored form.

    Date-only values stay dates (``YYYY-MM-DD``), which already compare
    correctly against stored timestamps.

    Raises:
        ValueError: If *value* is not ISO-8601.
    """
    stripped = value.strip()
    try:
        day = date.fromisoformat(stripped)
    except ValueError:
        return parse_timestamp(stripped).strftime(STORED_FORMAT)
    return day.isoformat()


def utc_date(value: str) -> date:
    """Calendar date (UTC) of an ISO timestamp."""
    return parse_timestamp(value).date()


def week_start(day: date) -> date:
    """Monday on or before *day*."""
    return day - timedelta(days=day.weekday())


def cutoff_timestamp(now: datetime, hours: int) -> str:
    """Format ``now - hours`` for lexicographic comparison with stored values."""
    return (now.astimezone(UTC) - timedelta(hours=hours)).strftime(CUTOFF_FORMAT)
