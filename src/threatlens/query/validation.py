# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Input validation shared by the query services.

Every function here runs before the store is touched and raises
:class:`~threatlens.core.exceptions.WrongParametersError` naming the
offending input.
"""

from __future__ import annotations

from datetime import UTC, date, datetime

from threatlens.core.constants import (
    DEFAULT_GROUP_BY,
    DEFAULT_TIME_RANGE,
    MAX_SEARCH_LIMIT,
    GroupBy,
    IndicatorType,
    TimeRange,
)
from threatlens.core.exceptions import WrongParametersError
from threatlens.models.indicator import IndicatorFilters
from threatlens.query.timestamps import parse_timestamp, to_stored_timestamp


def validate_pagination(page: int, limit: int) -> tuple[int, int]:
    """Return ``(page, effective_limit)`` with the limit clamped to the maximum."""
    if page < 1 or limit < 1:
        raise WrongParametersError(
            "Invalid pagination parameters, page and limit must be greater than 0",
            {"page": page, "limit": limit},
        )
    return page, min(limit, MAX_SEARCH_LIMIT)


def parse_group_by(value: str | GroupBy | None) -> GroupBy:
    if value is None:
        return DEFAULT_GROUP_BY
    try:
        return GroupBy(value)
    except ValueError:
        raise WrongParametersError(
            'Invalid group_by parameter. Must be "day" or "week"',
            {"group_by": value},
        ) from None


def parse_time_range(value: str | TimeRange | None) -> TimeRange:
    if not value:
        return DEFAULT_TIME_RANGE
    try:
        return TimeRange(value)
    except ValueError:
        allowed = [str(tr) for tr in TimeRange]
        raise WrongParametersError(
            f"Invalid time_range. Must be one of: {', '.join(allowed)}",
            {"time_range": value, "allowed": allowed},
        ) from None


def parse_indicator_type(value: str | IndicatorType | None) -> IndicatorType | None:
    if not value:
        return None
    try:
        return IndicatorType(value)
    except ValueError:
        allowed = [str(t) for t in IndicatorType]
        raise WrongParametersError(
            f"Invalid type. Must be one of: {', '.join(allowed)}",
            {"type": value, "allowed": allowed},
        ) from None


def parse_date_bound(name: str, value: str | date | None) -> date | None:
    """Calendar date (UTC) of a date or datetime bound; ``None`` when absent."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.astimezone(UTC).date() if value.tzinfo else value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_timestamp(value).date()
    except ValueError:
        raise WrongParametersError(
            f"Invalid {name}. Must be an ISO-8601 date or datetime",
            {name: value},
        ) from None


def build_search_filters(
    type: str | None = None,  # noqa: A002
    value: str | None = None,
    threat_actor: str | None = None,
    campaign: str | None = None,
    first_seen_after: str | None = None,
    last_seen_before: str | None = None,
) -> IndicatorFilters:
    """Validate raw search parameters into :class:`IndicatorFilters`."""
    return IndicatorFilters(
        type=parse_indicator_type(type),
        value=value or None,
        threat_actor=threat_actor or None,
        campaign=campaign or None,
        first_seen_after=check_timestamp("first_seen_after", first_seen_after),
        last_seen_before=check_timestamp("last_seen_before", last_seen_before),
    )


def check_timestamp(name: str, value: str | None) -> str | None:
    """Validate an ISO-8601 filter value and return it in the stored UTC form."""
    if not value:
        return None
    try:
        return to_stored_timestamp(value)
    except ValueError:
        raise WrongParametersError(
            f"Invalid {name}. Must be an ISO-8601 date or datetime",
            {name: value},
        ) from None
