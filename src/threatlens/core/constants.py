# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerations, query limits, and cache constants."""

from enum import StrEnum


class IndicatorType(StrEnum):
    IP = "ip"
    DOMAIN = "domain"
    URL = "url"
    HASH = "hash"


class GroupBy(StrEnum):
    DAY = "day"
    WEEK = "week"


class TimeRange(StrEnum):
    LAST_24H = "24h"
    LAST_7D = "7d"
    LAST_30D = "30d"


TIME_RANGE_HOURS: dict[TimeRange, int] = {
    TimeRange.LAST_24H: 24,
    TimeRange.LAST_7D: 24 * 7,
    TimeRange.LAST_30D: 24 * 30,
}

DEFAULT_TIME_RANGE = TimeRange.LAST_7D
DEFAULT_GROUP_BY = GroupBy.DAY

ACTIVE_CAMPAIGN_STATUS = "active"

# Search pagination
DEFAULT_PAGE = 1
DEFAULT_SEARCH_LIMIT = 20
MAX_SEARCH_LIMIT = 100

RELATED_INDICATORS_LIMIT = 5
TOP_THREAT_ACTORS_LIMIT = 5

# Dashboard cache
DASHBOARD_CACHE_TTL = 300  # seconds
DASHBOARD_CACHE_KEY_PREFIX = "dashboard:summary:"
