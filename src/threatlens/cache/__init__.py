# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache-aside layer for the dashboard summary."""

from threatlens.cache.manager import (
    CachedDocument,
    DashboardCache,
    get_dashboard_cache,
    reset_dashboard_cache,
)

__all__ = [
    "CachedDocument",
    "DashboardCache",
    "get_dashboard_cache",
    "reset_dashboard_cache",
]
