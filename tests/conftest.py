# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures: a small seeded threat-intelligence dataset."""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime
from pathlib import Path

import pytest

from threatlens.storage.schema import SCHEMA

# Fixed "now" for dashboard tests.  Relative to it:
#   24h cutoff 2024-01-05T12:00:00, 7d 2023-12-30T12:00:00, 30d 2023-12-07T12:00:00
DASHBOARD_NOW = datetime(2024, 1, 6, 12, 0, tzinfo=UTC)

INDICATORS = [
    # id, type, value, confidence, first_seen, last_seen, tags
    ("ind-1", "ip", "192.0.2.10", 90, "2024-01-01T00:00:00Z", "2024-01-20T00:00:00Z", '["c2", "botnet"]'),
    ("ind-2", "domain", "evil.example.com", 80, "2024-01-02T00:00:00Z", "2024-01-18T00:00:00Z", "[]"),
    ("ind-3", "url", "http://evil.example.com/payload", 70, "2024-01-03T00:00:00Z", "2024-01-15T00:00:00Z", "[]"),
    ("ind-4", "hash", "d41d8cd98f00b204e9800998ecf8427e", 60, "2024-01-05T00:00:00Z", "2024-01-10T00:00:00Z", "malware, dropper"),
    ("ind-5", "ip", "198.51.100.7", 50, "2023-12-01T00:00:00Z", "2023-12-31T00:00:00Z", None),
    ("ind-6", "domain", "stage_2.example.net", 40, "2024-01-06T00:00:00Z", "2024-01-08T00:00:00Z", "[]"),
]

CAMPAIGNS = [
    # id, name, description, first_seen, last_seen, status
    ("camp-1", "Operation Dusk", "Botnet C2 rotation", "2024-01-01T00:00:00Z", "2024-01-20T12:00:00Z", "active"),
    ("camp-2", "Operation Dawn", None, "2024-01-10T00:00:00Z", "2024-01-12T00:00:00Z", "inactive"),
    ("camp-3", "Quiet Harbor", None, "2023-12-20T00:00:00Z", "2023-12-20T00:00:00Z", "active"),
]

THREAT_ACTORS = [
    ("actor-1", "APT Alpha"),
    ("actor-2", "Beta Group"),
    ("actor-3", "Gamma Crew"),
]

ACTOR_CAMPAIGNS = [
    ("actor-1", "camp-1", 0.9),
    ("actor-2", "camp-2", 0.6),
    ("actor-1", "camp-2", 0.7),
]

# 2024-01-01 and 2024-01-08 are Mondays.
CAMPAIGN_INDICATORS = [
    ("camp-1", "ind-1", "2024-01-01T10:00:00Z"),
    ("camp-1", "ind-2", "2024-01-02T11:00:00Z"),
    ("camp-1", "ind-1", "2024-01-08T09:00:00Z"),
    ("camp-1", "ind-3", "2024-01-09T12:00:00Z"),
    ("camp-1", "ind-4", "2024-01-14T23:00:00Z"),
    ("camp-2", "ind-1", "2024-01-10T08:00:00Z"),
    ("camp-2", "ind-6", "2024-01-11T08:00:00Z"),
]

RELATIONSHIPS = [
    ("ind-1", "ind-2", "communicates_with", "2023-12-01T00:00:00Z"),
    ("ind-1", "ind-2", "resolves_to", "2024-01-05T00:00:00Z"),
    ("ind-1", "ind-3", "hosts", "2024-01-06T00:00:00Z"),
    ("ind-1", "ind-4", "drops", "2024-01-07T00:00:00Z"),
    ("ind-1", "ind-5", "communicates_with", "2024-01-08T00:00:00Z"),
    ("ind-1", "ind-6", "related", "2024-01-09T00:00:00Z"),
    ("ind-2", "ind-1", "resolves_to", "2024-01-04T00:00:00Z"),
]


def seed_dataset(path: Path) -> None:
    """Create the schema at *path* and load the fixture rows."""
    conn = sqlite3.connect(path)
    try:
        conn.executescript(SCHEMA)
        conn.executemany("INSERT INTO indicators VALUES (?, ?, ?, ?, ?, ?, ?)", INDICATORS)
        conn.executemany("INSERT INTO campaigns VALUES (?, ?, ?, ?, ?, ?)", CAMPAIGNS)
        conn.executemany("INSERT INTO threat_actors VALUES (?, ?)", THREAT_ACTORS)
        conn.executemany("INSERT INTO actor_campaigns VALUES (?, ?, ?)", ACTOR_CAMPAIGNS)
        conn.executemany("INSERT INTO campaign_indicators VALUES (?, ?, ?)", CAMPAIGN_INDICATORS)
        conn.executemany("INSERT INTO indicator_relationships VALUES (?, ?, ?, ?)", RELATIONSHIPS)
        conn.commit()
    finally:
        conn.close()


@pytest.fixture
def dashboard_clock():
    """Clock pinned to DASHBOARD_NOW."""
    return lambda: DASHBOARD_NOW


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "threat_intel.db"
    seed_dataset(path)
    return path


@pytest.fixture
async def store(db_path: Path):
    """The process-wide backend opened on the seeded database."""
    from threatlens.storage.database import close_db, init_backend

    backend = await init_backend(db_path=db_path)
    yield backend
    await close_db()


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep a developer's THREATLENS_* environment and .env out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("THREATLENS_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Reset the database and dashboard cache singletons between tests."""
    import threatlens.storage.database as database
    from threatlens.cache.manager import reset_dashboard_cache

    reset_dashboard_cache()
    yield
    reset_dashboard_cache()
    database._db = None
    database._backend = None
