# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Table and index definitions for the threat-intelligence dataset.

The dataset is populated by an external ingestion process.  These
statements only create what is missing, so running them against an
already-populated database is a no-op.
"""

from __future__ import annotations

import logging

import aiosqlite

logger = logging.getLogger("threatlens.storage.schema")

TABLES: tuple[str, ...] = (
    "indicators",
    "campaigns",
    "threat_actors",
    "campaign_indicators",
    "actor_campaigns",
    "indicator_relationships",
)

SCHEMA = """
CREATE TABLE IF NOT EXISTS indicators (
    id TEXT PRIMARY KEY,
    type TEXT NOT NULL CHECK (type IN ('ip', 'domain', 'url', 'hash')),
    value TEXT NOT NULL,
    confidence INTEGER,
    first_seen TEXT,
    last_seen TEXT,
    tags TEXT DEFAULT '[]'
);

CREATE TABLE IF NOT EXISTS campaigns (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT,
    first_seen TEXT,
    last_seen TEXT,
    status TEXT NOT NULL DEFAULT 'active'
);

CREATE TABLE IF NOT EXISTS threat_actors (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS campaign_indicators (
    campaign_id TEXT NOT NULL REFERENCES campaigns(id),
    indicator_id TEXT NOT NULL REFERENCES indicators(id),
    observed_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS actor_campaigns (
    threat_actor_id TEXT NOT NULL REFERENCES threat_actors(id),
    campaign_id TEXT NOT NULL REFERENCES campaigns(id),
    confidence REAL
);

CREATE TABLE IF NOT EXISTS indicator_relationships (
    source_indicator_id TEXT NOT NULL REFERENCES indicators(id),
    target_indicator_id TEXT NOT NULL REFERENCES indicators(id),
    relationship_type TEXT NOT NULL,
    first_observed TEXT
);

CREATE INDEX IF NOT EXISTS idx_indicators_type ON indicators(type);
CREATE INDEX IF NOT EXISTS idx_indicators_first_seen ON indicators(first_seen);
CREATE INDEX IF NOT EXISTS idx_indicators_last_seen ON indicators(last_seen);
CREATE INDEX IF NOT EXISTS idx_campaigns_status ON campaigns(status, last_seen);
CREATE INDEX IF NOT EXISTS idx_ci_campaign ON campaign_indicators(campaign_id, observed_at);
CREATE INDEX IF NOT EXISTS idx_ci_indicator ON campaign_indicators(indicator_id);
CREATE INDEX IF NOT EXISTS idx_ac_actor ON actor_campaigns(threat_actor_id);
CREATE INDEX IF NOT EXISTS idx_ac_campaign ON actor_campaigns(campaign_id);
CREATE INDEX IF NOT EXISTS idx_ir_source ON indicator_relationships(source_indicator_id);
"""


async def ensure_schema(db: aiosqlite.Connection) -> None:
    """Create any missing tables and indexes."""
    await db.executescript(SCHEMA)
    await db.commit()
    logger.debug("Schema ensured for %d tables", len(TABLES))
