# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Storage layer -- database backend, schema, and repositories."""

from threatlens.storage.backend import DatabaseBackend
from threatlens.storage.database import close_db, get_backend, get_db, init_backend, init_db
from threatlens.storage.repositories.campaigns import CampaignRepository
from threatlens.storage.repositories.indicators import IndicatorRepository
from threatlens.storage.repositories.threat_actors import ThreatActorRepository
from threatlens.storage.schema import ensure_schema

__all__ = [
    "CampaignRepository",
    "DatabaseBackend",
    "IndicatorRepository",
    "ThreatActorRepository",
    "close_db",
    "ensure_schema",
    "get_backend",
    "get_db",
    "init_backend",
    "init_db",
]
