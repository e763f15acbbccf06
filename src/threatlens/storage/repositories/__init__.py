# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Repository modules for database access."""

from threatlens.storage.repositories.campaigns import CampaignRepository
from threatlens.storage.repositories.indicators import IndicatorRepository
from threatlens.storage.repositories.threat_actors import ThreatActorRepository

__all__ = [
    "CampaignRepository",
    "IndicatorRepository",
    "ThreatActorRepository",
]
