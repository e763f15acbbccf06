# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Indicator detail and search models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from threatlens.core.constants import IndicatorType


class IndicatorFilters(BaseModel):
    """Optional, AND-combined search filters."""

    model_config = ConfigDict(frozen=True)

    type: IndicatorType | None = None
    value: str | None = Field(default=None, description="Substring of the indicator value")
    threat_actor: str | None = Field(default=None, description="Threat actor ID")
    campaign: str | None = Field(default=None, description="Campaign ID")
    first_seen_after: str | None = None
    last_seen_before: str | None = None


class LinkedThreatActor(BaseModel):
    id: str
    name: str
    confidence: float | None = None


class LinkedCampaign(BaseModel):
    id: str
    name: str
    status: str
    active: bool
    last_observed: str | None = None


class RelatedIndicator(BaseModel):
    id: str
    type: IndicatorType
    value: str
    relationship: str


class IndicatorDetail(BaseModel):
    """An indicator with its actors, campaigns, and outgoing relationships."""

    id: str
    type: IndicatorType
    value: str
    confidence: int | float | None = None
    first_seen: str | None = None
    last_seen: str | None = None
    tags: list[str] = Field(default_factory=list)
    threat_actors: list[LinkedThreatActor] = Field(default_factory=list)
    campaigns: list[LinkedCampaign] = Field(default_factory=list)
    related_indicators: list[RelatedIndicator] = Field(default_factory=list)


class IndicatorSearchResult(BaseModel):
    id: str
    type: IndicatorType
    value: str
    confidence: int | float | None = None
    first_seen: str | None = None
    last_seen: str | None = None
    campaign_count: int = 0
    threat_actor_count: int = 0


class IndicatorSearchPage(BaseModel):
    data: list[IndicatorSearchResult]
    total: int
    page: int
    limit: int
    total_pages: int
