# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Models shared by several response documents."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel


class TypeCounts(BaseModel):
    """A count per indicator type; types with no rows are 0."""

    ip: int = 0
    domain: int = 0
    url: int = 0
    hash: int = 0

    @classmethod
    def from_mapping(cls, counts: Mapping[str, int]) -> TypeCounts:
        return cls(**{k: v for k, v in counts.items() if k in cls.model_fields})
