# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for threatlens."""

from __future__ import annotations

from typing import Any


class ThreatLensError(Exception):
    """Base exception for all threatlens errors."""


class ConfigurationError(ThreatLensError):
    """Invalid or missing configuration."""


class StorageError(ThreatLensError):
    """Database or storage operation failed."""


class CacheError(ThreatLensError):
    """Cache backend operation failed."""


class QueryError(ThreatLensError):
    """A query could not be answered for a reason the client can act on.

    Carries the machine-readable ``code``, the HTTP ``status_code`` the API
    maps it to, and optional ``details`` naming the offending input.
    """

    code = "QUERY_ERROR"
    status_code = 400
    default_message = "Query failed"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details is not None:
            body["details"] = self.details
        return body


class WrongParametersError(QueryError):
    """Client-supplied input failed validation."""

    code = "WRONG_PARAMETERS"
    status_code = 400
    default_message = "Invalid request parameters"


class NotFoundError(QueryError):
    """A requested entity does not exist in the store."""

    code = "NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"
