# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from pathlib import Path
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="THREATLENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Database
    db_path: Path = Path("threat_intel.db")
    create_schema: bool = True

    # API server
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_workers: int = 1
    cors_origins: Annotated[list[str], NoDecode] = ["*"]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v: object) -> list[str]:
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v if isinstance(v, list) else []

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Dashboard cache
    cache_backend: str = "memory"  # "memory" or "redis"
    redis_url: str = "redis://localhost:6379/0"
    cache_max_entries: int = 1024


def get_settings() -> Settings:
    return Settings()
