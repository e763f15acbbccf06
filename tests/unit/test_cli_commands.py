# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the threatlens CLI."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from typer.testing import CliRunner

from threatlens import __version__
from threatlens.cache.manager import DashboardCache
from threatlens.cache.redis import RedisCacheBackend
from threatlens.cli.app import app

runner = CliRunner()


@pytest.fixture
def seeded_env(db_path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("THREATLENS_DB_PATH", str(db_path))
    monkeypatch.setenv("THREATLENS_LOG_LEVEL", "WARNING")
    return db_path


class TestRoot:
    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_serve_passes_settings_to_uvicorn(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("THREATLENS_API_PORT", "9001")
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve", "--workers", "2"])
        assert result.exit_code == 0
        args, kwargs = mock_run.call_args
        assert args == ("threatlens.api.app:create_app",)
        assert kwargs["port"] == 9001
        assert kwargs["workers"] == 2
        assert kwargs["factory"] is True


class TestDbCommands:
    def test_init_creates_schema(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        db_file = tmp_path / "new.db"
        monkeypatch.setenv("THREATLENS_DB_PATH", str(db_file))
        result = runner.invoke(app, ["db", "init"])
        assert result.exit_code == 0
        assert "Schema ready" in result.output
        assert db_file.exists()

    def test_stats(self, seeded_env) -> None:
        result = runner.invoke(app, ["db", "stats"])
        assert result.exit_code == 0
        assert "indicators" in result.output
        assert "campaign_indicators" in result.output


class TestIndicatorCommands:
    def test_show(self, seeded_env) -> None:
        result = runner.invoke(app, ["indicators", "show", "ind-1"])
        assert result.exit_code == 0
        assert "192.0.2.10" in result.output
        assert "APT Alpha" in result.output

    def test_show_json(self, seeded_env) -> None:
        result = runner.invoke(app, ["indicators", "show", "ind-1", "--json"])
        assert result.exit_code == 0
        doc = json.loads(result.stdout)
        assert doc["id"] == "ind-1"
        assert len(doc["related_indicators"]) == 5

    def test_show_missing(self, seeded_env) -> None:
        result = runner.invoke(app, ["indicators", "show", "ind-404"])
        assert result.exit_code == 1
        assert "Indicator not found" in result.output

    def test_search_json(self, seeded_env) -> None:
        result = runner.invoke(
            app, ["indicators", "search", "--type", "ip", "--limit", "1", "--json"]
        )
        assert result.exit_code == 0
        doc = json.loads(result.stdout)
        assert doc["total"] == 2
        assert doc["total_pages"] == 2
        assert [r["id"] for r in doc["data"]] == ["ind-1"]

    def test_search_bad_type(self, seeded_env) -> None:
        result = runner.invoke(app, ["indicators", "search", "--type", "email"])
        assert result.exit_code == 1
        assert "Invalid type" in result.output

    def test_search_bad_page(self, seeded_env) -> None:
        result = runner.invoke(app, ["indicators", "search", "--page", "0"])
        assert result.exit_code == 1
        assert "Invalid pagination parameters" in result.output


class TestCampaignCommands:
    def test_timeline_week(self, seeded_env) -> None:
        result = runner.invoke(app, ["campaigns", "timeline", "camp-1", "-g", "week", "--json"])
        assert result.exit_code == 0
        doc = json.loads(result.stdout)
        assert [b["period"] for b in doc["timeline"]] == ["2024-01-01", "2024-01-08"]

    def test_timeline_table(self, seeded_env) -> None:
        result = runner.invoke(app, ["campaigns", "timeline", "camp-1"])
        assert result.exit_code == 0
        assert "Operation Dusk" in result.output
        assert "duration_days=20" in result.output

    def test_timeline_bad_group_by(self, seeded_env) -> None:
        result = runner.invoke(app, ["campaigns", "timeline", "camp-1", "-g", "month"])
        assert result.exit_code == 1

    def test_timeline_missing_campaign(self, seeded_env) -> None:
        result = runner.invoke(app, ["campaigns", "timeline", "camp-404"])
        assert result.exit_code == 1
        assert "Campaign not found" in result.output


class TestDashboardCommands:
    def test_summary_json(self, seeded_env) -> None:
        result = runner.invoke(app, ["dashboard", "summary", "--time-range", "30d", "--json"])
        assert result.exit_code == 0
        doc = json.loads(result.stdout)
        assert doc["time_range"] == "30d"
        assert doc["indicator_distribution"] == {"ip": 2, "domain": 2, "url": 1, "hash": 1}

    def test_summary_table(self, seeded_env) -> None:
        result = runner.invoke(app, ["dashboard", "summary"])
        assert result.exit_code == 0
        assert "Top Threat Actors" in result.output

    def test_summary_bad_range(self, seeded_env) -> None:
        result = runner.invoke(app, ["dashboard", "summary", "-t", "1y"])
        assert result.exit_code == 1
        assert "Invalid time_range" in result.output


class TestCacheCommands:
    def test_clear(self) -> None:
        result = runner.invoke(app, ["cache", "clear"])
        assert result.exit_code == 0
        assert "0 entries removed" in result.output

    def test_stats(self) -> None:
        result = runner.invoke(app, ["cache", "stats"])
        assert result.exit_code == 0
        assert "memory" in result.output
        assert "300" in result.output
        for metric in ("Hits", "Misses", "Errors", "Hit rate"):
            assert metric in result.output

    @pytest.mark.parametrize("command", ["clear", "stats"])
    def test_redis_unavailable(self, command) -> None:
        client = MagicMock()
        client.scan_iter = MagicMock(side_effect=RedisConnectionError("refused"))
        client.aclose = AsyncMock()
        down = DashboardCache(RedisCacheBackend(client=client))

        with patch("threatlens.cache.manager.get_dashboard_cache", return_value=down):
            result = runner.invoke(app, ["cache", command])

        assert result.exit_code == 1
        assert "Error: Redis" in result.output
        client.aclose.assert_awaited_once()
