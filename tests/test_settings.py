"""Tests for infra/settings.py"""

from __future__ import annotations

import logging
from pathlib import Path

from infra.settings import Settings, configure_logging


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in (
            "TELEGRAM_BOT_TOKEN",
            "TELEGRAM_CHAT_ID",
            "ANALYSIS_CACHE_TTL",
            "ALERTS_ENABLED",
            "SCHEDULE_HOUR",
            "SCHEDULE_TZ",
            "CORS_ORIGINS",
        ):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.telegram_bot_token is None
        assert settings.analysis_cache_ttl == 300
        assert settings.alerts_enabled is True
        assert settings.schedule_hour == 22
        assert settings.schedule_tz == "Europe/Paris"
        assert "http://localhost:5173" in settings.cors_origins

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "abc")
        monkeypatch.setenv("ANALYSIS_CACHE_TTL", "60")
        monkeypatch.setenv("ALERTS_ENABLED", "off")
        monkeypatch.setenv("WATCHLIST_PATH", "/tmp/wl.json")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
        settings = Settings.from_env()
        assert settings.telegram_bot_token == "abc"
        assert settings.analysis_cache_ttl == 60
        assert settings.alerts_enabled is False
        assert settings.watchlist_path == Path("/tmp/wl.json")
        assert settings.cors_origins == ["https://a.example", "https://b.example"]

    def test_bad_integer_falls_back(self, monkeypatch):
        monkeypatch.setenv("SCHEDULE_MINUTE", "half past")
        assert Settings.from_env().schedule_minute == 30

    def test_log_level_is_upper_cased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings.from_env().log_level == "DEBUG"


class TestConfigureLogging:
    def test_applies_log_level_to_root(self):
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging(Settings(log_level="WARNING"))
            assert root.level == logging.WARNING
            configure_logging(Settings(log_level="DEBUG"))
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)
