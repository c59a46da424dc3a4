from __future__ import annotations

from functools import lru_cache

from backend.app.services.alerts import AlertHistoryStore, TelegramNotifier
from backend.app.services.analyze import AnalysisService
from datahub.cache import TTLCache
from infra.settings import Settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def get_analysis_service() -> AnalysisService:
    settings = get_settings()
    return AnalysisService(cache=TTLCache(default_ttl=settings.analysis_cache_ttl))


def get_alert_history() -> AlertHistoryStore:
    return AlertHistoryStore(get_settings().alert_history_path)


def get_notifier() -> TelegramNotifier:
    settings = get_settings()
    return TelegramNotifier(
        settings.telegram_bot_token,
        settings.telegram_chat_id,
        timeout=settings.telegram_timeout,
    )
