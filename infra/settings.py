"""
运行配置，统一从环境变量（.env）读取。

解析失败时回退到默认值，避免因单个配置项错误导致服务无法启动。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def _parse_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _parse_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None
    telegram_timeout: int = 10
    analysis_cache_ttl: int = 300
    watchlist_path: Path = Path("data/watchlist.json")
    alert_history_path: Path = Path("data/alert_history.json")
    alert_min_confidence: int = 60
    alerts_enabled: bool = True
    schedule_hour: int = 22
    schedule_minute: int = 30
    schedule_tz: str = "Europe/Paris"
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: DEFAULT_CORS_ORIGINS.split(","))

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            telegram_bot_token=os.getenv("TELEGRAM_BOT_TOKEN") or None,
            telegram_chat_id=os.getenv("TELEGRAM_CHAT_ID") or None,
            telegram_timeout=_parse_int("TELEGRAM_TIMEOUT", 10),
            analysis_cache_ttl=_parse_int("ANALYSIS_CACHE_TTL", 300),
            watchlist_path=Path(os.getenv("WATCHLIST_PATH", "data/watchlist.json")),
            alert_history_path=Path(os.getenv("ALERT_HISTORY_PATH", "data/alert_history.json")),
            alert_min_confidence=_parse_int("ALERT_MIN_CONFIDENCE", 60),
            alerts_enabled=_parse_bool("ALERTS_ENABLED", True),
            schedule_hour=_parse_int("SCHEDULE_HOUR", 22),
            schedule_minute=_parse_int("SCHEDULE_MINUTE", 30),
            schedule_tz=os.getenv("SCHEDULE_TZ", "Europe/Paris"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=_parse_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
        )


def configure_logging(settings: Settings) -> None:
    """按 LOG_LEVEL 设置根日志级别，仅在入口脚本中调用。"""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(settings.log_level)
