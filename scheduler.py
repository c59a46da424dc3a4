"""
每日自动分析调度器。

基于 APScheduler 安排定时任务，按日对自选股批量评分，
并通过 Telegram 推送强信号告警。
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from zoneinfo import ZoneInfo

import env  # noqa: F401

from backend.app.services.alerts import AlertHistoryStore, TelegramNotifier, dispatch_alerts
from backend.app.services.analyze import AnalysisService
from datahub.cache import TTLCache
from datahub.watchlist import load_watchlist
from engine.report import render_digest
from infra.settings import Settings, configure_logging

logger = logging.getLogger(__name__)


async def run_scheduled_analysis(
    settings: Optional[Settings] = None,
    service: Optional[AnalysisService] = None,
    notifier: Optional[TelegramNotifier] = None,
    history: Optional[AlertHistoryStore] = None,
) -> Dict[str, Any]:
    """执行一次批量分析并推送告警。"""
    settings = settings or Settings.from_env()
    watchlist = load_watchlist(settings.watchlist_path)
    symbols = watchlist.enabled_symbols
    if not symbols:
        logger.info("自选股列表为空，跳过本次分析。")
        return {}

    # 定时任务每次都需要新鲜数据，缓存仅在本轮内生效
    service = service or AnalysisService(cache=TTLCache(default_ttl=settings.analysis_cache_ttl))
    notifier = notifier or TelegramNotifier(
        settings.telegram_bot_token,
        settings.telegram_chat_id,
        timeout=settings.telegram_timeout,
    )
    history = history or AlertHistoryStore(settings.alert_history_path)

    batch = await service.run_batch(symbols)

    sent = []
    if settings.alerts_enabled:
        sent = dispatch_alerts(
            batch["reports"],
            notifier,
            history,
            min_confidence=settings.alert_min_confidence,
        )
        if batch["reports"] and notifier.configured:
            notifier.send(render_digest(batch))

    logger.info(
        "定时分析完成：成功 %d，失败 %d，告警 %d",
        len(batch["reports"]),
        len(batch["errors"]),
        len(sent),
    )
    for error in batch["errors"]:
        logger.warning("分析失败：%s", error)
    return batch


def start_scheduler(hour: int = 22, minute: int = 30, tz_name: str = "Europe/Paris") -> AsyncIOScheduler:
    """启动每日调度器，在指定时间执行分析。"""
    scheduler = AsyncIOScheduler(timezone=ZoneInfo(tz_name))
    scheduler.add_job(
        run_scheduled_analysis,
        trigger="cron",
        day_of_week="mon-fri",
        hour=hour,
        minute=minute,
        id="daily_analysis_job",
        replace_existing=True,
        max_instances=1,
        misfire_grace_time=600,
    )
    scheduler.start()
    logger.info("已启动每日分析调度器，时间 %02d:%02d (%s)", hour, minute, tz_name)
    return scheduler


async def main() -> None:
    """常驻运行调度器。"""
    settings = Settings.from_env()
    configure_logging(settings)
    start_scheduler(settings.schedule_hour, settings.schedule_minute, settings.schedule_tz)
    await asyncio.Event().wait()


if __name__ == "__main__":
    asyncio.run(main())
