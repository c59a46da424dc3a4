from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import requests

from engine.actions import Action
from engine.analyzer import AnalysisReport
from engine.report import render_alert

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org/bot{token}/sendMessage"


class TelegramNotifier:
    """向单个 Telegram 会话推送 Markdown 消息。"""

    def __init__(self, token: Optional[str], chat_id: Optional[str], timeout: float = 10) -> None:
        self.token = token
        self.chat_id = chat_id
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.token and self.chat_id)

    def send(self, text: str) -> bool:
        if not self.configured:
            logger.debug("未配置 Telegram，消息已丢弃")
            return False
        try:
            resp = requests.post(
                TELEGRAM_API_URL.format(token=self.token),
                json={"chat_id": self.chat_id, "text": text, "parse_mode": "Markdown"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Telegram 推送失败：%s", exc)
            return False
        return True


@dataclass
class AlertRecord:
    symbol: str
    action: str
    score: int
    price: Optional[float]
    sent_at: str
    date_sent: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class AlertHistoryStore:
    """已发送告警的 JSON 记录，每个 (symbol, date_sent) 唯一。"""

    def __init__(self, path: Path | str = Path("data/alert_history.json")) -> None:
        self.path = Path(path)

    def _load(self) -> List[AlertRecord]:
        if not self.path.exists():
            return []
        data = json.loads(self.path.read_text(encoding="utf-8"))
        records = []
        for item in data:
            # 统一为法文取值
            item["action"] = Action.parse(item["action"]).value
            records.append(AlertRecord(**item))
        return records

    def _save(self, records: Iterable[AlertRecord]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([record.to_dict() for record in records], ensure_ascii=False, indent=2)
        self.path.write_text(payload, encoding="utf-8")

    def already_sent(self, symbol: str, day: str) -> bool:
        return any(record.symbol == symbol and record.date_sent == day for record in self._load())

    def record(self, report: AnalysisReport, day: str) -> AlertRecord:
        records = [
            record for record in self._load()
            if not (record.symbol == report.symbol and record.date_sent == day)
        ]
        entry = AlertRecord(
            symbol=report.symbol,
            action=report.action.value,
            score=report.score,
            price=report.details.get("price"),
            sent_at=datetime.now(timezone.utc).isoformat(),
            date_sent=day,
        )
        records.append(entry)
        self._save(records)
        return entry

    def list(self, limit: int = 50, symbol: Optional[str] = None) -> List[AlertRecord]:
        records = self._load()
        if symbol:
            records = [record for record in records if record.symbol == symbol.strip().upper()]
        records.sort(key=lambda record: record.sent_at, reverse=True)
        return records[:limit]


def dispatch_alerts(
    reports: Iterable[AnalysisReport],
    notifier: TelegramNotifier,
    history: AlertHistoryStore,
    min_confidence: int = 60,
    today: Optional[date] = None,
) -> List[AlertRecord]:
    """对可操作的报告逐条推送，同一标的每天最多一次。"""
    day = (today or datetime.now(timezone.utc).date()).isoformat()
    sent: List[AlertRecord] = []
    for report in reports:
        if report.action is Action.HOLD or report.confidence < min_confidence:
            continue
        if history.already_sent(report.symbol, day):
            logger.debug("%s 已于 %s 推送过告警", report.symbol, day)
            continue
        if notifier.send(render_alert(report)):
            sent.append(history.record(report, day))
    if sent:
        logger.info("已推送 %d 条告警：%s", len(sent), ", ".join(record.symbol for record in sent))
    return sent
