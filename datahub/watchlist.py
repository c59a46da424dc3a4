"""
自选股列表管理工具。

采用 JSON 文件持久化，每个条目记录代码、启用状态与加入时间。
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

WATCHLIST_PATH = Path("data/watchlist.json")


def normalize_symbol(symbol: str) -> str:
    return (symbol or "").strip().upper()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(raw: Optional[str]) -> datetime:
    if not raw:
        return _now()
    value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class WatchlistEntry:
    symbol: str
    enabled: bool = True
    added_at: datetime = field(default_factory=_now)

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "enabled": self.enabled,
            "added_at": self.added_at.isoformat(),
        }


@dataclass
class Watchlist:
    """自选股列表的数据表示。"""

    entries: List[WatchlistEntry] = field(default_factory=list)
    updated_at: datetime = field(default_factory=_now)

    @property
    def symbols(self) -> List[str]:
        return [entry.symbol for entry in self.entries]

    @property
    def enabled_symbols(self) -> List[str]:
        return [entry.symbol for entry in self.entries if entry.enabled]

    def get(self, symbol: str) -> Optional[WatchlistEntry]:
        norm = normalize_symbol(symbol)
        for entry in self.entries:
            if entry.symbol == norm:
                return entry
        return None

    def add(self, symbol: str) -> None:
        norm = normalize_symbol(symbol)
        if not norm:
            return
        existing = self.get(norm)
        if existing is None:
            self.entries.append(WatchlistEntry(symbol=norm))
        elif not existing.enabled:
            existing.enabled = True
        else:
            return
        self.updated_at = _now()

    def remove(self, symbol: str) -> bool:
        norm = normalize_symbol(symbol)
        kept = [entry for entry in self.entries if entry.symbol != norm]
        if len(kept) == len(self.entries):
            return False
        self.entries = kept
        self.updated_at = _now()
        return True

    def set_enabled(self, symbol: str, enabled: bool) -> bool:
        entry = self.get(symbol)
        if entry is None:
            return False
        if entry.enabled != enabled:
            entry.enabled = enabled
            self.updated_at = _now()
        return True

    def extend(self, symbols: Iterable[str]) -> None:
        for symbol in symbols:
            self.add(symbol)

    def to_dict(self) -> dict:
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Watchlist":
        entries = [
            WatchlistEntry(
                symbol=normalize_symbol(item["symbol"]),
                enabled=bool(item.get("enabled", True)),
                added_at=_parse_timestamp(item.get("added_at")),
            )
            for item in data.get("entries") or []
        ]
        return cls(entries=entries, updated_at=_parse_timestamp(data.get("updated_at")))


def load_watchlist(path: Path | None = None) -> Watchlist:
    """读取自选股列表，若不存在则返回空列表。"""
    target = path or WATCHLIST_PATH
    if not target.exists():
        return Watchlist()
    data = json.loads(target.read_text(encoding="utf-8"))
    return Watchlist.from_dict(data)


def save_watchlist(watchlist: Watchlist, path: Path | None = None) -> None:
    """保存自选股列表到文件。"""
    target = path or WATCHLIST_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(watchlist.to_dict(), ensure_ascii=False, indent=2)
    target.write_text(payload, encoding="utf-8")
