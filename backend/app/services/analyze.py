from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from datahub.cache import TTLCache
from datahub.fetcher import PriceHistory, ProviderError, get_price_history
from datahub.watchlist import normalize_symbol
from engine.analyzer import AnalysisReport, InsufficientDataError, evaluate
from engine.macro_regime import MacroAnalysis, MacroInputs, analyze_macro_context

logger = logging.getLogger(__name__)

CACHE_PREFIX = "analysis:report:"

PriceFetcher = Callable[[str], Awaitable[PriceHistory]]


@dataclass(frozen=True)
class EnrichedReport:
    """技术面报告附带宏观上下文，数值字段保持不变。"""

    report: AnalysisReport
    macro: MacroAnalysis

    def to_dict(self) -> Dict[str, Any]:
        payload = self.report.to_dict()
        payload["macroContext"] = self.macro.regime.to_dict()
        payload["assetBias"] = self.macro.asset_bias.to_dict()
        payload["macroInsights"] = list(self.macro.insights)
        return payload


def _sort_key(report: AnalysisReport) -> tuple[int, int]:
    return (abs(report.score), report.score)


class AnalysisService:
    """按标的拉取行情、评分并缓存报告。"""

    def __init__(
        self,
        fetcher: PriceFetcher = get_price_history,
        cache: Optional[TTLCache] = None,
        cache_ttl: Optional[float] = None,
    ) -> None:
        self.fetcher = fetcher
        self.cache = cache if cache is not None else TTLCache()
        self.cache_ttl = cache_ttl

    @staticmethod
    def cache_key(symbol: str) -> str:
        return f"{CACHE_PREFIX}{normalize_symbol(symbol)}"

    @classmethod
    def macro_cache_key(cls, symbol: str, macro: MacroAnalysis) -> str:
        return f"{cls.cache_key(symbol)}:regime:{macro.regime.key}"

    async def analyze_symbol(self, symbol: str) -> AnalysisReport:
        symbol = normalize_symbol(symbol)
        if not symbol:
            raise ValueError("symbol must not be empty")

        key = self.cache_key(symbol)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("命中缓存：%s", symbol)
            return cached

        history = await self.fetcher(symbol)
        report = evaluate(
            symbol,
            history.daily_closes,
            history.weekly_closes,
            history.daily_highs or None,
            history.daily_lows or None,
        )
        self.cache.set(key, report, self.cache_ttl)
        return report

    async def analyze_symbol_with_macro(
        self,
        symbol: str,
        inputs: MacroInputs,
        today: Optional[date] = None,
    ) -> EnrichedReport:
        """单个标的分析并附加宏观环境，缓存键包含宏观阶段。"""
        macro = analyze_macro_context(inputs, today)
        key = self.macro_cache_key(symbol, macro)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("命中宏观缓存：%s", key)
            return cached

        report = await self.analyze_symbol(symbol)
        enriched = EnrichedReport(report=report, macro=macro)
        self.cache.set(key, enriched, self.cache_ttl)
        return enriched

    async def run_batch(
        self,
        symbols: Sequence[str],
        macro_inputs: Optional[MacroInputs] = None,
    ) -> Dict[str, Any]:
        """并发评分全部标的；单个失败不影响其它标的。"""
        start_time = time.perf_counter()
        cleaned: List[str] = []
        for symbol in symbols:
            norm = normalize_symbol(symbol)
            if norm and norm not in cleaned:
                cleaned.append(norm)

        outcomes = await asyncio.gather(
            *(self.analyze_symbol(symbol) for symbol in cleaned),
            return_exceptions=True,
        )

        reports: List[AnalysisReport] = []
        errors: List[str] = []
        for symbol, outcome in zip(cleaned, outcomes):
            if isinstance(outcome, AnalysisReport):
                reports.append(outcome)
                continue
            if not isinstance(outcome, Exception):
                # 取消等 BaseException 交由调用方处理
                raise outcome
            if isinstance(outcome, (InsufficientDataError, ProviderError)):
                logger.warning("分析失败：%s -> %s", symbol, outcome)
            else:
                logger.error("分析出现意外错误：%s", symbol, exc_info=outcome)
            errors.append(f"{symbol}: {outcome}")

        reports.sort(key=_sort_key, reverse=True)
        logger.info(
            "批量分析完成：成功 %d，失败 %d，耗时 %d ms",
            len(reports),
            len(errors),
            int((time.perf_counter() - start_time) * 1000),
        )
        batch: Dict[str, Any] = {
            "date": datetime.now(timezone.utc).isoformat(),
            "reports": reports,
            "errors": errors,
        }
        if macro_inputs is not None:
            batch["macro"] = analyze_macro_context(macro_inputs)
        return batch

    def invalidate(self, symbol: Optional[str] = None) -> None:
        if symbol is None:
            self.cache.delete_prefix(CACHE_PREFIX)
            return
        key = self.cache_key(symbol)
        self.cache.delete(key)
        self.cache.delete_prefix(f"{key}:regime:")
