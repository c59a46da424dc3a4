"""
行情数据抓取模块。

通过将 yfinance 调用包裹为兼容 asyncio 的结构，
使得批量分析在等待网络时不会阻塞事件循环。
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List

import pandas as pd
import yfinance as yf

logger = logging.getLogger(__name__)

DAILY_PERIOD = "2y"
WEEKLY_PERIOD = "5y"


class ProviderError(RuntimeError):
    """数据提供方抛出的统一异常。"""


@dataclass(frozen=True)
class PriceHistory:
    ticker: str
    daily_closes: List[float]
    weekly_closes: List[float]
    daily_highs: List[float] = field(default_factory=list)
    daily_lows: List[float] = field(default_factory=list)
    source: str = "yfinance"


def _normalize_dataframe(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return df
    normalized = df.copy()
    if isinstance(normalized.columns, pd.MultiIndex):
        normalized.columns = [str(col[0]).title() for col in normalized.columns]
    else:
        normalized.columns = [str(col).title() for col in normalized.columns]
    normalized = normalized.loc[:, ~normalized.columns.duplicated()]
    normalized.sort_index(inplace=True)
    normalized = normalized[~normalized.index.duplicated(keep="last")]
    if "Close" in normalized.columns:
        normalized = normalized.dropna(subset=["Close"])
    return normalized


def fetch_candles(ticker: str, interval: str, period: str) -> pd.DataFrame:
    """同步拉取单个标的的 K 线。"""
    logger.info("使用 yfinance 拉取 %s/%s (%s)", ticker, interval, period)
    try:
        df = yf.download(
            ticker,
            interval=interval,
            period=period,
            auto_adjust=False,
            progress=False,
            threads=False,
        )
    except Exception as exc:
        raise ProviderError(f"yfinance download failed for {ticker}/{interval}: {exc}") from exc
    if df is None or df.empty:
        raise ProviderError(f"no {interval} data returned for {ticker}")
    normalized = _normalize_dataframe(df)
    if "Close" not in normalized.columns:
        raise ProviderError(f"no close column in {interval} data for {ticker}")
    return normalized


async def get_price_history(ticker: str) -> PriceHistory:
    """并发获取日线与周线，返回评分所需的价格序列。"""
    ticker = ticker.strip().upper()
    daily_df, weekly_df = await asyncio.gather(
        asyncio.to_thread(fetch_candles, ticker, "1d", DAILY_PERIOD),
        asyncio.to_thread(fetch_candles, ticker, "1wk", WEEKLY_PERIOD),
    )

    closes = daily_df["Close"].astype(float)
    # 缺失高低价时以收盘价代替
    highs = daily_df["High"].astype(float).fillna(closes) if "High" in daily_df.columns else closes
    lows = daily_df["Low"].astype(float).fillna(closes) if "Low" in daily_df.columns else closes

    logger.debug("%s 行情：日线 %d 根，周线 %d 根", ticker, len(closes), len(weekly_df))
    return PriceHistory(
        ticker=ticker,
        daily_closes=closes.tolist(),
        weekly_closes=weekly_df["Close"].astype(float).tolist(),
        daily_highs=highs.tolist(),
        daily_lows=lows.tolist(),
    )
