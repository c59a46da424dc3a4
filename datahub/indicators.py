"""技术指标计算工具。"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class IndicatorSnapshot:
    """一次评分所需的各指标最新值。"""

    price: float
    rsi: float
    sma50: float
    sma200: float
    weekly_close: float
    weekly_sma20: float
    macd_line: float
    macd_signal: float
    macd_hist: float
    macd_hist_prev: float
    bb_upper: float
    bb_lower: float
    atr: float
    atr_baseline: float

    @property
    def trend_daily(self) -> str:
        return "BULL" if self.sma50 > self.sma200 else "BEAR"

    @property
    def trend_weekly(self) -> str:
        return "BULL" if self.weekly_close > self.weekly_sma20 else "BEAR"


def to_series(values: Sequence[float] | pd.Series) -> pd.Series:
    if isinstance(values, pd.Series):
        return values.astype(float).reset_index(drop=True)
    return pd.Series(list(values), dtype=float)


def _require(series: pd.Series, period: int, name: str) -> None:
    if len(series) < period:
        raise ValueError(f"{name} needs at least {period} values, got {len(series)}")


def sma(series: pd.Series, period: int) -> pd.Series:
    _require(series, period, "SMA")
    return series.rolling(period).mean()


def ema(series: pd.Series, span: int) -> pd.Series:
    return series.ewm(span=span, adjust=False).mean()


def _wilder(values: pd.Series, period: int) -> pd.Series:
    # 首个窗口用简单均值作为种子，之后 alpha = 1 / period
    head = values.iloc[:period]
    seeded = pd.concat(
        [pd.Series([head.mean()], index=[head.index[-1]]), values.iloc[period:]]
    )
    return seeded.ewm(alpha=1 / period, adjust=False).mean()


def rsi(series: pd.Series, period: int = 14) -> pd.Series:
    _require(series, period + 1, "RSI")
    delta = series.diff().iloc[1:]
    avg_gain = _wilder(delta.clip(lower=0), period)
    avg_loss = _wilder(-delta.clip(upper=0), period)
    rs = avg_gain / avg_loss.replace(0, np.nan)
    values = 100 - (100 / (1 + rs))
    flat = np.where(avg_gain > 0, 100.0, 50.0)
    return pd.Series(np.where(avg_loss == 0, flat, values), index=avg_gain.index)


def macd(
    series: pd.Series, fast: int = 12, slow: int = 26, signal: int = 9
) -> tuple[pd.Series, pd.Series, pd.Series]:
    _require(series, slow, "MACD")
    macd_line = ema(series, fast) - ema(series, slow)
    macd_signal = ema(macd_line, signal)
    return macd_line, macd_signal, macd_line - macd_signal


def bollinger(
    series: pd.Series, period: int = 20, num_std: float = 2.0
) -> tuple[pd.Series, pd.Series, pd.Series]:
    _require(series, period, "Bollinger")
    mavg = series.rolling(period).mean()
    std = series.rolling(period).std(ddof=0)
    return mavg, mavg + num_std * std, mavg - num_std * std


def true_range(high: pd.Series, low: pd.Series, close: pd.Series) -> pd.Series:
    prev_close = close.shift(1)
    tr = pd.concat(
        [
            high - low,
            (high - prev_close).abs(),
            (low - prev_close).abs(),
        ],
        axis=1,
    ).max(axis=1)
    return tr.iloc[1:]


def atr(high: pd.Series, low: pd.Series, close: pd.Series, period: int = 14) -> pd.Series:
    _require(close, period + 1, "ATR")
    return _wilder(true_range(high, low, close), period)


def compute_snapshot(
    daily: Sequence[float] | pd.Series,
    weekly: Sequence[float] | pd.Series,
    highs: Optional[Sequence[float] | pd.Series] = None,
    lows: Optional[Sequence[float] | pd.Series] = None,
) -> IndicatorSnapshot:
    close = to_series(daily)
    weekly_close = to_series(weekly)
    # 无高低价时退化为相邻收盘价的变动
    high = to_series(highs) if highs is not None else close
    low = to_series(lows) if lows is not None else close
    if len(high) != len(close) or len(low) != len(close):
        raise ValueError("highs and lows must match the length of the daily closes")

    macd_line, macd_signal, macd_hist = macd(close)
    _, bb_upper, bb_lower = bollinger(close)

    return IndicatorSnapshot(
        price=float(close.iloc[-1]),
        rsi=float(rsi(close).iloc[-1]),
        sma50=float(sma(close, 50).iloc[-1]),
        sma200=float(sma(close, 200).iloc[-1]),
        weekly_close=float(weekly_close.iloc[-1]),
        weekly_sma20=float(sma(weekly_close, 20).iloc[-1]),
        macd_line=float(macd_line.iloc[-1]),
        macd_signal=float(macd_signal.iloc[-1]),
        macd_hist=float(macd_hist.iloc[-1]),
        macd_hist_prev=float(macd_hist.iloc[-2]),
        bb_upper=float(bb_upper.iloc[-1]),
        bb_lower=float(bb_lower.iloc[-1]),
        atr=float(atr(high, low, close, 14).iloc[-1]),
        atr_baseline=float(atr(high, low, close, 50).iloc[-1]),
    )
