"""基于日线均线的市场状态划分。"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

import pandas as pd

from datahub.indicators import sma, to_series

SLOPE_LOOKBACK = 10


class Regime(str, Enum):
    TREND = "TREND"
    RANGE = "RANGE"


def detect_regime(daily: Sequence[float] | pd.Series) -> Regime:
    """SMA50 位于 SMA200 之上且仍在上升时为 TREND，否则为 RANGE。

    调用方需保证至少 200 + SLOPE_LOOKBACK 根收盘价。
    """
    close = to_series(daily)
    sma50 = sma(close, 50)
    sma200 = sma(close, 200)
    slope = sma50.iloc[-1] - sma50.iloc[-1 - SLOPE_LOOKBACK]
    if sma50.iloc[-1] > sma200.iloc[-1] and slope > 0:
        return Regime.TREND
    return Regime.RANGE
