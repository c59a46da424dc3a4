"""Shared test fixtures for the scoring engine and its services."""

from __future__ import annotations

import asyncio
from types import MappingProxyType
from typing import List

import numpy as np
import pytest

from datahub.fetcher import PriceHistory, ProviderError
from datahub.indicators import IndicatorSnapshot
from engine.actions import Action
from engine.analyzer import AnalysisReport, interpret_score, score_to_action
from engine.regime import Regime
from engine.rules import build_recommendation


def random_walk(seed: int, n: int = 300, start: float = 100.0, vol: float = 0.015) -> List[float]:
    """Positive geometric random walk, reproducible per seed."""
    rng = np.random.default_rng(seed)
    steps = rng.normal(0.0, vol, n)
    return (start * np.exp(np.cumsum(steps))).tolist()


def make_history(symbol: str, seed: int = 1, daily_points: int = 300) -> PriceHistory:
    daily = random_walk(seed, daily_points)
    return PriceHistory(
        ticker=symbol,
        daily_closes=daily,
        weekly_closes=daily[::5],
        daily_highs=[value * 1.01 for value in daily],
        daily_lows=[value * 0.99 for value in daily],
    )


class FakeFetcher:
    """Serves seeded random walks; BROKEN fails, SHORT lacks history."""

    def __init__(self) -> None:
        self.calls: List[str] = []

    async def __call__(self, symbol: str) -> PriceHistory:
        self.calls.append(symbol)
        await asyncio.sleep(0)
        if symbol == "BROKEN":
            raise ProviderError("no 1d data returned for BROKEN")
        if symbol == "SHORT":
            return make_history(symbol, daily_points=120)
        return make_history(symbol, seed=sum(map(ord, symbol)))


def make_snapshot(**overrides) -> IndicatorSnapshot:
    """Neutral snapshot: every signal off except the ones overridden."""
    values = dict(
        price=100.0,
        rsi=50.0,
        sma50=100.0,
        sma200=100.0,
        weekly_close=100.0,
        weekly_sma20=100.0,
        macd_line=0.0,
        macd_signal=0.0,
        macd_hist=0.0,
        macd_hist_prev=0.0,
        bb_upper=105.0,
        bb_lower=95.0,
        atr=1.0,
        atr_baseline=1.0,
    )
    values.update(overrides)
    return IndicatorSnapshot(**values)


def make_report(symbol: str, score: int, price: float = 100.0, atr: float = 2.0) -> AnalysisReport:
    action = score_to_action(score)
    return AnalysisReport(
        symbol=symbol,
        regime=Regime.TREND,
        rawScore=score * 0.8,
        score=score,
        action=action,
        confidence=abs(score),
        interpretation=interpret_score(score),
        details=MappingProxyType(
            {"price": price, "rsi": 50.0, "trendDaily": "BULL", "trendWeekly": "BULL", "atr": atr}
        ),
        recommendation=build_recommendation(action, price, atr, score),
    )


@pytest.fixture
def flat_daily() -> List[float]:
    return [100.0] * 300


@pytest.fixture
def flat_weekly() -> List[float]:
    return [100.0] * 50


@pytest.fixture
def uptrend_daily() -> List[float]:
    return [100.0 + i for i in range(300)]


@pytest.fixture
def uptrend_weekly() -> List[float]:
    return [50.0 + i for i in range(50)]


@pytest.fixture
def downtrend_daily() -> List[float]:
    return [500.0 - i for i in range(300)]


@pytest.fixture
def downtrend_weekly() -> List[float]:
    return [300.0 - i for i in range(50)]


@pytest.fixture
def strong_buy_report() -> AnalysisReport:
    report = make_report("AAPL", 70)
    assert report.action is Action.STRONG_BUY
    return report
