"""信号评分逻辑：综合市场状态、趋势、动量与波动率。"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence

import pandas as pd

from datahub.indicators import IndicatorSnapshot, compute_snapshot, to_series

from .actions import Action
from .regime import Regime, detect_regime
from .rules import NO_TRADE, TradeRecommendation, build_recommendation

MIN_DAILY_POINTS = 250
MIN_WEEKLY_POINTS = 40

STRONG_THRESHOLD = 60
ACTION_THRESHOLD = 25


class InsufficientDataError(ValueError):
    """行情长度不足以评分时抛出。"""

    def __init__(self, daily_count: int, weekly_count: int) -> None:
        self.daily_count = daily_count
        self.weekly_count = weekly_count
        super().__init__(
            f"Insufficient data ({daily_count}/{MIN_DAILY_POINTS} daily, "
            f"{weekly_count}/{MIN_WEEKLY_POINTS} weekly)"
        )


@dataclass(frozen=True)
class ScoreWeights:
    """各信号的固定贡献分值及归一化除数（经验值）。"""

    rsi_extreme: float = 20
    rsi_mild: float = 10
    trend: float = 15
    trend_agreement: float = 10
    macd_cross: float = 10
    macd_momentum: float = 5
    bollinger: float = 10
    volatility_spike: float = 10
    volatility_ratio: float = 1.5
    divisor: float = 80


DEFAULT_WEIGHTS = ScoreWeights()


@dataclass(frozen=True)
class AnalysisReport:
    symbol: str
    regime: Regime
    rawScore: float
    score: int
    action: Action
    confidence: int
    interpretation: str
    details: Mapping[str, Any]
    recommendation: TradeRecommendation = NO_TRADE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "regime": self.regime.value,
            "rawScore": self.rawScore,
            "score": self.score,
            "action": self.action.value,
            "confidence": self.confidence,
            "interpretation": self.interpretation,
            "details": dict(self.details),
            "recommendation": self.recommendation.to_dict(),
        }


def rsi_points(rsi: float, weights: ScoreWeights = DEFAULT_WEIGHTS) -> float:
    """RSI 贡献分，仅在 RANGE 状态下计入。"""
    if rsi < 30:
        return weights.rsi_extreme
    if rsi < 40:
        return weights.rsi_mild
    if rsi > 70:
        return -weights.rsi_extreme
    if rsi > 60:
        return -weights.rsi_mild
    return 0.0


def score_signals(
    snapshot: IndicatorSnapshot,
    regime: Regime,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> float:
    """累加各信号的固定贡献，得到原始分。"""
    raw = 0.0

    if regime is Regime.RANGE:
        raw += rsi_points(snapshot.rsi, weights)

    trend_daily = snapshot.trend_daily
    trend_weekly = snapshot.trend_weekly
    raw += weights.trend if trend_daily == "BULL" else -weights.trend
    raw += weights.trend if trend_weekly == "BULL" else -weights.trend
    if trend_daily == trend_weekly:
        raw += weights.trend_agreement if trend_daily == "BULL" else -weights.trend_agreement

    raw += weights.macd_cross if snapshot.macd_line > snapshot.macd_signal else -weights.macd_cross
    if snapshot.macd_hist > snapshot.macd_hist_prev:
        raw += weights.macd_momentum
    elif snapshot.macd_hist < snapshot.macd_hist_prev:
        raw -= weights.macd_momentum

    price = snapshot.price
    if regime is Regime.TREND:
        if price > snapshot.bb_upper and trend_daily == "BULL":
            raw += weights.bollinger
        if price < snapshot.bb_lower and trend_daily == "BEAR":
            raw -= weights.bollinger
    else:
        if price < snapshot.bb_lower and snapshot.rsi < 35:
            raw += weights.bollinger
        if price > snapshot.bb_upper and snapshot.rsi > 65:
            raw -= weights.bollinger

    if snapshot.atr > snapshot.atr_baseline * weights.volatility_ratio:
        raw -= weights.volatility_spike

    return raw


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_score(raw: float, divisor: float = DEFAULT_WEIGHTS.divisor) -> int:
    scaled = _round_half_up(raw / divisor * 100)
    return max(-100, min(100, scaled))


def score_to_action(score: int) -> Action:
    if score >= STRONG_THRESHOLD:
        return Action.STRONG_BUY
    if score >= ACTION_THRESHOLD:
        return Action.BUY
    if score <= -STRONG_THRESHOLD:
        return Action.STRONG_SELL
    if score <= -ACTION_THRESHOLD:
        return Action.SELL
    return Action.HOLD


def interpret_score(score: int) -> str:
    if score >= STRONG_THRESHOLD:
        return "Setup premium : tendance et momentum alignés, risque maîtrisé."
    if score >= ACTION_THRESHOLD:
        return "Setup favorable : biais positif, attendre une bonne exécution."
    if score > -ACTION_THRESHOLD:
        return "Zone neutre : pas d'edge exploitable."
    if score > -STRONG_THRESHOLD:
        return "Marché fragile : risque dominant."
    return "Configuration défavorable : biais négatif fort."


def evaluate(
    symbol: str,
    daily: Sequence[float] | pd.Series,
    weekly: Sequence[float] | pd.Series,
    highs: Optional[Sequence[float] | pd.Series] = None,
    lows: Optional[Sequence[float] | pd.Series] = None,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> AnalysisReport:
    """根据日线与周线收盘价为单个标的评分。"""
    daily_close = to_series(daily)
    weekly_close = to_series(weekly)
    if len(daily_close) < MIN_DAILY_POINTS or len(weekly_close) < MIN_WEEKLY_POINTS:
        raise InsufficientDataError(len(daily_close), len(weekly_close))

    regime = detect_regime(daily_close)
    snapshot = compute_snapshot(daily_close, weekly_close, highs, lows)

    raw = score_signals(snapshot, regime, weights)
    score = normalize_score(raw, weights.divisor)
    action = score_to_action(score)

    return AnalysisReport(
        symbol=symbol,
        regime=regime,
        rawScore=raw,
        score=score,
        action=action,
        confidence=abs(score),
        interpretation=interpret_score(score),
        details=MappingProxyType(
            {
                "price": snapshot.price,
                "rsi": snapshot.rsi,
                "trendDaily": snapshot.trend_daily,
                "trendWeekly": snapshot.trend_weekly,
                "atr": snapshot.atr,
            }
        ),
        recommendation=build_recommendation(action, snapshot.price, snapshot.atr, score),
    )
