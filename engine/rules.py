"""将动作与波动率转换为交易计划的规则引擎。"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

from .actions import Action

STOP_ATR_MULTIPLE = 1.5
STRONG_SIGNAL_SCORE = 60
STRONG_RISK_REWARD = 3
BASE_RISK_REWARD = 2


@dataclass(frozen=True)
class TradeRecommendation:
    side: str
    entry: Optional[float] = None
    stopLoss: Optional[float] = None
    takeProfit: Optional[float] = None
    riskReward: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


NO_TRADE = TradeRecommendation(side="NONE")


def round_price(value: float) -> float:
    """按浮点数的精确值保留两位小数，恰好一半时远离零。"""
    return float(Decimal(float(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def build_recommendation(action: Action, price: float, atr: float, score: int) -> TradeRecommendation:
    """把动作、现价、ATR 与得分转为入场 / 止损 / 止盈。"""
    if not (action.is_buy or action.is_sell):
        return NO_TRADE

    is_long = action.is_buy
    risk_reward = STRONG_RISK_REWARD if abs(score) >= STRONG_SIGNAL_SCORE else BASE_RISK_REWARD

    entry = price
    stop = price - atr * STOP_ATR_MULTIPLE if is_long else price + atr * STOP_ATR_MULTIPLE
    risk = abs(entry - stop)
    target = entry + risk * risk_reward if is_long else entry - risk * risk_reward

    return TradeRecommendation(
        side="LONG" if is_long else "SHORT",
        entry=round_price(entry),
        stopLoss=round_price(stop),
        takeProfit=round_price(target),
        riskReward=risk_reward,
    )
