"""评分、告警和 API 共用的操作分类。"""

from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    """由归一化分数得出的操作建议。

    取值为接口使用的法文字面量，``display`` 为推送消息中带表情的标签，
    两种写法对应同一成员。
    """

    STRONG_BUY = "ACHAT_FORT"
    BUY = "ACHAT"
    HOLD = "ATTENTE"
    SELL = "VENTE"
    STRONG_SELL = "VENTE_FORTE"

    @property
    def display(self) -> str:
        return _DISPLAY[self]

    @property
    def is_buy(self) -> bool:
        return self in (Action.BUY, Action.STRONG_BUY)

    @property
    def is_sell(self) -> bool:
        return self in (Action.SELL, Action.STRONG_SELL)

    @classmethod
    def parse(cls, text: str) -> "Action":
        """将法文、英文或带表情的标签解析为对应成员。"""
        norm = (text or "").strip()
        # 去掉前缀表情
        if " " in norm:
            norm = norm.split(" ", 1)[1]
        norm = norm.upper()
        for member in cls:
            if norm in (member.value, member.name):
                return member
        raise ValueError(f"unknown action label: {text!r}")


_DISPLAY = {
    Action.STRONG_BUY: "🟢 STRONG_BUY",
    Action.BUY: "🔵 BUY",
    Action.HOLD: "⚪ HOLD",
    Action.SELL: "🟠 SELL",
    Action.STRONG_SELL: "🔴 STRONG_SELL",
}
