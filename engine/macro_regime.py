"""
宏观环境识别与资产类别偏好。

输入：调用方提供的宏观指标（Fed 点阵图、市场定价、ISM PMI、美元动量、M2、非农意外）
输出：风险偏好阶段、周期位置、美元 / 流动性状态，以及各资产类别的偏好分值

纯函数，不改动技术面评分，仅作为报告的附加上下文。
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, List, Optional

FED_EASING_GAP = 0.25
FAVORABLE_BIAS = 10
STRONG_BIAS = 20

_ASSET_LABELS = {
    "equities": "Actions",
    "bonds": "Obligations",
    "commodities": "Matières premières",
    "crypto": "Cryptomonnaies",
    "forex": "Devises",
}


@dataclass(frozen=True)
class MacroInputs:
    fed_dot_plot: float
    market_pricing: float
    ism_pmi: float
    dxy_momentum: float
    m2_growth: float
    nfp_surprise: float


@dataclass(frozen=True)
class MacroRegime:
    phase: str
    cycle_stage: str
    fed_policy: str
    dollar_regime: str
    liquidity: str
    confidence: int

    @property
    def key(self) -> str:
        return f"{self.phase}:{self.cycle_stage}:{self.confidence}"

    def to_dict(self) -> Dict[str, object]:
        return {
            "phase": self.phase,
            "cycleStage": self.cycle_stage,
            "fedPolicy": self.fed_policy,
            "dollarRegime": self.dollar_regime,
            "liquidity": self.liquidity,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class AssetClassBias:
    equities: int = 0
    bonds: int = 0
    commodities: int = 0
    crypto: int = 0
    forex: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class MacroAnalysis:
    regime: MacroRegime
    asset_bias: AssetClassBias
    insights: List[str]

    @property
    def confidence(self) -> int:
        return self.regime.confidence

    def is_favorable_for(self, asset_class: str) -> bool:
        return self.asset_bias.to_dict()[asset_class] > FAVORABLE_BIAS


def macro_signal_score(inputs: MacroInputs) -> int:
    """risk-on 分值减去 risk-off 分值。"""
    risk_on = 0
    risk_off = 0

    # 市场定价的降息幅度超过 Fed 自身预期
    if inputs.market_pricing < inputs.fed_dot_plot - FED_EASING_GAP:
        risk_on += 30

    if inputs.ism_pmi > 52:
        risk_on += 25
    elif inputs.ism_pmi < 48:
        risk_off += 25

    if inputs.dxy_momentum > 2:
        risk_off += 15
    elif inputs.dxy_momentum < -5:
        risk_on += 10

    if inputs.m2_growth > 5:
        risk_on += 20

    if inputs.nfp_surprise > 50000:
        risk_off += 15

    return risk_on - risk_off


def detect_macro_regime(inputs: MacroInputs) -> MacroRegime:
    score = macro_signal_score(inputs)

    if score > 15:
        phase = "RISK_ON"
    elif score < -15:
        phase = "RISK_OFF"
    else:
        phase = "TRANSITION"

    late_signals = sum(
        (
            inputs.ism_pmi > 60,
            inputs.m2_growth > 8,
            inputs.dxy_momentum < -8,
        )
    )
    if late_signals >= 2:
        cycle_stage = "LATE_CYCLE"
    elif inputs.ism_pmi > 52:
        cycle_stage = "MID_CYCLE"
    else:
        cycle_stage = "EARLY_CYCLE"

    if inputs.dxy_momentum > 2:
        dollar_regime = "STRENGTHENING"
    elif inputs.dxy_momentum < -5:
        dollar_regime = "WEAK"
    else:
        dollar_regime = "NEUTRAL"

    easing = inputs.market_pricing < inputs.fed_dot_plot - FED_EASING_GAP
    return MacroRegime(
        phase=phase,
        cycle_stage=cycle_stage,
        fed_policy="CUTTING" if easing else "PAUSING",
        dollar_regime=dollar_regime,
        liquidity="EXPANDING" if inputs.m2_growth > 5 else "NEUTRAL",
        confidence=min(100, abs(score) * 2),
    )


def calculate_asset_class_bias(regime: MacroRegime, today: Optional[date] = None) -> AssetClassBias:
    """按宏观阶段叠加各资产类别的偏好分值。"""
    bias = {name: 0 for name in _ASSET_LABELS}

    if regime.phase == "RISK_ON":
        bias["equities"] += 15
        bias["crypto"] += 20
        bias["commodities"] += 10
        bias["bonds"] -= 5
    elif regime.phase == "RISK_OFF":
        bias["bonds"] += 25
        bias["equities"] -= 15
        bias["crypto"] -= 25

    if regime.cycle_stage == "LATE_CYCLE":
        bias["crypto"] -= 30
        bias["equities"] -= 10
        bias["bonds"] += 15

    if regime.dollar_regime == "WEAK":
        bias["commodities"] += 15
        bias["crypto"] += 10
    elif regime.dollar_regime == "STRENGTHENING":
        bias["forex"] += 20
        bias["commodities"] -= 10

    # 十月季节性
    if (today or date.today()).month == 10:
        bias["crypto"] += 10

    if regime.liquidity == "EXPANDING" and regime.cycle_stage == "LATE_CYCLE":
        bias["crypto"] -= 15

    return AssetClassBias(**bias)


def macro_insights(regime: MacroRegime, bias: AssetClassBias) -> List[str]:
    insights: List[str] = []

    if regime.phase == "RISK_ON":
        insights.append("📈 Environnement RISK-ON : favorable aux actifs risqués (actions, crypto)")
    elif regime.phase == "RISK_OFF":
        insights.append("📉 Environnement RISK-OFF : privilégier la sécurité (obligations, cash)")
    else:
        insights.append("⚖️ Phase de TRANSITION : signaux mixtes, prudence recommandée")

    if regime.cycle_stage == "LATE_CYCLE":
        insights.append("⚠️ LATE CYCLE : réduire progressivement les positions risquées")
    elif regime.cycle_stage == "EARLY_CYCLE":
        insights.append("🌱 EARLY CYCLE : début de cycle, opportunités d'accumulation")
    else:
        insights.append("📊 MID CYCLE : expansion en cours, maintenir l'exposition")

    if regime.fed_policy == "CUTTING":
        insights.append("💰 Fed en mode CUTTING : liquidité favorable")
    else:
        insights.append("🏦 Fed en mode PAUSING : politique monétaire stable")

    if regime.dollar_regime == "STRENGTHENING":
        insights.append("💵 Dollar en renforcement : pression sur les matières premières")
    elif regime.dollar_regime == "WEAK":
        insights.append("💸 Dollar faible : favorable aux matières premières, or et crypto")

    if regime.liquidity == "EXPANDING":
        insights.append("💧 Liquidité en expansion : support structurel des actifs risqués")

    top_name, top_score = max(bias.to_dict().items(), key=lambda item: item[1])
    if top_score > STRONG_BIAS:
        insights.append(f"🎯 Biais sectoriel fort : {_ASSET_LABELS[top_name]} (score: +{top_score})")

    return insights


def analyze_macro_context(inputs: MacroInputs, today: Optional[date] = None) -> MacroAnalysis:
    """识别宏观阶段、计算资产偏好并生成文字解读。"""
    regime = detect_macro_regime(inputs)
    bias = calculate_asset_class_bias(regime, today)
    return MacroAnalysis(regime=regime, asset_bias=bias, insights=macro_insights(regime, bias))
