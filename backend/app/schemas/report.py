from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from engine.analyzer import AnalysisReport
from engine.macro_regime import MacroAnalysis, MacroInputs


class ReportDetails(BaseModel):
    price: float
    rsi: float
    trendDaily: Literal["BULL", "BEAR"]
    trendWeekly: Literal["BULL", "BEAR"]
    atr: float


class TradeRecommendationModel(BaseModel):
    side: Literal["LONG", "SHORT", "NONE"]
    entry: Optional[float] = None
    stopLoss: Optional[float] = None
    takeProfit: Optional[float] = None
    riskReward: Optional[int] = None


class MacroInputsModel(BaseModel):
    fedDotPlot: float = Field(..., description="Taux directeur médian du dot plot (%)")
    marketPricing: float = Field(..., description="Taux anticipé par le marché (%)")
    ismPmi: float
    dxyMomentum: float = Field(..., description="Variation du DXY (%)")
    m2Growth: float = Field(..., description="Croissance annuelle de M2 (%)")
    nfpSurprise: float = Field(0.0, description="Écart NFP publié vs consensus")

    def to_inputs(self) -> MacroInputs:
        return MacroInputs(
            fed_dot_plot=self.fedDotPlot,
            market_pricing=self.marketPricing,
            ism_pmi=self.ismPmi,
            dxy_momentum=self.dxyMomentum,
            m2_growth=self.m2Growth,
            nfp_surprise=self.nfpSurprise,
        )


class MacroRegimeModel(BaseModel):
    phase: Literal["RISK_ON", "RISK_OFF", "TRANSITION"]
    cycleStage: Literal["EARLY_CYCLE", "MID_CYCLE", "LATE_CYCLE"]
    fedPolicy: Literal["CUTTING", "PAUSING"]
    dollarRegime: Literal["STRENGTHENING", "WEAK", "NEUTRAL"]
    liquidity: Literal["EXPANDING", "NEUTRAL"]
    confidence: int = Field(..., ge=0, le=100)


class AssetClassBiasModel(BaseModel):
    equities: int = 0
    bonds: int = 0
    commodities: int = 0
    crypto: int = 0
    forex: int = 0


class MacroAnalysisModel(BaseModel):
    regime: MacroRegimeModel
    assetBias: AssetClassBiasModel
    insights: List[str] = Field(default_factory=list)
    confidence: int

    @classmethod
    def from_analysis(cls, macro: MacroAnalysis) -> "MacroAnalysisModel":
        return cls(
            regime=MacroRegimeModel(**macro.regime.to_dict()),
            assetBias=AssetClassBiasModel(**macro.asset_bias.to_dict()),
            insights=list(macro.insights),
            confidence=macro.confidence,
        )


class AnalysisReportModel(BaseModel):
    symbol: str
    regime: Literal["TREND", "RANGE"]
    rawScore: float
    score: int = Field(..., ge=-100, le=100)
    action: Literal["ACHAT_FORT", "ACHAT", "ATTENTE", "VENTE", "VENTE_FORTE"]
    actionLabel: str = Field(..., description="Libellé décoré, ex. 🟢 STRONG_BUY")
    confidence: int = Field(..., ge=0, le=100)
    interpretation: str
    details: ReportDetails
    recommendation: TradeRecommendationModel
    macroContext: Optional[MacroRegimeModel] = None
    assetBias: Optional[AssetClassBiasModel] = None
    macroInsights: Optional[List[str]] = None

    @classmethod
    def from_report(
        cls,
        report: AnalysisReport,
        macro: Optional[MacroAnalysis] = None,
    ) -> "AnalysisReportModel":
        payload = report.to_dict()
        if macro is not None:
            payload["macroContext"] = macro.regime.to_dict()
            payload["assetBias"] = macro.asset_bias.to_dict()
            payload["macroInsights"] = list(macro.insights)
        return cls(actionLabel=report.action.display, **payload)


class BatchAnalysisRequest(BaseModel):
    symbols: Optional[List[str]] = Field(None, description="Symboles à analyser ; défaut : watchlist active")
    macro: Optional[MacroInputsModel] = None


class BatchAnalysisResponse(BaseModel):
    date: datetime
    reports: List[AnalysisReportModel] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    macro: Optional[MacroAnalysisModel] = None


class AlertRecordModel(BaseModel):
    symbol: str
    action: str
    score: int
    price: Optional[float] = None
    sent_at: datetime
    date_sent: str
