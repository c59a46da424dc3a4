from .report import (
    AlertRecordModel,
    AnalysisReportModel,
    AssetClassBiasModel,
    BatchAnalysisRequest,
    BatchAnalysisResponse,
    MacroAnalysisModel,
    MacroInputsModel,
    MacroRegimeModel,
    ReportDetails,
    TradeRecommendationModel,
)
from .watchlist import (
    WatchlistEntryModel,
    WatchlistModifyRequest,
    WatchlistResponse,
    WatchlistToggleRequest,
)

__all__ = [
    "AlertRecordModel",
    "AnalysisReportModel",
    "AssetClassBiasModel",
    "BatchAnalysisRequest",
    "BatchAnalysisResponse",
    "MacroAnalysisModel",
    "MacroInputsModel",
    "MacroRegimeModel",
    "ReportDetails",
    "TradeRecommendationModel",
    "WatchlistEntryModel",
    "WatchlistModifyRequest",
    "WatchlistResponse",
    "WatchlistToggleRequest",
]
