"""选股评分引擎组件。"""

from .actions import Action  # noqa: F401
from .analyzer import (  # noqa: F401
    DEFAULT_WEIGHTS,
    AnalysisReport,
    InsufficientDataError,
    ScoreWeights,
    evaluate,
    interpret_score,
    normalize_score,
    rsi_points,
    score_signals,
    score_to_action,
)
from .macro_regime import (  # noqa: F401
    AssetClassBias,
    MacroAnalysis,
    MacroInputs,
    MacroRegime,
    analyze_macro_context,
    calculate_asset_class_bias,
    detect_macro_regime,
)
from .regime import Regime, detect_regime  # noqa: F401
from .report import render_alert, render_digest  # noqa: F401
from .rules import TradeRecommendation, build_recommendation  # noqa: F401

__all__ = [
    "Action",
    "AnalysisReport",
    "AssetClassBias",
    "DEFAULT_WEIGHTS",
    "InsufficientDataError",
    "MacroAnalysis",
    "MacroInputs",
    "MacroRegime",
    "Regime",
    "ScoreWeights",
    "TradeRecommendation",
    "analyze_macro_context",
    "build_recommendation",
    "calculate_asset_class_bias",
    "detect_macro_regime",
    "detect_regime",
    "evaluate",
    "interpret_score",
    "normalize_score",
    "render_alert",
    "render_digest",
    "rsi_points",
    "score_signals",
    "score_to_action",
]
