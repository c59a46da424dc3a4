from __future__ import annotations

from fastapi import APIRouter

from backend.app.schemas.report import MacroAnalysisModel, MacroInputsModel
from engine.macro_regime import analyze_macro_context

router = APIRouter(prefix="/macro", tags=["macro"])


@router.post("/regime", response_model=MacroAnalysisModel)
async def macro_regime_endpoint(payload: MacroInputsModel) -> MacroAnalysisModel:
    return MacroAnalysisModel.from_analysis(analyze_macro_context(payload.to_inputs()))
