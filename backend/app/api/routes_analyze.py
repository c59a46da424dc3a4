from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from backend.app.dependencies import get_analysis_service, get_settings
from backend.app.schemas.report import (
    AnalysisReportModel,
    BatchAnalysisRequest,
    BatchAnalysisResponse,
    MacroAnalysisModel,
    MacroInputsModel,
)
from backend.app.services.analyze import AnalysisService
from datahub.fetcher import ProviderError
from datahub.watchlist import load_watchlist
from engine.analyzer import InsufficientDataError
from infra.settings import Settings

router = APIRouter(prefix="/analysis", tags=["analysis"])


def _ticker(symbol: str) -> str:
    ticker = symbol.strip().upper()
    if not ticker:
        raise HTTPException(status_code=400, detail="symbol must not be empty")
    return ticker


@router.get("/{symbol}", response_model=AnalysisReportModel)
async def analyze_symbol_endpoint(
    symbol: str,
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisReportModel:
    try:
        report = await service.analyze_symbol(_ticker(symbol))
    except InsufficientDataError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ProviderError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return AnalysisReportModel.from_report(report)


@router.post("/{symbol}/macro", response_model=AnalysisReportModel)
async def analyze_symbol_macro_endpoint(
    symbol: str,
    payload: MacroInputsModel,
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisReportModel:
    try:
        enriched = await service.analyze_symbol_with_macro(_ticker(symbol), payload.to_inputs())
    except InsufficientDataError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ProviderError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return AnalysisReportModel.from_report(enriched.report, enriched.macro)


@router.post("/batch", response_model=BatchAnalysisResponse)
async def analyze_batch_endpoint(
    payload: BatchAnalysisRequest,
    service: AnalysisService = Depends(get_analysis_service),
    settings: Settings = Depends(get_settings),
) -> BatchAnalysisResponse:
    symbols = payload.symbols or load_watchlist(settings.watchlist_path).enabled_symbols
    if not symbols:
        raise HTTPException(status_code=400, detail="watchlist is empty, add symbols first")
    macro_inputs = payload.macro.to_inputs() if payload.macro is not None else None
    batch = await service.run_batch(symbols, macro_inputs)
    macro = batch.get("macro")
    return BatchAnalysisResponse(
        date=batch["date"],
        reports=[AnalysisReportModel.from_report(report) for report in batch["reports"]],
        errors=batch["errors"],
        macro=MacroAnalysisModel.from_analysis(macro) if macro is not None else None,
    )
