from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from backend.app.dependencies import get_analysis_service, get_settings
from backend.app.schemas.watchlist import (
    WatchlistEntryModel,
    WatchlistModifyRequest,
    WatchlistResponse,
    WatchlistToggleRequest,
)
from backend.app.services.analyze import AnalysisService
from datahub.watchlist import Watchlist, load_watchlist, save_watchlist
from infra.settings import Settings

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


def _to_response(watchlist: Watchlist) -> WatchlistResponse:
    return WatchlistResponse(
        entries=[
            WatchlistEntryModel(symbol=entry.symbol, enabled=entry.enabled, added_at=entry.added_at)
            for entry in watchlist.entries
        ],
        updated_at=watchlist.updated_at,
    )


@router.get("", response_model=WatchlistResponse)
async def get_watchlist(settings: Settings = Depends(get_settings)) -> WatchlistResponse:
    return _to_response(load_watchlist(settings.watchlist_path))


@router.post("/add", response_model=WatchlistResponse)
async def add_watchlist_symbol(
    payload: WatchlistModifyRequest,
    settings: Settings = Depends(get_settings),
) -> WatchlistResponse:
    watchlist = load_watchlist(settings.watchlist_path)
    watchlist.add(payload.symbol)
    save_watchlist(watchlist, settings.watchlist_path)
    return _to_response(watchlist)


@router.post("/remove", response_model=WatchlistResponse)
async def remove_watchlist_symbol(
    payload: WatchlistModifyRequest,
    settings: Settings = Depends(get_settings),
    service: AnalysisService = Depends(get_analysis_service),
) -> WatchlistResponse:
    watchlist = load_watchlist(settings.watchlist_path)
    if not watchlist.remove(payload.symbol):
        raise HTTPException(status_code=404, detail=f"{payload.symbol} is not in the watchlist")
    save_watchlist(watchlist, settings.watchlist_path)
    service.invalidate(payload.symbol)
    return _to_response(watchlist)


@router.post("/toggle", response_model=WatchlistResponse)
async def toggle_watchlist_symbol(
    payload: WatchlistToggleRequest,
    settings: Settings = Depends(get_settings),
) -> WatchlistResponse:
    watchlist = load_watchlist(settings.watchlist_path)
    if not watchlist.set_enabled(payload.symbol, payload.enabled):
        raise HTTPException(status_code=404, detail=f"{payload.symbol} is not in the watchlist")
    save_watchlist(watchlist, settings.watchlist_path)
    return _to_response(watchlist)
