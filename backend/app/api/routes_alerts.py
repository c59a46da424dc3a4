from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from backend.app.dependencies import get_alert_history
from backend.app.schemas.report import AlertRecordModel
from backend.app.services.alerts import AlertHistoryStore

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("/history", response_model=list[AlertRecordModel])
async def list_alert_history(
    limit: int = Query(50, ge=1, le=500, description="Nombre d'alertes"),
    symbol: Optional[str] = Query(None, description="Filtrer par symbole"),
    history: AlertHistoryStore = Depends(get_alert_history),
) -> list[AlertRecordModel]:
    return [AlertRecordModel(**record.to_dict()) for record in history.list(limit=limit, symbol=symbol)]
