from fastapi import APIRouter

from backend.app.api.routes_alerts import router as alerts_router
from backend.app.api.routes_analyze import router as analyze_router
from backend.app.api.routes_macro import router as macro_router
from backend.app.api.routes_watchlist import router as watchlist_router

router = APIRouter()
router.include_router(analyze_router)
router.include_router(macro_router)
router.include_router(watchlist_router)
router.include_router(alerts_router)

__all__ = ["router"]
