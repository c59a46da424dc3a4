"""Stock Screener 的 FastAPI 入口。"""

from __future__ import annotations

import logging
from typing import Dict

import env  # noqa: F401

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api import router as api_router
from backend.app.dependencies import get_settings
from infra.settings import configure_logging

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings)

app = FastAPI(
    title="Stock Screener API",
    version="1.0.0",
    description="Scoring technique multi-timeframe de la watchlist",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/healthz")
async def health_check() -> Dict[str, str]:
    return {"status": "ok"}


app.include_router(api_router)
app.include_router(api_router, prefix="/api")
