from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class WatchlistEntryModel(BaseModel):
    symbol: str
    enabled: bool
    added_at: datetime


class WatchlistResponse(BaseModel):
    entries: List[WatchlistEntryModel] = Field(default_factory=list)
    updated_at: datetime


class WatchlistModifyRequest(BaseModel):
    symbol: str = Field(..., min_length=1, description="Symbole à modifier, ex. AAPL")


class WatchlistToggleRequest(WatchlistModifyRequest):
    enabled: bool
