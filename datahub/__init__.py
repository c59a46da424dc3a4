"""Stock Screener 的数据获取、指标与缓存工具。"""

from .cache import TTLCache  # noqa: F401
from .fetcher import PriceHistory, ProviderError, fetch_candles, get_price_history  # noqa: F401
from .indicators import IndicatorSnapshot, compute_snapshot  # noqa: F401
from .watchlist import Watchlist, WatchlistEntry, load_watchlist, save_watchlist  # noqa: F401

__all__ = [
    "IndicatorSnapshot",
    "PriceHistory",
    "ProviderError",
    "TTLCache",
    "Watchlist",
    "WatchlistEntry",
    "compute_snapshot",
    "fetch_candles",
    "get_price_history",
    "load_watchlist",
    "save_watchlist",
]
