"""
Pydantic 模型模块
"""

from stockdash.web.schemas.stocks import (
    APIErrorSchema,
    APIResponse,
    StockQuoteSchema,
    StockSchema,
)
from stockdash.web.schemas.watchlist import (
    WatchlistData,
    WatchlistErrorBody,
    WatchlistErrorResponse,
    WatchlistResponse,
)

__all__ = [
    "APIErrorSchema",
    "APIResponse",
    "StockQuoteSchema",
    "StockSchema",
    "WatchlistData",
    "WatchlistErrorBody",
    "WatchlistErrorResponse",
    "WatchlistResponse",
]
