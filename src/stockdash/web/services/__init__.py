"""
Web 服务层
"""

from stockdash.web.services.watchlist_service import (
    FixedWindowRateLimiter,
    InMemoryWatchlistStore,
    RateLimitDecision,
    WatchlistStore,
)

__all__ = [
    "FixedWindowRateLimiter",
    "InMemoryWatchlistStore",
    "RateLimitDecision",
    "WatchlistStore",
]
