"""
输入校验模块
"""

from stockdash.validation.ticker import (
    MAX_TICKER_LENGTH,
    TickerValidation,
    is_valid_ticker,
    normalize_ticker,
    validate_ticker,
)

__all__ = [
    "MAX_TICKER_LENGTH",
    "TickerValidation",
    "is_valid_ticker",
    "normalize_ticker",
    "validate_ticker",
]
