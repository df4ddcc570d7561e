"""
数据层模块
提供错误体系、行情数据模型和上游客户端
"""

from stockdash.data.errors import APIError, APIErrorCode, wrap_error
from stockdash.data.models import Stock, StockQuote, StockSearchResult
from stockdash.data.providers.alphavantage import AlphaVantageClient

__all__ = [
    "APIError",
    "APIErrorCode",
    "wrap_error",
    "Stock",
    "StockQuote",
    "StockSearchResult",
    "AlphaVantageClient",
]
