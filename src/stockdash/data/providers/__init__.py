"""
行情数据提供者
"""

from stockdash.data.providers.alphavantage import AlphaVantageClient

__all__ = ["AlphaVantageClient"]
