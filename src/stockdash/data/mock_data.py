"""
仪表盘演示数据
"""

from typing import Any, Dict, List

from stockdash.data.models import Stock

MOCK_STOCKS: List[Stock] = [
    Stock(symbol="AAPL", name="Apple Inc.", price=150.0, change=2.5, change_percent=1.69),
    Stock(symbol="GOOGL", name="Alphabet Inc.", price=2800.0, change=-15.0, change_percent=-0.53),
    Stock(symbol="MSFT", name="Microsoft Corporation", price=300.0, change=1.2, change_percent=0.4),
    Stock(symbol="AMZN", name="Amazon.com, Inc.", price=3400.0, change=25.5, change_percent=0.76),
    Stock(symbol="TSLA", name="Tesla, Inc.", price=700.0, change=-5.0, change_percent=-0.71),
]

MARKET_INDICES: List[Dict[str, Any]] = [
    {"symbol": "S&P 500", "change_percent": 0.23},
    {"symbol": "NASDAQ", "change_percent": -0.15},
    {"symbol": "DOW", "change_percent": 0.05},
]
