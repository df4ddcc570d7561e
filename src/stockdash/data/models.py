"""
数据模型模块
定义标准化的行情数据结构
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Stock:
    """
    股票基础信息

    搜索结果只有代码和名称，价格字段为 0。
    """
    symbol: str
    name: str
    price: float = 0.0
    change: float = 0.0
    change_percent: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return asdict(self)


@dataclass(frozen=True)
class StockQuote:
    """
    标准化报价

    基础数值字段缺失或无法解析时为 0；
    扩展字段（市值、市盈率等）GLOBAL_QUOTE 接口不提供，始终为 None。
    """
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    volume: float
    high: float
    low: float
    open: float
    previous_close: float
    last_updated: str
    market_cap: Optional[float] = None
    pe_ratio: Optional[float] = None
    eps: Optional[float] = None
    dividend_yield: Optional[float] = None
    week_52_high: Optional[float] = None
    week_52_low: Optional[float] = None
    avg_volume: Optional[float] = None
    beta: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return asdict(self)


@dataclass(frozen=True)
class StockSearchResult:
    """代码搜索结果"""
    symbol: str
    name: str
    type: str = ""
    region: str = ""
    market_open: str = ""
    market_close: str = ""
    timezone: str = ""
    currency: str = ""
    match_score: Optional[float] = None

    @classmethod
    def from_alphavantage(cls, match: Dict[str, Any]) -> "StockSearchResult":
        """从 SYMBOL_SEARCH 的 bestMatches 条目创建"""
        score = match.get("9. matchScore")
        try:
            match_score = float(score) if score is not None else None
        except (TypeError, ValueError):
            match_score = None

        return cls(
            symbol=match.get("1. symbol", ""),
            name=match.get("2. name", ""),
            type=match.get("3. type", ""),
            region=match.get("4. region", ""),
            market_open=match.get("5. marketOpen", ""),
            market_close=match.get("6. marketClose", ""),
            timezone=match.get("7. timezone", ""),
            currency=match.get("8. currency", ""),
            match_score=match_score,
        )

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return asdict(self)
