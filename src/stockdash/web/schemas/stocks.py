"""
行情接口 Pydantic 模型

字段名使用 snake_case，输出 JSON 时使用 camelCase 别名。
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class StockSchema(BaseModel):
    """股票基础信息"""
    model_config = ConfigDict(from_attributes=True)

    symbol: str
    name: str
    price: float
    change: float
    change_percent: float = Field(serialization_alias="changePercent")


class StockQuoteSchema(StockSchema):
    """标准化报价"""
    volume: float
    high: float
    low: float
    open: float
    previous_close: float = Field(serialization_alias="previousClose")
    market_cap: Optional[float] = Field(default=None, serialization_alias="marketCap")
    pe_ratio: Optional[float] = Field(default=None, serialization_alias="peRatio")
    eps: Optional[float] = None
    dividend_yield: Optional[float] = Field(default=None, serialization_alias="dividendYield")
    week_52_high: Optional[float] = Field(default=None, serialization_alias="week52High")
    week_52_low: Optional[float] = Field(default=None, serialization_alias="week52Low")
    avg_volume: Optional[float] = Field(default=None, serialization_alias="avgVolume")
    beta: Optional[float] = None
    last_updated: str = Field(serialization_alias="lastUpdated")


class APIErrorSchema(BaseModel):
    """错误信息"""
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class APIResponse(BaseModel):
    """
    统一响应信封

    成功与失败都使用同一结构：success / data / error / timestamp
    """
    success: bool
    data: Optional[Any] = None
    error: Optional[APIErrorSchema] = None
    timestamp: str
