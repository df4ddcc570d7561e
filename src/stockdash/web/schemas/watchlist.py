"""
自选股接口 Pydantic 模型
"""

from typing import List

from pydantic import BaseModel


class WatchlistData(BaseModel):
    """自选股列表"""
    watchlist: List[str]


class WatchlistResponse(BaseModel):
    """自选股操作成功响应"""
    success: bool = True
    data: WatchlistData


class WatchlistErrorBody(BaseModel):
    """错误信息"""
    message: str


class WatchlistErrorResponse(BaseModel):
    """自选股操作失败响应"""
    success: bool = False
    error: WatchlistErrorBody
