"""
业务服务模块
"""

from stockdash.services.stock_service import StockService, get_stock_service, parse_float_safe

__all__ = ["StockService", "get_stock_service", "parse_float_safe"]
