"""
Web 模块
提供行情与自选股 API 服务
"""

from stockdash.web.app import create_app
from stockdash.web.config import WebConfig

__all__ = [
    "create_app",
    "WebConfig",
]
