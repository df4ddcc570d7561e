"""
工具模块
提供配置、日志、时间戳等通用功能
"""

from stockdash.utils.config import Config, get_config, load_config
from stockdash.utils.logger import setup_logger
from stockdash.utils.timestamps import utc_now_iso

__all__ = ["Config", "get_config", "load_config", "setup_logger", "utc_now_iso"]
