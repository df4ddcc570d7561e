"""
配置管理模块
统一管理系统配置
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass, field
import yaml
from dotenv import load_dotenv


@dataclass
class AlphaVantageConfig:
    """Alpha Vantage 配置"""
    api_key: str = ""
    base_url: str = "https://www.alphavantage.co/query"
    timeout_seconds: float = 10.0
    # 免费版 5 次/分钟：每批 5 个，批次间隔 12 秒
    batch_size: int = 5
    batch_delay_seconds: float = 12.0


@dataclass
class WatchlistConfig:
    """自选股接口配置"""
    rate_limit: int = 60
    rate_window_seconds: float = 60.0


@dataclass
class LoggingConfig:
    """日志配置"""
    level: str = "INFO"
    file: str = ""
    rotation: str = "10 MB"
    retention: str = "1 week"


@dataclass
class Config:
    """
    系统配置

    统一管理所有配置项。
    优先级：环境变量 > 配置文件 > 默认值
    """
    alphavantage: AlphaVantageConfig = field(default_factory=AlphaVantageConfig)
    watchlist: WatchlistConfig = field(default_factory=WatchlistConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    debug: bool = False

    def __post_init__(self):
        """从环境变量加载配置"""
        self.apply_env()

    def apply_env(self) -> None:
        """用环境变量覆盖当前配置（未设置的变量不影响已有值）"""
        # Alpha Vantage，兼容旧变量名 ALPHA_VANTAGE_API_KEY
        self.alphavantage.api_key = (
            os.getenv("ALPHAVANTAGE_API_KEY")
            or os.getenv("ALPHA_VANTAGE_API_KEY")
            or self.alphavantage.api_key
        )

        # 日志
        self.logging.level = os.getenv("LOG_LEVEL", self.logging.level)
        self.logging.file = os.getenv("LOG_FILE", self.logging.file)

        # 调试模式
        debug_env = os.getenv("DEBUG")
        if debug_env is not None:
            self.debug = debug_env.lower() == "true"

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """
        从 YAML 文件加载配置

        Args:
            path: 配置文件路径

        Returns:
            Config 对象
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """
        从字典加载配置

        文件中的值先写入，再由环境变量覆盖。

        Args:
            data: 配置字典

        Returns:
            Config 对象
        """
        config = cls()

        for section in ("alphavantage", "watchlist", "logging"):
            if section in data:
                target = getattr(config, section)
                for key, value in (data[section] or {}).items():
                    if hasattr(target, key):
                        setattr(target, key, value)

        if "debug" in data:
            config.debug = bool(data["debug"])

        config.apply_env()
        return config

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "alphavantage": {
                "api_key": "***" if self.alphavantage.api_key else "",
                "base_url": self.alphavantage.base_url,
                "timeout_seconds": self.alphavantage.timeout_seconds,
                "batch_size": self.alphavantage.batch_size,
                "batch_delay_seconds": self.alphavantage.batch_delay_seconds,
            },
            "watchlist": {
                "rate_limit": self.watchlist.rate_limit,
                "rate_window_seconds": self.watchlist.rate_window_seconds,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
                "rotation": self.logging.rotation,
                "retention": self.logging.retention,
            },
            "debug": self.debug,
        }

    def save_yaml(self, path: str) -> None:
        """保存配置到 YAML 文件"""
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)


def load_config(
    config_path: Optional[str] = None,
    env_file: Optional[str] = None,
) -> Config:
    """
    加载配置

    优先级：环境变量 > 配置文件 > 默认值

    Args:
        config_path: YAML 配置文件路径（默认读取环境变量 STOCKDASH_CONFIG）
        env_file: .env 文件路径

    Returns:
        Config 对象
    """
    # 加载 .env 文件，不覆盖已有环境变量
    if env_file:
        load_dotenv(env_file, override=False)
    else:
        default_env = Path(".env")
        if default_env.exists():
            load_dotenv(default_env, override=False)

    config_path = config_path or os.getenv("STOCKDASH_CONFIG")
    if config_path and Path(config_path).exists():
        return Config.from_yaml(config_path)

    return Config()


# 全局配置实例
_global_config: Optional[Config] = None


def get_config() -> Config:
    """获取全局配置"""
    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config


def set_config(config: Config) -> None:
    """设置全局配置"""
    global _global_config
    _global_config = config


def reset_config() -> None:
    """清空全局配置，下次 get_config() 时重新加载"""
    global _global_config
    _global_config = None
