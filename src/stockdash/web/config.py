"""
Web 模块配置
"""

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv


def _load_dotenv():
    """
    主动加载项目根目录的 .env 文件，避免依赖 uvicorn 启动方式。

    不覆盖已有环境变量。
    """
    candidates = [
        Path.cwd() / ".env",
        Path(__file__).resolve().parents[3] / ".env",
    ]
    for path in candidates:
        if path.is_file():
            load_dotenv(dotenv_path=path, override=False)
            break


@dataclass
class WebConfig:
    """Web 服务配置"""
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    def __post_init__(self):
        """从环境变量加载配置（先确保 .env 已加载）"""
        _load_dotenv()
        self.host = os.getenv("WEB_HOST", self.host)
        self.port = int(os.getenv("WEB_PORT", str(self.port)))
        self.debug = os.getenv("WEB_DEBUG", "false").lower() == "true"

    @classmethod
    def from_env(cls) -> "WebConfig":
        """从环境变量创建配置"""
        return cls()
