"""
测试全局配置

每个测试使用独立的全局配置和固定的测试 API key，不读取开发者本地的 .env。
"""

import pytest

from stockdash.utils.config import reset_config

TEST_API_KEY = "test-api-key"


@pytest.fixture(autouse=True)
def api_key_env(monkeypatch):
    """设置测试 API key 并重置全局配置"""
    monkeypatch.setenv("ALPHAVANTAGE_API_KEY", TEST_API_KEY)
    monkeypatch.delenv("ALPHA_VANTAGE_API_KEY", raising=False)
    monkeypatch.delenv("STOCKDASH_CONFIG", raising=False)
    reset_config()
    yield TEST_API_KEY
    reset_config()


@pytest.fixture
def no_api_key(monkeypatch, tmp_path):
    """移除所有 API key 来源（包括当前目录下的 .env）"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ALPHAVANTAGE_API_KEY", raising=False)
    monkeypatch.delenv("ALPHA_VANTAGE_API_KEY", raising=False)
    reset_config()


def make_global_quote(**overrides):
    """构造 GLOBAL_QUOTE 原始响应"""
    quote = {
        "01. symbol": "AAPL",
        "02. open": "150.00",
        "03. high": "152.00",
        "04. low": "149.00",
        "05. price": "151.50",
        "06. volume": "1000000",
        "07. latest trading day": "2023-12-01",
        "08. previous close": "150.50",
        "09. change": "1.00",
        "10. change percent": "0.66%",
    }
    quote.update(overrides)
    return {"Global Quote": quote}


@pytest.fixture
def global_quote():
    """GLOBAL_QUOTE 响应工厂"""
    return make_global_quote
