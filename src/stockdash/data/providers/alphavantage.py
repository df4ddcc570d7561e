"""
Alpha Vantage 行情客户端
每个逻辑操作只发起一次上游请求，并把所有可区分的失败归入 APIError
"""

import asyncio
import os
import re
from typing import Any, Dict, List, Optional

import aiohttp
from loguru import logger

from stockdash.data.errors import APIError, APIErrorCode, wrap_error
from stockdash.data.models import StockSearchResult
from stockdash.utils.config import get_config


class AlphaVantageClient:
    """
    Alpha Vantage 客户端

    支持 GLOBAL_QUOTE 实时报价与 SYMBOL_SEARCH 代码搜索。
    无重试、无缓存、无限流：批量节奏由 StockService 控制。

    API 文档: https://www.alphavantage.co/documentation/
    """

    BASE_URL = "https://www.alphavantage.co/query"
    DEFAULT_TIMEOUT = 10.0

    # 限流提示字段：旧版返回 Note，新版返回 Information
    RATE_LIMIT_KEYS = ("Note", "Information")

    _SYMBOL_PATTERN = re.compile(r"[A-Za-z0-9]+")

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        初始化客户端

        Args:
            api_key: API 密钥（可通过环境变量 ALPHAVANTAGE_API_KEY 或配置文件设置）
            base_url: 接口地址，默认使用官方地址
            timeout: 单次请求超时秒数，默认 10 秒
            session: 外部传入的 HTTP 会话（由调用方负责关闭）

        Raises:
            APIError: 未配置 API key（INVALID_API_KEY），不会发起任何网络请求
        """
        config = get_config().alphavantage

        self.api_key = (
            api_key
            or os.getenv("ALPHAVANTAGE_API_KEY")
            or os.getenv("ALPHA_VANTAGE_API_KEY")
            or config.api_key
        )
        if not self.api_key:
            raise APIError(APIErrorCode.INVALID_API_KEY, "Alpha Vantage API key is required")

        self.base_url = base_url or config.base_url or self.BASE_URL
        self.timeout = aiohttp.ClientTimeout(total=timeout or config.timeout_seconds or self.DEFAULT_TIMEOUT)

        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "AlphaVantageClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """获取或创建 HTTP 会话"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """关闭自己创建的 HTTP 会话"""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def _make_request(self, params: Dict[str, str]) -> Dict[str, Any]:
        """
        发送 API 请求

        超时、网络错误、非 2xx 状态、JSON 解析失败统一转换为 NETWORK_ERROR；
        已是 APIError 的异常原样抛出。

        Args:
            params: 请求参数（不含 apikey）

        Returns:
            响应数据
        """
        query = {**params, "apikey": self.api_key}

        try:
            session = await self._get_session()
            logger.debug(f"请求 Alpha Vantage: function={params.get('function')}")

            async with session.get(self.base_url, params=query, timeout=self.timeout) as response:
                if not 200 <= response.status < 300:
                    logger.error(f"API 请求失败: {response.status}")
                    raise APIError(
                        APIErrorCode.NETWORK_ERROR,
                        f"HTTP error! status: {response.status}",
                        details={"status": response.status},
                    )

                data = await response.json(content_type=None)

        except APIError:
            raise
        except asyncio.TimeoutError as e:
            logger.error(f"API 请求超时 ({self.timeout.total}s)")
            raise APIError(
                APIErrorCode.NETWORK_ERROR,
                f"Request timed out after {self.timeout.total:g}s",
                details={"original_error": e},
            ) from e
        except Exception as e:
            logger.error(f"网络请求错误: {e!r}")
            raise wrap_error(e, APIErrorCode.NETWORK_ERROR, str(e) or "Network request failed") from e

        if not isinstance(data, dict):
            raise APIError(APIErrorCode.NETWORK_ERROR, "Unexpected response format from Alpha Vantage")

        self._raise_for_upstream_error(data)
        return data

    def _raise_for_upstream_error(self, data: Dict[str, Any]) -> None:
        """检查响应体中的错误字段"""
        error_message = data.get("Error Message")
        if error_message:
            logger.error(f"API 错误: {error_message}")
            raise APIError(APIErrorCode.INVALID_SYMBOL, error_message)

        for key in self.RATE_LIMIT_KEYS:
            note = data.get(key)
            if note:
                logger.warning(f"API 限流: {note}")
                raise APIError(
                    APIErrorCode.API_LIMIT_EXCEEDED,
                    "API call frequency limit exceeded",
                    details={"note": note},
                )

    async def fetch_quote(self, symbol: str) -> Dict[str, Any]:
        """
        获取实时报价（原始响应）

        Args:
            symbol: 资产代码，只允许字母和数字

        Returns:
            上游原始响应，包含非空的 "Global Quote"
        """
        if not isinstance(symbol, str) or not self._SYMBOL_PATTERN.fullmatch(symbol):
            raise APIError(
                APIErrorCode.INVALID_SYMBOL,
                "Symbol must contain only alphanumeric characters",
            )

        params = {
            "function": "GLOBAL_QUOTE",
            "symbol": symbol.upper(),
        }

        data = await self._make_request(params)

        if not data.get("Global Quote"):
            logger.warning(f"GLOBAL_QUOTE 未返回 {symbol} 数据")
            raise APIError(APIErrorCode.INVALID_SYMBOL, f"No data found for symbol: {symbol}")

        return data

    async def search_symbol(self, keywords: str) -> List[StockSearchResult]:
        """
        搜索资产代码

        Args:
            keywords: 搜索关键词

        Returns:
            匹配的资产列表，无匹配时为空列表
        """
        params = {
            "function": "SYMBOL_SEARCH",
            "keywords": keywords,
        }

        data = await self._make_request(params)

        matches = data.get("bestMatches") or []
        return [StockSearchResult.from_alphavantage(m) for m in matches]

    def __repr__(self):
        return "AlphaVantageClient(api_key=***)"
