"""
行情服务层
把上游原始报价转换为标准化 StockQuote，并按免费版限流节奏批量获取
"""

import asyncio
import math
from typing import Any, Callable, Dict, List, Optional

from loguru import logger

from stockdash.data.errors import APIError, APIErrorCode
from stockdash.data.models import Stock, StockQuote
from stockdash.data.providers.alphavantage import AlphaVantageClient
from stockdash.utils.config import get_config
from stockdash.utils.timestamps import utc_now_iso

# 上游用于表示空值的字符串
_NULL_STRINGS = {"null", "None"}


def parse_float_safe(value: Any, fallback: float = 0.0) -> float:
    """
    安全解析数值

    缺失、"null"、"None"、无法解析或非有限值时返回 fallback。
    """
    if value is None or (isinstance(value, str) and (not value or value in _NULL_STRINGS)):
        return fallback
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        logger.debug(f"无法解析的数值: {value!r}")
        return fallback
    if not math.isfinite(parsed):
        logger.debug(f"无法解析的数值: {value!r}")
        return fallback
    return parsed


class StockService:
    """
    行情数据服务

    每次操作通过 client_factory 创建新的客户端，操作结束即关闭，
    服务实例本身不持有跨请求状态。
    """

    def __init__(
        self,
        client_factory: Optional[Callable[[], AlphaVantageClient]] = None,
        batch_size: Optional[int] = None,
        batch_delay: Optional[float] = None,
    ):
        """
        Args:
            client_factory: 创建上游客户端的工厂，默认 AlphaVantageClient
            batch_size: 每批并发请求数（默认取配置，5）
            batch_delay: 批次之间的等待秒数（默认取配置，12 秒）

        Raises:
            ValueError: batch_size 不是正整数
        """
        config = get_config().alphavantage
        self.client_factory = client_factory or AlphaVantageClient
        self.batch_size = config.batch_size if batch_size is None else batch_size
        self.batch_delay = config.batch_delay_seconds if batch_delay is None else batch_delay

        if not isinstance(self.batch_size, int) or self.batch_size < 1:
            raise ValueError(f"batch_size 必须为正整数: {self.batch_size!r}")

    async def get_quote(self, symbol: str) -> StockQuote:
        """
        获取单个标准化报价

        Args:
            symbol: 资产代码

        Returns:
            StockQuote
        """
        try:
            async with self.client_factory() as client:
                response = await client.fetch_quote(symbol)
            return self._transform_quote(response, symbol)
        except APIError:
            raise
        except Exception as e:
            logger.exception(f"获取 {symbol} 报价时出现未预期错误")
            raise APIError(
                APIErrorCode.UNKNOWN_ERROR,
                "Failed to fetch stock quote",
                details={"original_error": e},
            ) from e

    async def get_multiple_quotes(self, symbols: List[str]) -> List[StockQuote]:
        """
        批量获取报价

        按 batch_size 分批；批内并发，等待全部完成，单个失败不影响同批其他请求；
        批次之间等待 batch_delay 秒（最后一批之后不等待）。
        只要有成功结果就返回成功部分，全部失败时抛出 UNKNOWN_ERROR。

        Args:
            symbols: 资产代码列表

        Returns:
            成功获取的报价，顺序与输入一致
        """
        quotes: List[StockQuote] = []
        errors: List[Dict[str, Any]] = []

        total_batches = math.ceil(len(symbols) / self.batch_size)

        for batch_index, start in enumerate(range(0, len(symbols), self.batch_size)):
            batch = symbols[start:start + self.batch_size]
            logger.info(f"获取报价批次 {batch_index + 1}/{total_batches}: {', '.join(map(str, batch))}")

            results = await asyncio.gather(
                *(self.get_quote(symbol) for symbol in batch),
                return_exceptions=True,
            )

            for symbol, result in zip(batch, results):
                if isinstance(result, StockQuote):
                    quotes.append(result)
                    continue
                if not isinstance(result, Exception):
                    # CancelledError 等非 Exception 不吞掉
                    raise result

                error = result if isinstance(result, APIError) else APIError(
                    APIErrorCode.UNKNOWN_ERROR,
                    str(result) or "Unknown error",
                )
                logger.warning(f"{symbol} 报价获取失败: [{error.code.value}] {error.message}")
                errors.append({"symbol": symbol, "error": error})

            if start + self.batch_size < len(symbols):
                logger.debug(f"批次间等待 {self.batch_delay:g} 秒")
                await self._delay(self.batch_delay)

        if errors and not quotes:
            raise APIError(
                APIErrorCode.UNKNOWN_ERROR,
                "Failed to fetch any stock quotes",
                details={"errors": errors},
            )

        if errors:
            logger.info(f"批量报价完成: 成功 {len(quotes)}，失败 {len(errors)}")

        return quotes

    async def search_stocks(self, keywords: str) -> List[Stock]:
        """
        搜索股票

        搜索结果不含实时价格，价格字段均为 0。

        Args:
            keywords: 搜索关键词

        Returns:
            Stock 列表
        """
        try:
            async with self.client_factory() as client:
                results = await client.search_symbol(keywords)
        except APIError:
            raise
        except Exception as e:
            logger.exception(f"搜索 {keywords!r} 时出现未预期错误")
            raise APIError(
                APIErrorCode.UNKNOWN_ERROR,
                "Failed to search stocks",
                details={"original_error": e},
            ) from e

        return [Stock(symbol=r.symbol, name=r.name) for r in results]

    def _transform_quote(self, response: Dict[str, Any], symbol: str) -> StockQuote:
        """
        GLOBAL_QUOTE 原始响应 → StockQuote

        "Global Quote" 缺失时报错；为空字典时返回全 0 报价。
        """
        quote = response.get("Global Quote")
        if quote is None:
            raise APIError(
                APIErrorCode.INVALID_SYMBOL,
                f"No quote data found for symbol: {symbol}",
            )

        # 去掉百分号，如 "1.5%" → 1.5
        change_percent_str = str(quote.get("10. change percent") or "0%")
        change_percent = parse_float_safe(change_percent_str.strip().replace("%", ""))

        return StockQuote(
            symbol=quote.get("01. symbol") or symbol,
            # GLOBAL_QUOTE 不提供公司名称，用代码代替
            name=symbol,
            price=parse_float_safe(quote.get("05. price")),
            change=parse_float_safe(quote.get("09. change")),
            change_percent=change_percent,
            volume=parse_float_safe(quote.get("06. volume")),
            high=parse_float_safe(quote.get("03. high")),
            low=parse_float_safe(quote.get("04. low")),
            open=parse_float_safe(quote.get("02. open")),
            previous_close=parse_float_safe(quote.get("08. previous close")),
            last_updated=quote.get("07. latest trading day") or utc_now_iso(),
        )

    async def _delay(self, seconds: float) -> None:
        """批次间等待"""
        await asyncio.sleep(seconds)


def get_stock_service() -> StockService:
    """为每个请求创建新的服务实例"""
    return StockService()
