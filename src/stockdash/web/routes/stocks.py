"""
行情 API 路由
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from loguru import logger

from stockdash.data.errors import APIError, APIErrorCode
from stockdash.services.stock_service import StockService, get_stock_service
from stockdash.validation.ticker import normalize_ticker, validate_ticker
from stockdash.web.errors import error_response, success_response, unexpected_error_response
from stockdash.web.schemas.stocks import StockQuoteSchema, StockSchema

router = APIRouter()

QUOTE_CACHE_CONTROL = "public, s-maxage=10, stale-while-revalidate=30"


def _invalid_symbol(message: str) -> JSONResponse:
    return error_response(APIError(APIErrorCode.INVALID_SYMBOL, message or "Invalid ticker symbol"))


@router.get("/quote/{symbol}")
async def get_quote(
    symbol: str,
    service: StockService = Depends(get_stock_service),
) -> JSONResponse:
    """
    获取单个股票实时报价

    成功时带 Cache-Control 头，允许 CDN 缓存 10 秒
    """
    validation = validate_ticker(symbol)
    if not validation.is_valid:
        return _invalid_symbol(validation.error)

    try:
        quote = await service.get_quote(normalize_ticker(symbol))
    except APIError as e:
        logger.warning(f"获取 {symbol} 报价失败: [{e.code.value}] {e.message}")
        return error_response(e)
    except Exception:
        logger.exception(f"获取 {symbol} 报价时出现未预期错误")
        return unexpected_error_response()

    return success_response(
        StockQuoteSchema.model_validate(quote).model_dump(by_alias=True),
        headers={"Cache-Control": QUOTE_CACHE_CONTROL},
    )


@router.get("/quotes")
async def get_quotes(
    symbols: str = Query(default="", description="逗号分隔的股票代码，如 AAPL,MSFT"),
    service: StockService = Depends(get_stock_service),
) -> JSONResponse:
    """
    批量获取报价

    每 5 个一批，批次间隔 12 秒；部分失败时只返回成功的报价
    """
    requested = symbols.split(",")
    for raw in requested:
        validation = validate_ticker(raw)
        if not validation.is_valid:
            return _invalid_symbol(validation.error)

    try:
        quotes = await service.get_multiple_quotes([normalize_ticker(raw) for raw in requested])
    except APIError as e:
        logger.warning(f"批量报价失败: [{e.code.value}] {e.message}")
        return error_response(e)
    except Exception:
        logger.exception("批量报价时出现未预期错误")
        return unexpected_error_response()

    return success_response(
        [StockQuoteSchema.model_validate(q).model_dump(by_alias=True) for q in quotes],
        headers={"Cache-Control": QUOTE_CACHE_CONTROL},
    )


@router.get("/search")
async def search_stocks(
    keywords: str = Query(default="", description="搜索关键词"),
    service: StockService = Depends(get_stock_service),
) -> JSONResponse:
    """
    按关键词搜索股票

    搜索结果不含实时价格
    """
    if not keywords.strip():
        return _invalid_symbol("Search keywords are required")

    try:
        stocks = await service.search_stocks(keywords.strip())
    except APIError as e:
        logger.warning(f"搜索 {keywords!r} 失败: [{e.code.value}] {e.message}")
        return error_response(e)
    except Exception:
        logger.exception(f"搜索 {keywords!r} 时出现未预期错误")
        return unexpected_error_response()

    return success_response([StockSchema.model_validate(s).model_dump(by_alias=True) for s in stocks])
