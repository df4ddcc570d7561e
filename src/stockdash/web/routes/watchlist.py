"""
自选股 API 路由

按客户端（X-Forwarded-For 第一个地址）隔离，每分钟限 60 次请求
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from stockdash.validation.ticker import is_valid_ticker, normalize_ticker
from stockdash.web.schemas.watchlist import (
    WatchlistData,
    WatchlistErrorBody,
    WatchlistErrorResponse,
    WatchlistResponse,
)
from stockdash.web.services.watchlist_service import FixedWindowRateLimiter, WatchlistStore

router = APIRouter()

WATCHLIST_ACTIONS = ("add", "remove")


def get_client_id(request: Request) -> str:
    """从 X-Forwarded-For 提取客户端 ID，缺失时为 anonymous"""
    forwarded = request.headers.get("x-forwarded-for", "")
    ip = forwarded.split(",")[0].strip()
    return ip or "anonymous"


def _error(message: str, status_code: int, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    body = WatchlistErrorResponse(error=WatchlistErrorBody(message=message))
    return JSONResponse(content=body.model_dump(), status_code=status_code, headers=headers)


def _ok(watchlist) -> JSONResponse:
    body = WatchlistResponse(data=WatchlistData(watchlist=watchlist))
    return JSONResponse(content=body.model_dump())


def _check_rate_limit(request: Request, client_id: str) -> Optional[JSONResponse]:
    limiter: FixedWindowRateLimiter = request.app.state.rate_limiter
    decision = limiter.hit(client_id)
    if decision.allowed:
        return None

    logger.warning(f"自选股接口限流: client={client_id}")
    headers = {"Retry-After": str(decision.retry_after)} if decision.retry_after else None
    return _error("Rate limit exceeded. Try again later.", 429, headers)


@router.get("")
async def get_watchlist(request: Request) -> JSONResponse:
    """获取当前客户端的自选股列表"""
    client_id = get_client_id(request)
    limited = _check_rate_limit(request, client_id)
    if limited is not None:
        return limited

    store: WatchlistStore = request.app.state.watchlist_store
    return _ok(store.get(client_id))


@router.post("")
async def update_watchlist(request: Request) -> JSONResponse:
    """
    添加或移除自选股

    请求体: {"action": "add" | "remove", "symbol": "AAPL"}
    """
    client_id = get_client_id(request)
    limited = _check_rate_limit(request, client_id)
    if limited is not None:
        return limited

    try:
        body: Any = await request.json()
    except ValueError:
        return _error("Invalid JSON body", 400)

    if not isinstance(body, dict):
        body = {}

    action = body.get("action")
    raw_symbol = body.get("symbol")
    symbol = normalize_ticker(raw_symbol) if isinstance(raw_symbol, str) and raw_symbol else None

    if action not in WATCHLIST_ACTIONS:
        return _error("'action' must be 'add' or 'remove'", 400)
    if not symbol or not is_valid_ticker(symbol):
        return _error("Invalid ticker symbol", 400)

    store: WatchlistStore = request.app.state.watchlist_store
    if action == "add":
        watchlist = store.add(client_id, symbol)
    else:
        watchlist = store.remove(client_id, symbol)

    logger.debug(f"自选股 {action} {symbol}: client={client_id}, 共 {len(watchlist)} 个")
    return _ok(watchlist)
