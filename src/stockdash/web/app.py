"""
FastAPI 应用实例
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from stockdash import __version__
from stockdash.utils.config import get_config
from stockdash.utils.logger import setup_logger
from stockdash.web.services.watchlist_service import FixedWindowRateLimiter, InMemoryWatchlistStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    config = get_config()
    setup_logger(
        level=config.logging.level,
        log_file=config.logging.file or None,
        rotation=config.logging.rotation,
        retention=config.logging.retention,
    )
    if not config.alphavantage.api_key:
        logger.warning("未设置 ALPHAVANTAGE_API_KEY，行情接口将返回 401")

    yield

    logger.info("服务已停止")


def create_app() -> FastAPI:
    """创建 FastAPI 应用"""
    config = get_config()

    app = FastAPI(
        title="Stock Dashboard API",
        description="股票行情仪表盘后端：Alpha Vantage 报价代理与自选股",
        version=__version__,
        lifespan=lifespan,
    )

    # 自选股与限流状态按应用实例隔离
    app.state.watchlist_store = InMemoryWatchlistStore()
    app.state.rate_limiter = FixedWindowRateLimiter(
        limit=config.watchlist.rate_limit,
        window_seconds=config.watchlist.rate_window_seconds,
    )

    # 注册路由
    from stockdash.web.routes import dashboard, health, stocks, watchlist

    app.include_router(health.router, tags=["Health"])
    app.include_router(stocks.router, prefix="/api/stocks", tags=["Stocks"])
    app.include_router(watchlist.router, prefix="/api/watchlist", tags=["Watchlist"])
    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])

    return app


# 创建应用实例
app = create_app()
