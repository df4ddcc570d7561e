"""
健康检查路由
"""

from typing import Any, Dict

from fastapi import APIRouter

from stockdash.utils.config import get_config
from stockdash.utils.timestamps import utc_now_iso

router = APIRouter()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    健康检查端点

    返回服务状态以及是否已配置 Alpha Vantage API key
    """
    return {
        "status": "healthy",
        "alphavantage_configured": bool(get_config().alphavantage.api_key),
        "timestamp": utc_now_iso(),
    }
