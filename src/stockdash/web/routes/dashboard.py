"""
仪表盘数据路由
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from stockdash.data.mock_data import MARKET_INDICES, MOCK_STOCKS
from stockdash.web.schemas.stocks import StockSchema

router = APIRouter()


@router.get("/data")
async def get_dashboard_data() -> JSONResponse:
    """
    仪表盘初始数据（演示数据）

    组合为空，自选股与热门股票来自 MOCK_STOCKS
    """
    trending = [StockSchema.model_validate(s).model_dump(by_alias=True) for s in MOCK_STOCKS]
    payload = {
        "success": True,
        "data": {
            "portfolio": {"holdings": [], "totalValue": 0, "dailyChange": 0},
            "watchlist": [{"symbol": s.symbol, "name": s.name} for s in MOCK_STOCKS],
            "marketData": {
                "trending": trending,
                "indices": [
                    {"symbol": i["symbol"], "changePercent": i["change_percent"]}
                    for i in MARKET_INDICES
                ],
            },
        },
    }
    return JSONResponse(
        content=payload,
        headers={"Cache-Control": "s-maxage=60, stale-while-revalidate=30"},
    )
