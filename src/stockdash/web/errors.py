"""
HTTP 响应构造

错误类型到 HTTP 状态码的映射只在这里进行。
"""

from typing import Any, Dict, Mapping, Optional

from fastapi.responses import JSONResponse

from stockdash.data.errors import APIError, APIErrorCode
from stockdash.utils.timestamps import utc_now_iso
from stockdash.web.schemas.stocks import APIErrorSchema, APIResponse

STATUS_CODES: Dict[APIErrorCode, int] = {
    APIErrorCode.INVALID_SYMBOL: 400,
    APIErrorCode.API_LIMIT_EXCEEDED: 429,
    APIErrorCode.INVALID_API_KEY: 401,
    APIErrorCode.NETWORK_ERROR: 502,
    APIErrorCode.UNKNOWN_ERROR: 500,
}

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


def status_for_error(code: APIErrorCode) -> int:
    """错误类型 → HTTP 状态码"""
    return STATUS_CODES.get(code, 500)


def success_response(data: Any, headers: Optional[Mapping[str, str]] = None) -> JSONResponse:
    """
    构造成功响应

    Args:
        data: 已序列化为 JSON 兼容结构的数据
        headers: 额外响应头
    """
    envelope = APIResponse(success=True, data=data, error=None, timestamp=utc_now_iso())
    return JSONResponse(
        content=envelope.model_dump(mode="json"),
        status_code=200,
        headers=dict(headers) if headers else None,
    )


def error_response(error: APIError, status_code: Optional[int] = None) -> JSONResponse:
    """
    构造错误响应

    错误原样返回，details 中的内部诊断信息（原始异常）会被去掉。
    """
    envelope = APIResponse(
        success=False,
        data=None,
        error=APIErrorSchema(**error.to_dict()),
        timestamp=utc_now_iso(),
    )
    return JSONResponse(
        content=envelope.model_dump(mode="json"),
        status_code=status_code or status_for_error(error.code),
    )


def unexpected_error_response() -> JSONResponse:
    """非 APIError 异常：固定返回 500，不泄露原始信息"""
    return error_response(APIError(APIErrorCode.UNKNOWN_ERROR, UNEXPECTED_ERROR_MESSAGE))
