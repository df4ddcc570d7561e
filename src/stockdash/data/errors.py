"""
行情 API 错误体系

所有可预期的失败都以 APIError 抛出，code 取自封闭的 APIErrorCode 枚举。
已是 APIError 的异常在各层原样向上传递，其他异常只在边界处包装一次。
HTTP 状态码的映射只发生在 web 层。
"""

from enum import Enum
from typing import Any, Dict, Optional


class APIErrorCode(str, Enum):
    """错误类型"""
    INVALID_SYMBOL = "INVALID_SYMBOL"
    API_LIMIT_EXCEEDED = "API_LIMIT_EXCEEDED"
    INVALID_API_KEY = "INVALID_API_KEY"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class APIError(Exception):
    """
    行情 API 错误

    Attributes:
        code: 错误类型
        message: 可读的错误信息
        details: 附加信息；其中的异常对象仅用于内部诊断，不会序列化
    """

    def __init__(
        self,
        code: APIErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = APIErrorCode(code)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """转换为可 JSON 序列化的字典"""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": _public(self.details) if self.details is not None else None,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, APIError):
            return NotImplemented
        return (
            self.code == other.code
            and self.message == other.message
            and self.details == other.details
        )

    __hash__ = Exception.__hash__

    def __repr__(self) -> str:
        return f"APIError(code={self.code.value}, message={self.message!r})"


def _public(value: Any) -> Any:
    """递归去掉异常对象（APIError 除外），保留可对外展示的部分"""
    if isinstance(value, APIError):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: _public(v) for k, v in value.items() if _is_public(v)}
    if isinstance(value, (list, tuple)):
        return [_public(v) for v in value if _is_public(v)]
    return value


def _is_public(value: Any) -> bool:
    return isinstance(value, APIError) or not isinstance(value, BaseException)


def wrap_error(
    error: BaseException,
    code: APIErrorCode = APIErrorCode.UNKNOWN_ERROR,
    message: Optional[str] = None,
) -> APIError:
    """
    将任意异常归入错误体系

    APIError 原样返回；其他异常包装为指定 code，原始异常放在
    details["original_error"] 中。

    Args:
        error: 捕获到的异常
        code: 包装后的错误类型
        message: 错误信息，为空时使用原始异常的信息

    Returns:
        APIError
    """
    if isinstance(error, APIError):
        return error
    return APIError(
        code,
        message or str(error) or "Unknown error",
        details={"original_error": error},
    )
