"""
股票代码校验

validate_ticker 校验用户原始输入并返回可展示的错误信息；
is_valid_ticker 校验标准化（去空白、大写）后的代码是否为 1-5 个大写字母。
"""

import re
from dataclasses import dataclass
from typing import Optional

MAX_TICKER_LENGTH = 5

_LETTERS = re.compile(r"[A-Za-z]+")
_NORMALIZED_TICKER = re.compile(rf"[A-Z]{{1,{MAX_TICKER_LENGTH}}}")


@dataclass(frozen=True)
class TickerValidation:
    """校验结果"""
    is_valid: bool
    error: Optional[str] = None


def normalize_ticker(symbol: str) -> str:
    """去除首尾空白并转为大写"""
    return symbol.strip().upper()


def validate_ticker(symbol: Optional[str]) -> TickerValidation:
    """
    校验用户输入的股票代码

    字母检查基于去空白后的原始大小写，小写字母同样合法。

    Args:
        symbol: 原始输入

    Returns:
        TickerValidation，失败时 error 为错误信息
    """
    if not symbol:
        return TickerValidation(False, "Ticker symbol is required")

    trimmed = symbol.strip()
    if not trimmed:
        return TickerValidation(False, "Ticker symbol is required")

    if len(trimmed) > MAX_TICKER_LENGTH:
        return TickerValidation(False, f"Ticker symbol must be {MAX_TICKER_LENGTH} characters or less")

    if not _LETTERS.fullmatch(trimmed):
        return TickerValidation(False, "Ticker symbol must contain only letters")

    return TickerValidation(True)


def is_valid_ticker(symbol: Optional[str]) -> bool:
    """标准化后是否为 1-5 个大写字母"""
    if not symbol:
        return False
    return _NORMALIZED_TICKER.fullmatch(normalize_ticker(symbol)) is not None
