"""
自选股存储与请求限流

存储通过 WatchlistStore 接口访问，默认实现为进程内字典；
实例挂在 app.state 上，不使用模块级全局变量。
"""

import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional


class WatchlistStore(ABC):
    """自选股存储接口，按客户端 ID 隔离"""

    @abstractmethod
    def get(self, client_id: str) -> List[str]:
        """获取自选股列表（按加入顺序）"""

    @abstractmethod
    def add(self, client_id: str, symbol: str) -> List[str]:
        """加入代码，已存在则忽略，返回最新列表"""

    @abstractmethod
    def remove(self, client_id: str, symbol: str) -> List[str]:
        """移除代码，不存在则忽略，返回最新列表"""


class InMemoryWatchlistStore(WatchlistStore):
    """进程内存储，重启即丢失"""

    def __init__(self):
        # dict 保持插入顺序，当作有序集合使用
        self._lists: Dict[str, Dict[str, None]] = {}

    def get(self, client_id: str) -> List[str]:
        return list(self._lists.get(client_id, {}))

    def add(self, client_id: str, symbol: str) -> List[str]:
        self._lists.setdefault(client_id, {})[symbol] = None
        return self.get(client_id)

    def remove(self, client_id: str, symbol: str) -> List[str]:
        self._lists.setdefault(client_id, {}).pop(symbol, None)
        return self.get(client_id)


@dataclass(frozen=True)
class RateLimitDecision:
    """限流判定结果"""
    allowed: bool
    retry_after: Optional[int] = None


@dataclass
class _Bucket:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """
    固定窗口限流器

    每个客户端在窗口内最多 limit 次请求；窗口从该客户端的第一次请求开始计时。
    """

    def __init__(
        self,
        limit: int = 60,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._buckets: Dict[str, _Bucket] = {}

    def hit(self, client_id: str) -> RateLimitDecision:
        """记录一次请求并判定是否放行"""
        now = self._clock()
        bucket = self._buckets.get(client_id)

        if bucket is None or now > bucket.reset_at:
            self._buckets[client_id] = _Bucket(count=1, reset_at=now + self.window_seconds)
            return RateLimitDecision(allowed=True)

        if bucket.count >= self.limit:
            return RateLimitDecision(
                allowed=False,
                retry_after=max(1, math.ceil(bucket.reset_at - now)),
            )

        bucket.count += 1
        return RateLimitDecision(allowed=True)
