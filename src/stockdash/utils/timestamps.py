"""
时间戳工具
"""

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """当前 UTC 时间，ISO-8601 格式，精确到毫秒，带 Z 后缀（如 2024-01-02T03:04:05.678Z）"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
