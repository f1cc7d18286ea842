# -*- coding: utf-8 -*-
"""Datetime helpers.

数据库中的 ``datetime`` 一律按 UTC 存储（无时区信息）；接口层统一输出带
``+00:00`` 偏移的 ISO 8601 字符串。会话过期时间使用 epoch 秒（float）。
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """返回无时区信息的 UTC 当前时间，用于写库。"""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def _ensure_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def datetime_to_iso(dt: Optional[datetime]) -> Optional[str]:
    """将 ``datetime`` 格式化为 UTC ISO 字符串; ``None`` 时直接返回 ``None``。"""

    if dt is None:
        return None
    return _ensure_utc(dt).isoformat()


def epoch_to_iso(ts: Optional[float]) -> Optional[str]:
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()
