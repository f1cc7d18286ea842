# repositories/rate_limit_repository.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from extensions.session_store import login_attempt_store


@dataclass(frozen=True)
class AttemptRecord:
    count: int
    window_start: float


class RateLimitRepository:
    @staticmethod
    def get(key: str) -> Optional[AttemptRecord]:
        return login_attempt_store.get(key)

    @staticmethod
    def record_failure(key: str, now: float, window_seconds: int) -> AttemptRecord:
        """无记录或窗口已过期时重置为 {1, now}，否则计数 +1（锁内原子完成）。"""

        def _next(prev: Optional[AttemptRecord]) -> AttemptRecord:
            if prev is None or now - prev.window_start >= window_seconds:
                return AttemptRecord(count=1, window_start=now)
            return AttemptRecord(count=prev.count + 1, window_start=prev.window_start)

        return login_attempt_store.update(key, _next)

    @staticmethod
    def clear(key: str):
        login_attempt_store.pop(key)
