# services/rate_limit_service.py
import logging
import math
import time

from repositories.rate_limit_repository import RateLimitRepository
from utils.exceptions import LockedOut

logger = logging.getLogger(__name__)


class LoginRateLimiter:
    """
    按来源地址统计登录失败次数（不区分用户名）。
    窗口内失败次数达到上限后，无论密码是否正确都直接拒绝，直到窗口结束。
    """

    def __init__(self, address: str, max_attempts: int, lockout_seconds: int):
        self.key = f"login:fail:{address or 'unknown'}"
        self.address = address
        self.max_attempts = max_attempts
        self.lockout_seconds = lockout_seconds

    def remaining_seconds(self, now: float = None) -> float:
        now = time.time() if now is None else now
        record = RateLimitRepository.get(self.key)
        if record is None or record.count < self.max_attempts:
            return 0
        return max(0.0, self.lockout_seconds - (now - record.window_start))

    def ensure_not_locked(self, now: float = None):
        remaining = self.remaining_seconds(now)
        if remaining > 0:
            minutes = math.ceil(remaining / 60)
            logger.warning("Login locked out for %s, %s seconds remaining", self.address, int(remaining))
            raise LockedOut(
                message=f"Too many failed attempts. Try again in {minutes} minute(s).",
                data={
                    "retry_after_seconds": math.ceil(remaining),
                    "retry_after_minutes": minutes,
                },
            )

    def record_failure(self, now: float = None) -> int:
        now = time.time() if now is None else now
        record = RateLimitRepository.record_failure(self.key, now, self.lockout_seconds)
        if record.count >= self.max_attempts:
            logger.warning("Login failure limit reached for %s (%s attempts)", self.address, record.count)
        return record.count

    def clear(self):
        RateLimitRepository.clear(self.key)
