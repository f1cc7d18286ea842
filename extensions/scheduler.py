# extensions/scheduler.py
"""后台定时任务：周期性清理过期会话。

独立守护线程，按固定间隔调用 job；与请求处理互不阻塞。
"""
from __future__ import annotations

import atexit
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicJob:
    def __init__(self, name: str) -> None:
        self.name = name
        self._job: Optional[Callable[[], object]] = None
        self._interval: float = 3600
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def init_app(self, app, job: Callable[[], object], interval_seconds: float, enabled: bool = True) -> None:
        self._job = job
        self._interval = interval_seconds
        if not enabled:
            app.logger.info("Periodic job %s disabled", self.name)
            return
        self.start()
        atexit.register(self.stop)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name=self.name, daemon=True)
        self._thread.start()
        logger.info("Scheduled job '%s' every %s seconds", self.name, self._interval)

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None

    def run_once(self):
        if self._job is None:
            return None
        return self._job()

    def _loop(self) -> None:
        # 先等待一个周期再执行，启动时不需要清理
        while not self._stop.wait(self._interval):
            try:
                self.run_once()
            except Exception:
                logger.exception("Job failed: %s", self.name)


session_sweeper = PeriodicJob("session-sweeper")

__all__ = ["PeriodicJob", "session_sweeper"]
