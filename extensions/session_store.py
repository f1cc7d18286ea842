# extensions/session_store.py
"""进程内共享状态：会话表与登录失败计数表。

两张表均为进程级单例：
- 启动时为空，进程退出时整体丢弃（会话不持久化，重启即全部失效）。
- 仅通过 repositories 层的窄接口读写。
- 所有读写都在锁内完成，可在多线程 WSGI 服务器下并发使用。
"""
from __future__ import annotations

import atexit
import threading
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple


class InMemoryStore:
    """带锁的 dict 封装。"""

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = threading.RLock()
        self._items: Dict[Hashable, Any] = {}

    def get(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            return self._items.get(key, default)

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._items[key] = value

    def pop(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            return self._items.pop(key, default)

    def update(self, key: Hashable, fn: Callable[[Optional[Any]], Any]) -> Any:
        """在锁内执行 read-modify-write，fn 收到旧值并返回新值。"""
        with self._lock:
            value = fn(self._items.get(key))
            self._items[key] = value
            return value

    def pop_where(self, predicate: Callable[[Hashable, Any], bool]) -> List[Tuple[Hashable, Any]]:
        with self._lock:
            doomed = [(k, v) for k, v in self._items.items() if predicate(k, v)]
            for k, _ in doomed:
                del self._items[k]
            return doomed

    def clear(self) -> int:
        with self._lock:
            count = len(self._items)
            self._items.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._items


session_store = InMemoryStore("sessions")
login_attempt_store = InMemoryStore("login_attempts")


def reset_stores() -> None:
    session_store.clear()
    login_attempt_store.clear()


atexit.register(reset_stores)


__all__ = ["InMemoryStore", "session_store", "login_attempt_store", "reset_stores"]
