# repositories/session_repository.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from extensions.session_store import session_store
from utils.datetime_helpers import epoch_to_iso


@dataclass(frozen=True)
class SessionUser:
    """登录时刻的用户快照，会话有效期内不随数据库变化。"""

    id: int
    username: str
    display_name: Optional[str]
    email: Optional[str]
    role: str

    @classmethod
    def from_user(cls, user) -> "SessionUser":
        return cls(
            id=user.id,
            username=user.username,
            display_name=user.display_name,
            email=user.email,
            role=user.role,
        )

    def owner_labels(self) -> List[str]:
        """任务 owner 可能填写的名字：显示名与登录名。"""
        labels = [self.display_name, self.username]
        return [label for i, label in enumerate(labels) if label and label not in labels[:i]]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "display_name": self.display_name,
            "email": self.email,
            "role": self.role,
        }


@dataclass
class Session:
    token: str
    user: SessionUser
    issued_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at

    def to_dict(self) -> dict:
        return {
            "user": self.user.to_dict(),
            "issued_at": epoch_to_iso(self.issued_at),
            "expires_at": epoch_to_iso(self.expires_at),
        }


class SessionRepository:
    @staticmethod
    def save(session: Session) -> None:
        session_store.set(session.token, session)

    @staticmethod
    def get(token: str) -> Optional[Session]:
        if not token:
            return None
        return session_store.get(token)

    @staticmethod
    def delete(token: str) -> bool:
        if not token:
            return False
        return session_store.pop(token) is not None

    @staticmethod
    def delete_expired(now: float) -> int:
        return len(session_store.pop_where(lambda _t, s: s.expires_at < now))

    @staticmethod
    def delete_for_user(user_id: int) -> int:
        return len(session_store.pop_where(lambda _t, s: s.user.id == user_id))

    @staticmethod
    def count() -> int:
        return len(session_store)
