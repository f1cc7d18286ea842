# repositories/user_repository.py
from __future__ import annotations
from typing import List, Optional

from sqlalchemy import select

from models.user import User
from extensions.database import db
from constants.roles import Role


class UserRepository:
    """
    用户仓储（数据访问）层。
    说明：
    - 不做业务规则判断（如密码策略、自我操作保护），仅做纯粹的持久化读写。
    - 默认所有写操作不自动 commit，由上层显式调用 commit()，以便在一个事务中组合多个操作。
    """

    @staticmethod
    def find_by_username(username: str) -> Optional[User]:
        return db.session.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()

    @staticmethod
    def find_by_id(user_id: int) -> Optional[User]:
        return db.session.get(User, user_id)

    @staticmethod
    def add(user: User):
        db.session.add(user)

    @staticmethod
    def delete(user: User):
        db.session.delete(user)

    @staticmethod
    def list_all() -> List[User]:
        return db.session.execute(select(User).order_by(User.username)).scalars().all()

    @staticmethod
    def list_active() -> List[User]:
        stmt = (
            select(User)
            .where(User.active.is_(True))
            .order_by(User.display_name, User.username)
        )
        return db.session.execute(stmt).scalars().all()

    @staticmethod
    def count_active_admins_except(user_id: int) -> int:
        return User.query.filter(
            User.role == Role.ADMIN.value,
            User.active.is_(True),
            User.id != user_id,
        ).count()

    @staticmethod
    def update_profile(user: User,
                       display_name: str = None,
                       email: str = None,
                       role: str = None,
                       active: bool = None) -> bool:
        """
        更新用户资料，返回是否有实际变更
        注意：此方法不做业务验证，仅负责数据更新
        """
        changed = False
        for attr, value in (("display_name", display_name), ("email", email),
                            ("role", role), ("active", active)):
            if value is not None and getattr(user, attr) != value:
                setattr(user, attr, value)
                changed = True
        return changed

    @staticmethod
    def update_password(user: User, new_hash: str):
        user.password_hash = new_hash
        return user

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def rollback():
        db.session.rollback()
