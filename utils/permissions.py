from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from flask import g

from constants.roles import DEFAULT_ROLE, ROLE_LEVELS, Role
from utils.exceptions import Forbidden, Unauthenticated

# 能力阈值：达到该等级即拥有对应能力
READ_LEVEL = ROLE_LEVELS[Role.READONLY.value]
EDIT_LEVEL = ROLE_LEVELS[Role.EDIT.value]
ADD_DELETE_LEVEL = ROLE_LEVELS[Role.TEAMLEAD.value]
ADMIN_LEVEL = ROLE_LEVELS[Role.ADMIN.value]


@dataclass(frozen=True)
class Capabilities:
    level: int
    can_read: bool
    can_edit: bool
    can_add_delete: bool
    can_admin: bool

    def to_dict(self) -> dict:
        return asdict(self)


def _role_value(role: Role | str | None) -> Optional[str]:
    if role is None:
        return None
    if isinstance(role, Role):
        return role.value
    value = str(role).strip().lower()
    return value or None


def role_level(role: Role | str | None) -> int:
    """未知或缺失的角色按 readonly 处理（fail-closed）。"""
    return ROLE_LEVELS.get(_role_value(role), ROLE_LEVELS[DEFAULT_ROLE.value])


def capabilities_for(role: Role | str | None) -> Capabilities:
    level = role_level(role)
    return Capabilities(
        level=level,
        can_read=level >= READ_LEVEL,
        can_edit=level >= EDIT_LEVEL,
        can_add_delete=level >= ADD_DELETE_LEVEL,
        can_admin=level >= ADMIN_LEVEL,
    )


def authorize(role: Role | str | None, required_minimum: Role | str) -> bool:
    required = _role_value(required_minimum)
    if required not in ROLE_LEVELS:
        raise ValueError(f"Unknown required role: {required_minimum}")
    return role_level(role) >= ROLE_LEVELS[required]


def assert_role(role: Role | str | None, required_minimum: Role | str) -> None:
    if not authorize(role, required_minimum):
        raise Forbidden(f"Requires {_role_value(required_minimum)}")


def get_current_user():
    """
    获取当前登录用户快照（由 auth_required 写入 g.current_user）
    """
    user = getattr(g, "current_user", None)
    if not user:
        raise Unauthenticated()
    return user
