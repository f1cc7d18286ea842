from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """
    全局角色，严格线性有序：
    readonly < edit < teamlead < admin
    权限判断只比较等级，不比较角色本身。
    """

    READONLY = "readonly"
    EDIT = "edit"
    TEAMLEAD = "teamlead"
    ADMIN = "admin"

    @classmethod
    def values(cls) -> list[str]:
        return [role.value for role in cls]


ROLE_LEVELS: dict[str, int] = {
    Role.READONLY.value: 1,
    Role.EDIT.value: 2,
    Role.TEAMLEAD.value: 3,
    Role.ADMIN.value: 4,
}

ROLE_LABELS_EN: dict[str, str] = {
    Role.READONLY.value: "Read Only",
    Role.EDIT.value: "Editor",
    Role.TEAMLEAD.value: "Team Lead",
    Role.ADMIN.value: "Administrator",
}

ALL_ROLES: set[str] = set(Role.values())

DEFAULT_ROLE = Role.READONLY


def normalize_role(raw: str | None, default: Role = DEFAULT_ROLE) -> str:
    """
    清洗外部传入的 role 值：
    - None 或空 => 默认
    - 去掉首尾空白、转为小写
    - 校验是否在已注册角色中
    """
    if not raw:
        return default.value
    value = str(raw).strip().lower()
    if value not in ALL_ROLES:
        raise ValueError(f"Unknown role: {raw}")
    return value
