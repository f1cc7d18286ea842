# -*- coding: utf-8 -*-
"""
user.py
--------------------------------------------------------------------
用户实体。
说明：
- role 为全局角色：readonly / edit / teamlead / admin，按等级比较。
- active 控制账号启用状态；优先停用而不是删除。
- display_name 同时用于“我的任务”匹配（任务 owner 为自由文本）。
"""

from extensions.database import db
from .mixins import CreatedAtMixin, COMMON_TABLE_ARGS
from constants.roles import Role, ROLE_LABELS_EN
from utils.datetime_helpers import datetime_to_iso, utc_now


class User(CreatedAtMixin, db.Model):
    __tablename__ = "users"
    __table_args__ = (COMMON_TABLE_ARGS,)

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    display_name = db.Column(db.String(128))
    email = db.Column(db.String(120))
    role = db.Column(db.String(32), nullable=False, default=Role.READONLY.value, server_default=Role.READONLY.value)
    active = db.Column(db.Boolean, nullable=False, default=True, server_default="1")
    last_login = db.Column(db.DateTime)

    def __repr__(self):
        return f"<User id={self.id} username={self.username} role={self.role}>"

    @property
    def role_label(self) -> str:
        return ROLE_LABELS_EN.get(self.role, self.role)

    def touch_last_login(self):
        self.last_login = utc_now()

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "display_name": self.display_name,
            "email": self.email,
            "role": self.role,
            "role_label": self.role_label,
            "active": bool(self.active),
            "created_at": datetime_to_iso(self.created_at),
            "last_login": datetime_to_iso(self.last_login),
        }

    def to_brief(self):
        return {
            "id": self.id,
            "username": self.username,
            "display_name": self.display_name,
            "role": self.role,
        }
