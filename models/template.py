# -*- coding: utf-8 -*-
"""
template.py
--------------------------------------------------------------------
模板目录（不属于任何项目）：
- DefaultWorkstream: 工作流（Office 365 / Network / ...）。
- DefaultTaskTemplate: 默认任务，创建项目时整体复制为该项目的 Task。
复制后互不影响：之后修改模板不会回写到已有项目。
"""

from extensions.database import db
from .mixins import COMMON_TABLE_ARGS
from constants.catalog import DEFAULT_WORKSTREAM_COLOR
from constants.project import DEFAULT_PRIORITY


class DefaultWorkstream(db.Model):
    __tablename__ = "default_workstreams"
    __table_args__ = (COMMON_TABLE_ARGS,)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), unique=True, nullable=False)
    color = db.Column(db.String(16), nullable=False, default=DEFAULT_WORKSTREAM_COLOR)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    active = db.Column(db.Boolean, nullable=False, default=True, server_default="1")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "sort_order": self.sort_order,
            "active": bool(self.active),
        }


class DefaultTaskTemplate(db.Model):
    __tablename__ = "default_tasks"
    __table_args__ = (
        db.Index("ix_default_tasks_workstream_order", "workstream", "sort_order"),
        COMMON_TABLE_ARGS,
    )

    id = db.Column(db.String(32), primary_key=True)
    workstream = db.Column(db.String(128), nullable=False)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    priority = db.Column(db.String(16), nullable=False, default=DEFAULT_PRIORITY)
    dependencies = db.Column(db.String(255), default="")
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    active = db.Column(db.Boolean, nullable=False, default=True, server_default="1")

    def to_dict(self):
        return {
            "id": self.id,
            "workstream": self.workstream,
            "name": self.name,
            "description": self.description,
            "priority": self.priority,
            "dependencies": self.dependencies,
            "sort_order": self.sort_order,
            "active": bool(self.active),
        }
