# -*- coding: utf-8 -*-
"""
task.py
--------------------------------------------------------------------
项目任务，复合主键 (id, project_id)：
- id 为人工可读编号（如 "NET-003"），不同项目可以重复，同一项目内唯一。
- owner 为自由文本（与用户显示名做字符串匹配），不是外键。
- dependencies 同样是自由文本，引用同项目内其他任务编号。
"""

from extensions.database import db
from .mixins import UpdatedAtMixin, COMMON_TABLE_ARGS
from constants.project import DEFAULT_PRIORITY, DEFAULT_TASK_STATUS
from utils.datetime_helpers import datetime_to_iso


class Task(UpdatedAtMixin, db.Model):
    __tablename__ = "tasks"
    __table_args__ = (
        db.Index("ix_tasks_owner", "owner"),
        COMMON_TABLE_ARGS,
    )

    id = db.Column(db.String(32), primary_key=True, autoincrement=False)
    project_id = db.Column(
        db.Integer, db.ForeignKey("projects.id"), primary_key=True, autoincrement=False
    )
    workstream = db.Column(db.String(128))
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    owner = db.Column(db.String(128))
    priority = db.Column(db.String(16), nullable=False, default=DEFAULT_PRIORITY)
    status = db.Column(db.String(16), nullable=False, default=DEFAULT_TASK_STATUS)
    start_date = db.Column(db.String(10))
    due_date = db.Column(db.String(10))
    percent_complete = db.Column(db.Integer, nullable=False, default=0)
    dependencies = db.Column(db.String(255))
    notes = db.Column(db.Text)
    updated_by = db.Column(db.String(64))

    def to_dict(self):
        return {
            "id": self.id,
            "project_id": self.project_id,
            "workstream": self.workstream,
            "name": self.name,
            "description": self.description,
            "owner": self.owner,
            "priority": self.priority,
            "status": self.status,
            "start_date": self.start_date,
            "due_date": self.due_date,
            "percent_complete": self.percent_complete,
            "dependencies": self.dependencies,
            "notes": self.notes,
            "updated_at": datetime_to_iso(self.updated_at),
            "updated_by": self.updated_by,
        }
