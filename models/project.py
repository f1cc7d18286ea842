# -*- coding: utf-8 -*-
"""
project.py
--------------------------------------------------------------------
集成项目：一次并购的 IT 整合工作。
- Task / Contact / Risk / TaskAttachment 均以 project_id 归属于某个项目。
- 这里刻意不声明 ORM 级联关系：删除顺序由 ProjectService 显式控制，
  附件文件需要在删行之前清理。
"""

from extensions.database import db
from .mixins import TimestampMixin, COMMON_TABLE_ARGS
from constants.project import DEFAULT_PROJECT_STATUS
from utils.datetime_helpers import datetime_to_iso


class Project(TimestampMixin, db.Model):
    __tablename__ = "projects"
    __table_args__ = (COMMON_TABLE_ARGS,)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    acquired_company = db.Column(db.String(200))
    parent_company = db.Column(db.String(200))
    status = db.Column(db.String(32), nullable=False, default=DEFAULT_PROJECT_STATUS,
                       server_default=DEFAULT_PROJECT_STATUS)
    start_date = db.Column(db.String(10))
    target_completion = db.Column(db.String(10))

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "acquired_company": self.acquired_company,
            "parent_company": self.parent_company,
            "status": self.status,
            "start_date": self.start_date,
            "target_completion": self.target_completion,
            "created_at": datetime_to_iso(self.created_at),
            "updated_at": datetime_to_iso(self.updated_at),
        }
