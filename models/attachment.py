# -*- coding: utf-8 -*-
"""
attachment.py
--------------------------------------------------------------------
任务附件：
- 一行记录对应存储目录中的一个文件，两者必须一起创建、一起删除。
- stored_filename 为清洗 + 加前缀后的落盘名，original_filename 为上传时的原始名。
- 通过 (task_id, project_id) 归属于某个项目内的任务。
"""

from extensions.database import db
from .mixins import COMMON_TABLE_ARGS
from utils.datetime_helpers import datetime_to_iso, utc_now


class TaskAttachment(db.Model):
    __tablename__ = "task_attachments"
    __table_args__ = (
        db.Index("ix_task_attachments_task", "project_id", "task_id"),
        COMMON_TABLE_ARGS,
    )

    id = db.Column(db.Integer, primary_key=True)
    task_id = db.Column(db.String(32), nullable=False)
    project_id = db.Column(db.Integer, db.ForeignKey("projects.id"), nullable=False)
    stored_filename = db.Column(db.String(512), nullable=False, unique=True)
    original_filename = db.Column(db.String(255), nullable=False)
    size = db.Column(db.Integer)
    mime_type = db.Column(db.String(128))
    uploaded_by = db.Column(db.String(64))
    uploaded_at = db.Column(db.DateTime, nullable=False, default=utc_now)

    def to_dict(self):
        return {
            "id": self.id,
            "task_id": self.task_id,
            "project_id": self.project_id,
            "stored_filename": self.stored_filename,
            "original_filename": self.original_filename,
            "size": self.size,
            "mime_type": self.mime_type,
            "uploaded_by": self.uploaded_by,
            "uploaded_at": datetime_to_iso(self.uploaded_at),
        }
