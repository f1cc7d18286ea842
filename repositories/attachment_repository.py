from __future__ import annotations

from typing import List, Mapping, Optional

from sqlalchemy import delete, select

from extensions.database import db
from models.attachment import TaskAttachment


class AttachmentRepository:
    """任务附件的持久化操作。

    仓储层只维护数据库里的元数据（原始名、落盘名、大小、上传人等），
    文件本身的写入与删除由 AttachmentService 通过 utils.file_storage 完成。
    所有查询都同时带上 project_id 与 task_id，避免跨项目读到同编号任务的附件。"""

    @staticmethod
    def add(project_id: int, task_id: str, payload: Mapping) -> TaskAttachment:
        attachment = TaskAttachment(
            project_id=project_id,
            task_id=task_id,
            stored_filename=payload.get("stored_filename"),
            original_filename=payload.get("original_filename"),
            size=payload.get("size"),
            mime_type=payload.get("mime_type"),
            uploaded_by=payload.get("uploaded_by"),
        )
        db.session.add(attachment)
        db.session.flush()
        return attachment

    @staticmethod
    def get_scoped(attachment_id: int, project_id: int, task_id: str) -> Optional[TaskAttachment]:
        stmt = select(TaskAttachment).where(
            TaskAttachment.id == attachment_id,
            TaskAttachment.project_id == project_id,
            TaskAttachment.task_id == task_id,
        )
        return db.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def list_for_task(project_id: int, task_id: str) -> List[TaskAttachment]:
        stmt = (
            select(TaskAttachment)
            .where(TaskAttachment.project_id == project_id, TaskAttachment.task_id == task_id)
            .order_by(TaskAttachment.uploaded_at.desc(), TaskAttachment.id.desc())
        )
        return db.session.execute(stmt).scalars().all()

    @staticmethod
    def filenames_for_task(project_id: int, task_id: str) -> List[str]:
        stmt = select(TaskAttachment.stored_filename).where(
            TaskAttachment.project_id == project_id,
            TaskAttachment.task_id == task_id,
        )
        return list(db.session.execute(stmt).scalars().all())

    @staticmethod
    def delete_for_task(project_id: int, task_id: str) -> int:
        stmt = delete(TaskAttachment).where(
            TaskAttachment.project_id == project_id,
            TaskAttachment.task_id == task_id,
        )
        return db.session.execute(stmt).rowcount or 0

    @staticmethod
    def delete(attachment: TaskAttachment):
        db.session.delete(attachment)
