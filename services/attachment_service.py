# services/attachment_service.py
"""
任务附件：数据库行与存储文件是同一资源的两半。

- 上传：先校验大小、扩展名与任务归属，再写文件，最后写行；写行失败时删除刚写入的文件。
- 删除：先删文件（已缺失只记 warning），再删行。中途崩溃最多留下一条可重复删除的行。
"""
import logging
import mimetypes
from typing import Optional, Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from extensions.database import db
from models.attachment import TaskAttachment
from repositories.attachment_repository import AttachmentRepository
from repositories.task_repository import TaskRepository
from utils.exceptions import DisallowedType, FileTooLarge, NotFound, StorageFailure
from utils.file_storage import (
    build_stored_filename,
    is_allowed_extension,
    remove_file,
    safe_join,
    stream_size,
    write_stream,
)

logger = logging.getLogger(__name__)


def _max_bytes() -> int:
    return current_app.config.get("ATTACHMENT_MAX_BYTES", 10 * 1024 * 1024)


def _storage_root() -> str:
    return current_app.config["ATTACHMENT_STORAGE_DIR"]


class AttachmentService:

    @staticmethod
    def validate_upload(declared_name: str, declared_size: Optional[int]):
        """大小优先于类型校验，与上传顺序无关的纯函数式检查。"""
        max_bytes = _max_bytes()
        if declared_size is not None and declared_size > max_bytes:
            raise FileTooLarge(
                f"File exceeds the {max_bytes // (1024 * 1024)} MB limit",
                data={"size": declared_size, "max_bytes": max_bytes},
            )
        allowed = current_app.config.get("ATTACHMENT_ALLOWED_EXTENSIONS", ())
        if not declared_name or not is_allowed_extension(declared_name, allowed):
            raise DisallowedType(
                "File type not allowed",
                data={"filename": declared_name, "allowed": sorted(allowed)},
            )

    @staticmethod
    def upload(project_id: int, task_id: str, file, actor,
               declared_name: str = None, declared_size: int = None) -> TaskAttachment:
        """
        file 为 werkzeug FileStorage（或任何带 stream/filename 的对象）。
        declared_size 缺省时从流长度推算。
        """
        if file is None:
            raise DisallowedType("No file uploaded")
        original_name = declared_name or getattr(file, "filename", None) or ""
        size = declared_size if declared_size is not None else stream_size(file.stream)
        AttachmentService.validate_upload(original_name, size)

        if not TaskRepository.exists(task_id, project_id):
            raise NotFound("Task not found")

        root = _storage_root()
        stored_name = build_stored_filename(original_name)
        try:
            written = write_stream(root, stored_name, file.stream)
        except OSError as e:
            logger.error("Writing attachment %s failed: %s", stored_name, e)
            raise StorageFailure("Failed to store attachment")

        # 流无法预先计算长度时，以实际写入字节数兜底
        if written > _max_bytes():
            remove_file(root, stored_name)
            raise FileTooLarge(data={"size": written, "max_bytes": _max_bytes()})

        mime_type = getattr(file, "mimetype", None) or mimetypes.guess_type(original_name)[0]
        try:
            attachment = AttachmentRepository.add(project_id, task_id, {
                "stored_filename": stored_name,
                "original_filename": original_name,
                "size": written,
                "mime_type": mime_type or "application/octet-stream",
                "uploaded_by": actor.username,
            })
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            remove_file(root, stored_name)
            logger.error("Saving attachment row for %s/%s failed: %s", project_id, task_id, e)
            raise StorageFailure("Failed to save attachment")

        logger.info("Attachment %s uploaded to task %s/%s by %s",
                    attachment.id, project_id, task_id, actor.username)
        return attachment

    @staticmethod
    def list(project_id: int, task_id: str):
        if not TaskRepository.exists(task_id, project_id):
            raise NotFound("Task not found")
        return AttachmentRepository.list_for_task(project_id, task_id)

    @staticmethod
    def _get(attachment_id: int, project_id: int, task_id: str) -> TaskAttachment:
        attachment = AttachmentRepository.get_scoped(attachment_id, project_id, task_id)
        if not attachment:
            raise NotFound("Attachment not found")
        return attachment

    @staticmethod
    def open(attachment_id: int, project_id: int, task_id: str) -> Tuple[TaskAttachment, str]:
        """返回 (附件行, 文件绝对路径)，路径保证位于存储根目录内。"""
        attachment = AttachmentService._get(attachment_id, project_id, task_id)
        path = safe_join(_storage_root(), attachment.stored_filename)
        if path is None:
            raise NotFound("Attachment not found")
        try:
            with open(path, "rb"):
                pass
        except FileNotFoundError:
            logger.warning("Attachment %s has no backing file: %s", attachment.id, attachment.stored_filename)
            raise NotFound("Attachment file missing")
        except OSError as e:
            logger.error("Opening attachment %s failed: %s", attachment.id, e)
            raise StorageFailure("Failed to read attachment")
        return attachment, path

    @staticmethod
    def delete(attachment_id: int, project_id: int, task_id: str) -> dict:
        attachment = AttachmentService._get(attachment_id, project_id, task_id)
        file_removed = remove_file(_storage_root(), attachment.stored_filename)
        try:
            AttachmentRepository.delete(attachment)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Deleting attachment row %s failed: %s", attachment_id, e)
            raise StorageFailure("Failed to delete attachment")
        logger.info("Attachment %s deleted from task %s/%s", attachment_id, project_id, task_id)
        return {"id": attachment_id, "file_removed": file_removed}
