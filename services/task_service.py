# services/task_service.py
import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from constants.project import (
    DEFAULT_PRIORITY,
    DEFAULT_TASK_STATUS,
    PRIORITY_SORT_ORDER,
    TASK_STATUS_SORT_ORDER,
    validate_percent_complete,
    validate_priority,
    validate_task_status,
)
from extensions.database import db
from repositories.attachment_repository import AttachmentRepository
from repositories.project_repository import ProjectRepository
from repositories.task_repository import TaskRepository
from utils.datetime_helpers import utc_now
from utils.exceptions import DuplicateId, NotFound, StorageFailure
from utils.file_storage import remove_file
from utils.validators import clean_payload, optional_date, optional_str, required_str

logger = logging.getLogger(__name__)

TASK_CREATE_FIELDS = (
    "id", "workstream", "name", "description", "owner", "priority", "status",
    "start_date", "due_date", "percent_complete", "dependencies", "notes",
)
TASK_UPDATE_FIELDS = tuple(f for f in TASK_CREATE_FIELDS if f != "id")

_TEXT_LIMITS = {
    "workstream": 128,
    "description": 10000,
    "owner": 128,
    "dependencies": 255,
    "notes": 10000,
}


def _validate_task_fields(payload: dict) -> dict:
    fields = {}
    if "name" in payload:
        fields["name"] = required_str(payload, "name", max_length=200)
    for key, limit in _TEXT_LIMITS.items():
        if key in payload:
            fields[key] = optional_str(payload, key, max_length=limit)
    if payload.get("priority") is not None:
        fields["priority"] = validate_priority(payload["priority"])
    if payload.get("status") is not None:
        fields["status"] = validate_task_status(payload["status"])
    if payload.get("percent_complete") is not None:
        fields["percent_complete"] = validate_percent_complete(payload["percent_complete"])
    for key in ("start_date", "due_date"):
        if key in payload:
            fields[key] = optional_date(payload, key) or None
    return fields


def _my_task_sort_key(item: dict):
    due = item.get("due_date") or ""
    return (
        TASK_STATUS_SORT_ORDER.get(item.get("status"), len(TASK_STATUS_SORT_ORDER)),
        due == "",
        due,
        PRIORITY_SORT_ORDER.get(item.get("priority"), len(PRIORITY_SORT_ORDER)),
    )


class TaskService:

    @staticmethod
    def _ensure_project(project_id: int):
        if not ProjectRepository.exists(project_id):
            raise NotFound("Project not found")

    @staticmethod
    def list(project_id: int, workstream: str = None, status: str = None):
        TaskService._ensure_project(project_id)
        return TaskRepository.list_by_project(project_id, workstream=workstream, status=status)

    @staticmethod
    def get(task_id: str, project_id: int):
        task = TaskRepository.get(task_id, project_id)
        if not task:
            raise NotFound("Task not found")
        return task

    @staticmethod
    def create(project_id: int, data, actor):
        payload = clean_payload(data, TASK_CREATE_FIELDS, required=("id", "name"))
        task_id = required_str(payload, "id", max_length=32)
        TaskService._ensure_project(project_id)
        # 同一项目内编号唯一，其他项目可以重复
        if TaskRepository.exists(task_id, project_id):
            raise DuplicateId(f"Task '{task_id}' already exists in this project")

        fields = _validate_task_fields(payload)
        fields.setdefault("priority", DEFAULT_PRIORITY)
        fields.setdefault("status", DEFAULT_TASK_STATUS)
        fields.setdefault("percent_complete", 0)
        try:
            task = TaskRepository.create(project_id, task_id, updated_by=actor.username, **fields)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Creating task %s in project %s failed: %s", task_id, project_id, e)
            raise StorageFailure("Failed to create task")
        return task

    @staticmethod
    def update(task_id: str, project_id: int, data, actor):
        payload = clean_payload(data, TASK_UPDATE_FIELDS)
        fields = _validate_task_fields(payload)
        task = TaskService.get(task_id, project_id)
        try:
            TaskRepository.update(task, updated_by=actor.username, updated_at=utc_now(), **fields)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Updating task %s in project %s failed: %s", task_id, project_id, e)
            raise StorageFailure("Failed to update task")
        return task

    @staticmethod
    def delete(task_id: str, project_id: int) -> dict:
        """附件文件 -> 附件行 -> 任务行，全部按 (task_id, project_id) 过滤。"""
        TaskService.get(task_id, project_id)
        root = current_app.config["ATTACHMENT_STORAGE_DIR"]
        try:
            filenames = AttachmentRepository.filenames_for_task(project_id, task_id)
            files_removed = sum(1 for name in filenames if remove_file(root, name))
            attachments = AttachmentRepository.delete_for_task(project_id, task_id)
            db.session.commit()
            tasks = TaskRepository.delete_scoped(task_id, project_id)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Deleting task %s in project %s failed: %s", task_id, project_id, e)
            raise StorageFailure("Failed to delete task")
        if tasks == 0:
            raise NotFound("Task not found")
        logger.info("Task %s/%s deleted with %s attachment(s)", project_id, task_id, attachments)
        return {"files_removed": files_removed, "attachments": attachments, "tasks": tasks}

    @staticmethod
    def my_tasks(actor):
        """owner 为当前用户显示名或登录名的任务（跨项目）。"""
        items = TaskRepository.list_by_owner_labels(actor.owner_labels())
        return sorted(items, key=_my_task_sort_key)

    @staticmethod
    def owners(project_id: int):
        TaskService._ensure_project(project_id)
        return TaskRepository.distinct_owners(project_id)
