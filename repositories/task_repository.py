from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete, func, select

from extensions.database import db
from models import Project, Task, TaskAttachment


class TaskRepository:
    """项目任务的持久化操作，所有读写都以 (id, project_id) 定位。"""

    @staticmethod
    def get(task_id: str, project_id: int) -> Optional[Task]:
        return db.session.get(Task, (task_id, project_id))

    @staticmethod
    def exists(task_id: str, project_id: int) -> bool:
        stmt = select(Task.id).where(Task.id == task_id, Task.project_id == project_id)
        return db.session.execute(stmt).first() is not None

    @staticmethod
    def create(project_id: int, task_id: str, **fields) -> Task:
        task = Task(id=task_id, project_id=project_id, **fields)
        db.session.add(task)
        db.session.flush()
        return task

    @staticmethod
    def update(task: Task, **fields) -> Task:
        for key, value in fields.items():
            setattr(task, key, value)
        db.session.flush()
        return task

    @staticmethod
    def delete_scoped(task_id: str, project_id: int) -> int:
        stmt = delete(Task).where(Task.id == task_id, Task.project_id == project_id)
        return db.session.execute(stmt).rowcount or 0

    @staticmethod
    def _attachment_count():
        return (
            select(func.count(TaskAttachment.id))
            .where(
                TaskAttachment.project_id == Task.project_id,
                TaskAttachment.task_id == Task.id,
            )
            .correlate(Task)
            .scalar_subquery()
        )

    @staticmethod
    def list_by_project(project_id: int, workstream: str = None, status: str = None) -> List[Dict]:
        """项目任务列表，附带每个任务的附件数。"""
        stmt = select(Task, TaskRepository._attachment_count()).where(Task.project_id == project_id)
        if workstream:
            stmt = stmt.where(Task.workstream == workstream)
        if status:
            stmt = stmt.where(Task.status == status)
        stmt = stmt.order_by(Task.workstream, Task.id)

        items = []
        for task, count in db.session.execute(stmt).all():
            item = task.to_dict()
            item["attachment_count"] = count or 0
            items.append(item)
        return items

    @staticmethod
    def list_by_owner_labels(labels: Sequence[str]) -> List[Dict]:
        """跨项目查询 owner 命中任一名字的任务，附带项目名称与附件数。"""
        if not labels:
            return []
        stmt = (
            select(Task, Project.name, TaskRepository._attachment_count())
            .join(Project, Project.id == Task.project_id)
            .where(Task.owner.in_(list(labels)))
            .order_by(Task.project_id, Task.id)
        )
        items = []
        for task, project_name, count in db.session.execute(stmt).all():
            item = task.to_dict()
            item["project_name"] = project_name
            item["attachment_count"] = count or 0
            items.append(item)
        return items

    @staticmethod
    def distinct_owners(project_id: int) -> List[str]:
        stmt = (
            select(Task.owner)
            .where(Task.project_id == project_id, Task.owner.isnot(None), Task.owner != "")
            .distinct()
            .order_by(Task.owner)
        )
        return list(db.session.execute(stmt).scalars().all())
