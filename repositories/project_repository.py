from typing import Dict, List, Optional

from sqlalchemy import case, delete, desc, func, select
from sqlalchemy.exc import IntegrityError

from constants.project import TaskStatus
from extensions.database import db
from models import Contact, Project, Risk, Task, TaskAttachment


class ProjectRepository:
    """
    项目及其子表的持久化操作。
    删除相关方法均为按 project_id 过滤的单条 DELETE，可重复执行（找不到行时返回 0）。
    """

    @staticmethod
    def create(**fields) -> Project:
        project = Project(**fields)
        db.session.add(project)
        db.session.flush()
        return project

    @staticmethod
    def get_by_id(project_id: int) -> Optional[Project]:
        return db.session.get(Project, project_id)

    @staticmethod
    def exists(project_id: int) -> bool:
        stmt = select(Project.id).where(Project.id == project_id)
        return db.session.execute(stmt).first() is not None

    @staticmethod
    def list_with_progress() -> List[Dict]:
        """项目列表附带任务总数、完成数与平均进度。"""
        task_count = (
            select(func.count())
            .where(Task.project_id == Project.id)
            .correlate(Project)
            .scalar_subquery()
        )
        completed_count = (
            select(func.count())
            .where(Task.project_id == Project.id, Task.status == TaskStatus.COMPLETE.value)
            .correlate(Project)
            .scalar_subquery()
        )
        progress = (
            select(func.avg(Task.percent_complete))
            .where(Task.project_id == Project.id)
            .correlate(Project)
            .scalar_subquery()
        )
        stmt = (
            select(Project, task_count, completed_count, progress)
            .order_by(desc(Project.created_at), desc(Project.id))
        )
        rows = db.session.execute(stmt).all()
        items = []
        for project, total, completed, avg in rows:
            item = project.to_dict()
            item["task_count"] = total or 0
            item["completed_count"] = completed or 0
            item["overall_progress"] = round(float(avg), 1) if avg is not None else 0
            items.append(item)
        return items

    @staticmethod
    def update(project: Project, **fields) -> Project:
        for key, value in fields.items():
            setattr(project, key, value)
        db.session.flush()
        return project

    # ---------- 级联删除的各个步骤 ----------
    @staticmethod
    def list_attachment_filenames(project_id: int) -> List[str]:
        stmt = select(TaskAttachment.stored_filename).where(TaskAttachment.project_id == project_id)
        return list(db.session.execute(stmt).scalars().all())

    @staticmethod
    def delete_attachments(project_id: int) -> int:
        stmt = delete(TaskAttachment).where(TaskAttachment.project_id == project_id)
        return db.session.execute(stmt).rowcount or 0

    @staticmethod
    def delete_tasks(project_id: int) -> int:
        return db.session.execute(delete(Task).where(Task.project_id == project_id)).rowcount or 0

    @staticmethod
    def delete_contacts(project_id: int) -> int:
        return db.session.execute(delete(Contact).where(Contact.project_id == project_id)).rowcount or 0

    @staticmethod
    def delete_risks(project_id: int) -> int:
        return db.session.execute(delete(Risk).where(Risk.project_id == project_id)).rowcount or 0

    @staticmethod
    def delete_project_row(project_id: int) -> int:
        return db.session.execute(delete(Project).where(Project.id == project_id)).rowcount or 0

    # ---------- 统计 ----------
    @staticmethod
    def status_breakdown(project_id: int) -> List[Dict]:
        stmt = (
            select(Task.status, func.count())
            .where(Task.project_id == project_id)
            .group_by(Task.status)
        )
        return [{"status": s, "count": c} for s, c in db.session.execute(stmt).all()]

    @staticmethod
    def workstream_breakdown(project_id: int) -> List[Dict]:
        complete = func.sum(case((Task.status == TaskStatus.COMPLETE.value, 1), else_=0))
        stmt = (
            select(Task.workstream, func.count(), complete, func.avg(Task.percent_complete))
            .where(Task.project_id == project_id)
            .group_by(Task.workstream)
            .order_by(Task.workstream)
        )
        return [
            {
                "workstream": ws,
                "total": total,
                "complete": int(done or 0),
                "progress": round(float(avg), 1) if avg is not None else 0,
            }
            for ws, total, done, avg in db.session.execute(stmt).all()
        ]

    @staticmethod
    def commit():
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def rollback():
        db.session.rollback()
