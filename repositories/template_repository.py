from typing import List, Optional

from sqlalchemy import func, select

from extensions.database import db
from models.template import DefaultTaskTemplate, DefaultWorkstream


class TemplateRepository:
    """
    模板目录（工作流 + 默认任务）的持久化操作。
    停用（active=False）的条目保留在目录中，但不会被复制到新项目。
    """

    # ---------- 工作流 ----------
    @staticmethod
    def list_workstreams(include_inactive: bool = True) -> List[DefaultWorkstream]:
        stmt = select(DefaultWorkstream)
        if not include_inactive:
            stmt = stmt.where(DefaultWorkstream.active.is_(True))
        stmt = stmt.order_by(DefaultWorkstream.sort_order, DefaultWorkstream.name)
        return db.session.execute(stmt).scalars().all()

    @staticmethod
    def get_workstream(workstream_id: int) -> Optional[DefaultWorkstream]:
        return db.session.get(DefaultWorkstream, workstream_id)

    @staticmethod
    def find_workstream_by_name(name: str) -> Optional[DefaultWorkstream]:
        stmt = select(DefaultWorkstream).where(DefaultWorkstream.name == name)
        return db.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def add_workstream(**fields) -> DefaultWorkstream:
        ws = DefaultWorkstream(**fields)
        db.session.add(ws)
        db.session.flush()
        return ws

    @staticmethod
    def next_workstream_order() -> int:
        current = db.session.execute(select(func.max(DefaultWorkstream.sort_order))).scalar()
        return (current or 0) + 1

    @staticmethod
    def count_workstreams() -> int:
        return db.session.execute(select(func.count(DefaultWorkstream.id))).scalar() or 0

    # ---------- 默认任务 ----------
    @staticmethod
    def list_task_templates(include_inactive: bool = True) -> List[DefaultTaskTemplate]:
        stmt = select(DefaultTaskTemplate)
        if not include_inactive:
            stmt = stmt.where(DefaultTaskTemplate.active.is_(True))
        stmt = stmt.order_by(
            DefaultTaskTemplate.workstream,
            DefaultTaskTemplate.sort_order,
            DefaultTaskTemplate.id,
        )
        return db.session.execute(stmt).scalars().all()

    @staticmethod
    def get_task_template(template_id: str) -> Optional[DefaultTaskTemplate]:
        return db.session.get(DefaultTaskTemplate, template_id)

    @staticmethod
    def add_task_template(**fields) -> DefaultTaskTemplate:
        tpl = DefaultTaskTemplate(**fields)
        db.session.add(tpl)
        db.session.flush()
        return tpl

    @staticmethod
    def next_task_order(workstream: str) -> int:
        stmt = select(func.max(DefaultTaskTemplate.sort_order)).where(
            DefaultTaskTemplate.workstream == workstream
        )
        current = db.session.execute(stmt).scalar()
        return (current or 0) + 1

    @staticmethod
    def count_task_templates() -> int:
        return db.session.execute(select(func.count(DefaultTaskTemplate.id))).scalar() or 0

    @staticmethod
    def update(entity, **fields):
        for key, value in fields.items():
            setattr(entity, key, value)
        db.session.flush()
        return entity

    @staticmethod
    def delete(entity):
        db.session.delete(entity)
        db.session.flush()
