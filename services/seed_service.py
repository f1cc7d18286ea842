# services/seed_service.py
"""
项目种子数据与首次启动初始化。

新项目的子数据分两阶段写入：
  1. 项目行单独提交；
  2. 逐条复制模板任务、起始联系人、起始风险，每条在独立 SAVEPOINT 中执行。
第 2 阶段任何一条失败只记录 ERROR 并写入 SeedReport，不回滚项目本身；
调用方可以稍后调用 reseed 补齐（已存在的行会被跳过）。
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List

from sqlalchemy.exc import SQLAlchemyError

from constants.catalog import (
    DEFAULT_TASK_TEMPLATES,
    DEFAULT_WORKSTREAMS,
    DEMO_PROJECT,
    STARTER_CONTACTS,
    STARTER_RISKS,
)
from constants.project import DEFAULT_TASK_STATUS
from extensions.database import db
from repositories.contact_repository import ContactRepository
from repositories.project_repository import ProjectRepository
from repositories.risk_repository import RiskRepository
from repositories.task_repository import TaskRepository
from repositories.template_repository import TemplateRepository

logger = logging.getLogger(__name__)


@dataclass
class SeedReport:
    project_id: int
    tasks_created: int = 0
    contacts_created: int = 0
    risks_created: int = 0
    skipped: int = 0
    failures: List[dict] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict:
        return {
            "project_id": self.project_id,
            "tasks_created": self.tasks_created,
            "contacts_created": self.contacts_created,
            "risks_created": self.risks_created,
            "skipped": self.skipped,
            "failures": list(self.failures),
            "ok": self.ok,
        }


class SeedService:

    @staticmethod
    def _insert(report: SeedReport, entity: str, key, fn: Callable[..., object], *args, **kwargs) -> bool:
        try:
            with db.session.begin_nested():
                fn(*args, **kwargs)
            return True
        except SQLAlchemyError as e:
            logger.error("Seeding %s %s for project %s failed: %s", entity, key, report.project_id, e)
            report.failures.append({"entity": entity, "id": key, "error": e.__class__.__name__})
            return False

    @staticmethod
    def seed_project(project_id: int, skip_existing: bool = False) -> SeedReport:
        """复制启用中的模板任务 + 起始联系人 + 起始风险到指定项目。"""
        report = SeedReport(project_id=project_id)

        for tpl in TemplateRepository.list_task_templates(include_inactive=False):
            if skip_existing and TaskRepository.exists(tpl.id, project_id):
                report.skipped += 1
                continue
            created = SeedService._insert(
                report, "task", tpl.id, TaskRepository.create, project_id, tpl.id,
                workstream=tpl.workstream,
                name=tpl.name,
                description=tpl.description,
                priority=tpl.priority,
                dependencies=tpl.dependencies,
                status=DEFAULT_TASK_STATUS,
                percent_complete=0,
            )
            report.tasks_created += int(created)

        existing_contacts = set()
        if skip_existing:
            existing_contacts = {
                (c.role, c.company, c.workstream) for c in ContactRepository.list_by_project(project_id)
            }
        for role, company, workstream in STARTER_CONTACTS:
            if (role, company, workstream) in existing_contacts:
                report.skipped += 1
                continue
            created = SeedService._insert(
                report, "contact", role, ContactRepository.create, project_id,
                role=role, company=company, workstream=workstream,
            )
            report.contacts_created += int(created)

        for risk_id, description, workstream, likelihood, impact, mitigation in STARTER_RISKS:
            if skip_existing and RiskRepository.get(risk_id, project_id) is not None:
                report.skipped += 1
                continue
            created = SeedService._insert(
                report, "risk", risk_id, RiskRepository.create, project_id, risk_id,
                description=description,
                workstream=workstream,
                likelihood=likelihood,
                impact=impact,
                mitigation=mitigation,
            )
            report.risks_created += int(created)

        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Committing seed data for project %s failed: %s", project_id, e)
            report.failures.append({"entity": "commit", "id": None, "error": e.__class__.__name__})
            report.tasks_created = report.contacts_created = report.risks_created = 0

        if report.failures:
            logger.error("Project %s seeded with %s failure(s)", project_id, len(report.failures))
        else:
            logger.info("Project %s seeded: %s tasks, %s contacts, %s risks",
                        project_id, report.tasks_created, report.contacts_created, report.risks_created)
        return report

    # ---------- 首次启动 ----------
    @staticmethod
    def ensure_default_catalog() -> bool:
        """模板目录为空时写入默认工作流与默认任务，返回是否写入。"""
        if TemplateRepository.count_workstreams() or TemplateRepository.count_task_templates():
            return False
        for name, color, order in DEFAULT_WORKSTREAMS:
            TemplateRepository.add_workstream(name=name, color=color, sort_order=order)
        for tpl_id, workstream, name, description, priority, deps, order in DEFAULT_TASK_TEMPLATES:
            TemplateRepository.add_task_template(
                id=tpl_id,
                workstream=workstream,
                name=name,
                description=description,
                priority=priority,
                dependencies=deps,
                sort_order=order,
            )
        db.session.commit()
        logger.info("Default catalog created: %s workstreams, %s task templates",
                    len(DEFAULT_WORKSTREAMS), len(DEFAULT_TASK_TEMPLATES))
        return True

    @staticmethod
    def ensure_demo_project(parent_company: str):
        if ProjectRepository.list_with_progress():
            return None
        project = ProjectRepository.create(parent_company=parent_company, **DEMO_PROJECT)
        ProjectRepository.commit()
        SeedService.seed_project(project.id)
        logger.info("Demo project created: %s", project.id)
        return project

    @staticmethod
    def bootstrap_defaults(app):
        from services.user_service import UserService

        UserService.ensure_default_admin(app)
        SeedService.ensure_default_catalog()
        if app.config.get("SEED_DEMO_PROJECT"):
            SeedService.ensure_demo_project(app.config.get("DEFAULT_PARENT_COMPANY"))
