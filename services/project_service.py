# services/project_service.py
"""
项目生命周期：创建（含种子数据）、查询、更新、级联删除、统计与导出。

删除顺序固定为：
  附件文件 -> 附件行 -> 任务 -> 联系人 -> 风险 -> 项目
每一步都是按 project_id 过滤的幂等语句并单独提交；中途失败时抛出 StorageFailure，
data 中带上已经删除的数量。项目行最后删除，保证失败时子数据仍能通过项目找到。
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Optional, Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from constants.project import validate_project_status
from models.project import Project
from repositories.contact_repository import ContactRepository
from repositories.project_repository import ProjectRepository
from repositories.risk_repository import RiskRepository
from repositories.task_repository import TaskRepository
from services.seed_service import SeedReport, SeedService
from utils.datetime_helpers import datetime_to_iso, utc_now
from utils.exceptions import NotFound, StorageFailure
from utils.file_storage import remove_file
from utils.validators import clean_payload, optional_date, optional_str, required_str

logger = logging.getLogger(__name__)

PROJECT_FIELDS = (
    "name", "description", "acquired_company", "parent_company",
    "status", "start_date", "target_completion",
)


@dataclass
class DeleteReport:
    project_id: int
    files_removed: int = 0
    files_missing: int = 0
    attachments: int = 0
    tasks: int = 0
    contacts: int = 0
    risks: int = 0
    projects: int = 0

    @property
    def total_rows(self) -> int:
        return self.attachments + self.tasks + self.contacts + self.risks + self.projects

    def to_dict(self) -> dict:
        data = asdict(self)
        data["total_rows"] = self.total_rows
        return data


def _storage_root() -> str:
    return current_app.config["ATTACHMENT_STORAGE_DIR"]


def _validate_project_fields(data: dict, creating: bool) -> dict:
    fields = {}
    if creating or "name" in data:
        fields["name"] = required_str(data, "name", max_length=200)
    for key in ("description", "acquired_company", "parent_company"):
        if key in data:
            fields[key] = optional_str(data, key, max_length=10000 if key == "description" else 200)
    if data.get("status") is not None:
        fields["status"] = validate_project_status(data["status"])
    for key in ("start_date", "target_completion"):
        if key in data:
            fields[key] = optional_date(data, key) or None
    return fields


class ProjectService:

    @staticmethod
    def create(data) -> Tuple[Project, SeedReport]:
        """
        两阶段创建：
          1. 写入并提交项目行（失败 -> StorageFailure，无副作用）
          2. 复制模板数据；单条失败记录在 SeedReport 中，不回滚项目
        """
        payload = clean_payload(data, PROJECT_FIELDS, required=("name",))
        fields = _validate_project_fields(payload, creating=True)
        if not fields.get("parent_company"):
            fields["parent_company"] = current_app.config.get("DEFAULT_PARENT_COMPANY")

        try:
            project = ProjectRepository.create(**fields)
            ProjectRepository.commit()
        except SQLAlchemyError as e:
            ProjectRepository.rollback()
            logger.error("Creating project failed: %s", e)
            raise StorageFailure("Failed to create project")

        report = SeedService.seed_project(project.id)
        logger.info("Project %s created: %s", project.id, project.name)
        return project, report

    @staticmethod
    def reseed(project_id: int) -> SeedReport:
        ProjectService.get(project_id)
        return SeedService.seed_project(project_id, skip_existing=True)

    @staticmethod
    def get(project_id: int) -> Project:
        project = ProjectRepository.get_by_id(project_id)
        if not project:
            raise NotFound("Project not found")
        return project

    @staticmethod
    def list():
        return ProjectRepository.list_with_progress()

    @staticmethod
    def update(project_id: int, data) -> Project:
        payload = clean_payload(data, PROJECT_FIELDS)
        project = ProjectService.get(project_id)
        fields = _validate_project_fields(payload, creating=False)
        if not fields:
            return project
        try:
            ProjectRepository.update(project, **fields)
            ProjectRepository.commit()
        except SQLAlchemyError as e:
            ProjectRepository.rollback()
            logger.error("Updating project %s failed: %s", project_id, e)
            raise StorageFailure("Failed to update project")
        return project

    @staticmethod
    def delete(project_id: int) -> DeleteReport:
        """级联删除；项目不存在时各步骤均为 0，返回空报告。"""
        report = DeleteReport(project_id=project_id)
        root = _storage_root()

        def _run(step: str, fn):
            try:
                count = fn(project_id)
                ProjectRepository.commit()
                return count
            except SQLAlchemyError as e:
                ProjectRepository.rollback()
                logger.error("Deleting project %s failed at step %s: %s", project_id, step, e)
                raise StorageFailure(
                    f"Project delete failed at step '{step}'",
                    data={"step": step, "removed": report.to_dict()},
                )

        # 1. 附件文件（缺失只记 warning，继续）
        for stored_name in _run("list_attachments", ProjectRepository.list_attachment_filenames):
            if remove_file(root, stored_name):
                report.files_removed += 1
            else:
                report.files_missing += 1

        # 2 ~ 6. 数据行，子表在前、项目行最后
        report.attachments = _run("attachments", ProjectRepository.delete_attachments)
        report.tasks = _run("tasks", ProjectRepository.delete_tasks)
        report.contacts = _run("contacts", ProjectRepository.delete_contacts)
        report.risks = _run("risks", ProjectRepository.delete_risks)
        report.projects = _run("project", ProjectRepository.delete_project_row)

        if report.projects:
            logger.info("Project %s deleted: %s", project_id, report.to_dict())
        else:
            logger.info("Project %s not found, delete reported %s rows", project_id, report.total_rows)
        return report

    @staticmethod
    def stats(project_id: int) -> dict:
        project = ProjectService.get(project_id)
        by_status = ProjectRepository.status_breakdown(project_id)
        by_workstream = ProjectRepository.workstream_breakdown(project_id)
        total = sum(item["count"] for item in by_status)
        return {
            "project_id": project.id,
            "total_tasks": total,
            "by_status": by_status,
            "by_workstream": by_workstream,
            "contacts": len(ContactRepository.list_by_project(project_id)),
            "risks": len(RiskRepository.list_by_project(project_id)),
        }

    @staticmethod
    def export(project_id: int, exported_by: Optional[str] = None) -> dict:
        """导出项目快照（纯数据，不含表格样式）。"""
        project = ProjectService.get(project_id)
        return {
            "project": project.to_dict(),
            "tasks": TaskRepository.list_by_project(project_id),
            "contacts": [c.to_dict() for c in ContactRepository.list_by_project(project_id)],
            "risks": [r.to_dict() for r in RiskRepository.list_by_project(project_id)],
            "workstreams": ProjectRepository.workstream_breakdown(project_id),
            "exported_at": datetime_to_iso(utc_now()),
            "exported_by": exported_by,
        }
