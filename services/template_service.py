# services/template_service.py
"""模板目录维护。修改模板只影响之后创建的项目，已有项目的任务不受影响。"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from constants.catalog import DEFAULT_WORKSTREAM_COLOR
from constants.project import DEFAULT_PRIORITY, validate_priority
from extensions.database import db
from repositories.template_repository import TemplateRepository
from utils.exceptions import DuplicateId, NotFound, StorageFailure, ValidationFailed
from utils.validators import clean_payload, optional_bool, optional_int, optional_str, required_str

logger = logging.getLogger(__name__)

WORKSTREAM_FIELDS = ("name", "color", "sort_order", "active")
TASK_TEMPLATE_FIELDS = ("id", "workstream", "name", "description", "priority",
                        "dependencies", "sort_order", "active")


def _commit(duplicate_message: str):
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateId(duplicate_message)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Template catalog write failed: %s", e)
        raise StorageFailure("Failed to save template catalog")


class TemplateService:

    # ---------- 工作流 ----------
    @staticmethod
    def list_workstreams():
        return TemplateRepository.list_workstreams()

    @staticmethod
    def create_workstream(data):
        payload = clean_payload(data, WORKSTREAM_FIELDS, required=("name",))
        name = required_str(payload, "name", max_length=128)
        if TemplateRepository.find_workstream_by_name(name):
            raise DuplicateId(f"Workstream '{name}' already exists")
        sort_order = optional_int(payload, "sort_order")
        ws = TemplateRepository.add_workstream(
            name=name,
            color=optional_str(payload, "color", max_length=16) or DEFAULT_WORKSTREAM_COLOR,
            sort_order=sort_order if sort_order is not None else TemplateRepository.next_workstream_order(),
            active=optional_bool(payload, "active") is not False,
        )
        _commit(f"Workstream '{name}' already exists")
        return ws

    @staticmethod
    def update_workstream(workstream_id: int, data):
        payload = clean_payload(data, WORKSTREAM_FIELDS)
        ws = TemplateRepository.get_workstream(workstream_id)
        if not ws:
            raise NotFound("Workstream not found")
        fields = {}
        if "name" in payload:
            fields["name"] = required_str(payload, "name", max_length=128)
            other = TemplateRepository.find_workstream_by_name(fields["name"])
            if other is not None and other.id != ws.id:
                raise DuplicateId(f"Workstream '{fields['name']}' already exists")
        if payload.get("color") is not None:
            fields["color"] = optional_str(payload, "color", max_length=16) or DEFAULT_WORKSTREAM_COLOR
        if payload.get("sort_order") is not None:
            fields["sort_order"] = optional_int(payload, "sort_order")
        if payload.get("active") is not None:
            fields["active"] = optional_bool(payload, "active")
        if fields:
            TemplateRepository.update(ws, **fields)
            _commit("Workstream name already exists")
        return ws

    @staticmethod
    def delete_workstream(workstream_id: int):
        ws = TemplateRepository.get_workstream(workstream_id)
        if not ws:
            raise NotFound("Workstream not found")
        TemplateRepository.delete(ws)
        _commit("Workstream delete conflict")
        logger.info("Workstream %s deleted", workstream_id)

    # ---------- 默认任务 ----------
    @staticmethod
    def list_task_templates():
        return TemplateRepository.list_task_templates()

    @staticmethod
    def create_task_template(data):
        payload = clean_payload(data, TASK_TEMPLATE_FIELDS, required=("id", "workstream", "name"))
        tpl_id = required_str(payload, "id", max_length=32)
        if TemplateRepository.get_task_template(tpl_id):
            raise DuplicateId(f"Default task '{tpl_id}' already exists")
        workstream = required_str(payload, "workstream", max_length=128)
        priority = payload.get("priority") or DEFAULT_PRIORITY
        sort_order = optional_int(payload, "sort_order")
        tpl = TemplateRepository.add_task_template(
            id=tpl_id,
            workstream=workstream,
            name=required_str(payload, "name", max_length=200),
            description=optional_str(payload, "description", max_length=10000),
            priority=validate_priority(priority),
            dependencies=optional_str(payload, "dependencies") or "",
            sort_order=sort_order if sort_order is not None else TemplateRepository.next_task_order(workstream),
            active=optional_bool(payload, "active") is not False,
        )
        _commit(f"Default task '{tpl_id}' already exists")
        return tpl

    @staticmethod
    def update_task_template(template_id: str, data):
        payload = clean_payload(data, TASK_TEMPLATE_FIELDS)
        tpl = TemplateRepository.get_task_template(template_id)
        if not tpl:
            raise NotFound("Default task not found")
        if "id" in payload and payload["id"] != template_id:
            raise ValidationFailed("Default task id cannot be changed")
        fields = {}
        for key, max_length in (("workstream", 128), ("name", 200)):
            if key in payload:
                fields[key] = required_str(payload, key, max_length=max_length)
        if "description" in payload:
            fields["description"] = optional_str(payload, "description", max_length=10000)
        if "dependencies" in payload:
            fields["dependencies"] = optional_str(payload, "dependencies") or ""
        if payload.get("priority") is not None:
            fields["priority"] = validate_priority(payload["priority"])
        if payload.get("sort_order") is not None:
            fields["sort_order"] = optional_int(payload, "sort_order")
        if payload.get("active") is not None:
            fields["active"] = optional_bool(payload, "active")
        if fields:
            TemplateRepository.update(tpl, **fields)
            _commit("Default task conflict")
        return tpl

    @staticmethod
    def delete_task_template(template_id: str):
        tpl = TemplateRepository.get_task_template(template_id)
        if not tpl:
            raise NotFound("Default task not found")
        TemplateRepository.delete(tpl)
        _commit("Default task delete conflict")
        logger.info("Default task %s deleted", template_id)
