from flask import Blueprint, request

from constants.roles import Role
from controllers.auth_helpers import auth_required, require_role
from services.template_service import TemplateService
from utils.response import json_response


template_bp = Blueprint("template", __name__, url_prefix="/api/admin")


# ---------- 工作流 ----------
@template_bp.get("/workstreams")
@auth_required()
@require_role(Role.READONLY)
def list_workstreams():
    return json_response(data=[ws.to_dict() for ws in TemplateService.list_workstreams()])


@template_bp.post("/workstreams")
@auth_required()
@require_role(Role.ADMIN)
def create_workstream():
    ws = TemplateService.create_workstream(request.get_json(silent=True))
    return json_response(message="Workstream created", data=ws.to_dict(), code=201)


@template_bp.put("/workstreams/<int:workstream_id>")
@auth_required()
@require_role(Role.ADMIN)
def update_workstream(workstream_id: int):
    ws = TemplateService.update_workstream(workstream_id, request.get_json(silent=True))
    return json_response(message="Workstream updated", data=ws.to_dict())


@template_bp.delete("/workstreams/<int:workstream_id>")
@auth_required()
@require_role(Role.ADMIN)
def delete_workstream(workstream_id: int):
    TemplateService.delete_workstream(workstream_id)
    return json_response(message="Workstream deleted")


# ---------- 默认任务 ----------
@template_bp.get("/default-tasks")
@auth_required()
@require_role(Role.READONLY)
def list_default_tasks():
    return json_response(data=[t.to_dict() for t in TemplateService.list_task_templates()])


@template_bp.post("/default-tasks")
@auth_required()
@require_role(Role.ADMIN)
def create_default_task():
    tpl = TemplateService.create_task_template(request.get_json(silent=True))
    return json_response(message="Default task created", data=tpl.to_dict(), code=201)


@template_bp.put("/default-tasks/<template_id>")
@auth_required()
@require_role(Role.ADMIN)
def update_default_task(template_id: str):
    tpl = TemplateService.update_task_template(template_id, request.get_json(silent=True))
    return json_response(message="Default task updated", data=tpl.to_dict())


@template_bp.delete("/default-tasks/<template_id>")
@auth_required()
@require_role(Role.ADMIN)
def delete_default_task(template_id: str):
    TemplateService.delete_task_template(template_id)
    return json_response(message="Default task deleted")
