from flask import Blueprint, request

from constants.roles import Role
from controllers.auth_helpers import auth_required, require_role
from services.task_service import TaskService
from utils.permissions import get_current_user
from utils.response import json_response


task_bp = Blueprint("task", __name__, url_prefix="/api")


@task_bp.get("/projects/<int:project_id>/tasks")
@auth_required()
@require_role(Role.READONLY)
def list_tasks(project_id: int):
    items = TaskService.list(
        project_id,
        workstream=request.args.get("workstream") or None,
        status=request.args.get("status") or None,
    )
    return json_response(data=items)


@task_bp.get("/projects/<int:project_id>/tasks/<task_id>")
@auth_required()
@require_role(Role.READONLY)
def get_task(project_id: int, task_id: str):
    return json_response(data=TaskService.get(task_id, project_id).to_dict())


@task_bp.post("/projects/<int:project_id>/tasks")
@auth_required()
@require_role(Role.TEAMLEAD)
def create_task(project_id: int):
    task = TaskService.create(project_id, request.get_json(silent=True), get_current_user())
    return json_response(message="Task created", data=task.to_dict(), code=201)


@task_bp.put("/projects/<int:project_id>/tasks/<task_id>")
@auth_required()
@require_role(Role.EDIT)
def update_task(project_id: int, task_id: str):
    task = TaskService.update(task_id, project_id, request.get_json(silent=True), get_current_user())
    return json_response(message="Task updated", data=task.to_dict())


@task_bp.delete("/projects/<int:project_id>/tasks/<task_id>")
@auth_required()
@require_role(Role.TEAMLEAD)
def delete_task(project_id: int, task_id: str):
    result = TaskService.delete(task_id, project_id)
    return json_response(message="Task deleted", data=result)


@task_bp.get("/projects/<int:project_id>/owners")
@auth_required()
@require_role(Role.READONLY)
def list_owners(project_id: int):
    return json_response(data=TaskService.owners(project_id))


@task_bp.get("/my-tasks")
@auth_required()
@require_role(Role.READONLY)
def my_tasks():
    return json_response(data=TaskService.my_tasks(get_current_user()))
