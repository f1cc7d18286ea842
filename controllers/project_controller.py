from flask import Blueprint, request

from constants.roles import Role
from controllers.auth_helpers import auth_required, require_role
from services.project_service import ProjectService
from utils.permissions import get_current_user
from utils.response import json_response


project_bp = Blueprint("project", __name__, url_prefix="/api/projects")


@project_bp.get("")
@auth_required()
@require_role(Role.READONLY)
def list_projects():
    return json_response(data=ProjectService.list())


@project_bp.post("")
@auth_required()
@require_role(Role.ADMIN)
def create_project():
    project, report = ProjectService.create(request.get_json(silent=True))
    return json_response(
        message="Project created" if report.ok else "Project created with seeding errors",
        data={"project": project.to_dict(), "seed": report.to_dict()},
        code=201,
    )


@project_bp.get("/<int:project_id>")
@auth_required()
@require_role(Role.READONLY)
def get_project(project_id: int):
    return json_response(data=ProjectService.get(project_id).to_dict())


@project_bp.put("/<int:project_id>")
@auth_required()
@require_role(Role.ADMIN)
def update_project(project_id: int):
    project = ProjectService.update(project_id, request.get_json(silent=True))
    return json_response(message="Project updated", data=project.to_dict())


@project_bp.delete("/<int:project_id>")
@auth_required()
@require_role(Role.ADMIN)
def delete_project(project_id: int):
    report = ProjectService.delete(project_id)
    return json_response(message="Project deleted", data=report.to_dict())


@project_bp.post("/<int:project_id>/reseed")
@auth_required()
@require_role(Role.ADMIN)
def reseed_project(project_id: int):
    report = ProjectService.reseed(project_id)
    return json_response(data=report.to_dict())


@project_bp.get("/<int:project_id>/stats")
@auth_required()
@require_role(Role.READONLY)
def project_stats(project_id: int):
    return json_response(data=ProjectService.stats(project_id))


@project_bp.get("/<int:project_id>/export")
@auth_required()
@require_role(Role.READONLY)
def export_project(project_id: int):
    return json_response(data=ProjectService.export(project_id, exported_by=get_current_user().username))
