from flask import Blueprint, request

from constants.roles import Role
from controllers.auth_helpers import auth_required, require_role
from services.risk_service import RiskService
from utils.response import json_response


risk_bp = Blueprint("risk", __name__, url_prefix="/api/projects/<int:project_id>/risks")


@risk_bp.get("")
@auth_required()
@require_role(Role.READONLY)
def list_risks(project_id: int):
    return json_response(data=[r.to_dict() for r in RiskService.list(project_id)])


@risk_bp.post("")
@auth_required()
@require_role(Role.TEAMLEAD)
def create_risk(project_id: int):
    risk = RiskService.create(project_id, request.get_json(silent=True))
    return json_response(message="Risk created", data=risk.to_dict(), code=201)


@risk_bp.put("/<risk_id>")
@auth_required()
@require_role(Role.EDIT)
def update_risk(project_id: int, risk_id: str):
    risk = RiskService.update(risk_id, project_id, request.get_json(silent=True))
    return json_response(message="Risk updated", data=risk.to_dict())


@risk_bp.delete("/<risk_id>")
@auth_required()
@require_role(Role.TEAMLEAD)
def delete_risk(project_id: int, risk_id: str):
    RiskService.delete(risk_id, project_id)
    return json_response(message="Risk deleted")
