from flask import Blueprint, request

from constants.roles import Role
from controllers.auth_helpers import auth_required, require_role
from services.contact_service import ContactService
from utils.response import json_response


contact_bp = Blueprint("contact", __name__, url_prefix="/api/projects/<int:project_id>/contacts")


@contact_bp.get("")
@auth_required()
@require_role(Role.READONLY)
def list_contacts(project_id: int):
    return json_response(data=[c.to_dict() for c in ContactService.list(project_id)])


@contact_bp.post("")
@auth_required()
@require_role(Role.TEAMLEAD)
def create_contact(project_id: int):
    contact = ContactService.create(project_id, request.get_json(silent=True))
    return json_response(message="Contact created", data=contact.to_dict(), code=201)


@contact_bp.put("/<int:contact_id>")
@auth_required()
@require_role(Role.EDIT)
def update_contact(project_id: int, contact_id: int):
    contact = ContactService.update(contact_id, project_id, request.get_json(silent=True))
    return json_response(message="Contact updated", data=contact.to_dict())


@contact_bp.delete("/<int:contact_id>")
@auth_required()
@require_role(Role.TEAMLEAD)
def delete_contact(project_id: int, contact_id: int):
    ContactService.delete(contact_id, project_id)
    return json_response(message="Contact deleted")
