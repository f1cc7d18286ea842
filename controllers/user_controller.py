# controllers/user_controller.py
from flask import Blueprint, request

from constants.roles import Role
from controllers.auth_helpers import auth_required, require_role
from services.user_service import UserService
from utils.permissions import get_current_user
from utils.response import json_response
from utils.validators import clean_payload, optional_bool, optional_str

user_bp = Blueprint("users", __name__)

USER_CREATE_FIELDS = ("username", "password", "display_name", "email", "role")
USER_UPDATE_FIELDS = ("display_name", "email", "role", "active")


@user_bp.get("/list")
@auth_required()
@require_role(Role.READONLY)
def list_active_users():
    """任务 owner 下拉框：仅启用中的用户，精简字段。"""
    return json_response(data=UserService.list_active_brief())


@user_bp.get("")
@auth_required()
@require_role(Role.ADMIN)
def list_users():
    return json_response(data=[u.to_dict() for u in UserService.list_users()])


@user_bp.post("")
@auth_required()
@require_role(Role.ADMIN)
def create_user():
    data = clean_payload(request.get_json(silent=True), USER_CREATE_FIELDS, required=("username", "password"))
    user = UserService.create_user(
        username=optional_str(data, "username", max_length=64),
        password=data.get("password") if isinstance(data.get("password"), str) else None,
        role=data.get("role"),
        display_name=optional_str(data, "display_name", max_length=128),
        email=optional_str(data, "email", max_length=120),
    )
    return json_response(message="User created", data=user.to_dict(), code=201)


@user_bp.put("/<int:user_id>")
@auth_required()
@require_role(Role.ADMIN)
def update_user(user_id: int):
    data = clean_payload(request.get_json(silent=True), USER_UPDATE_FIELDS)
    user = UserService.update_user(
        get_current_user(),
        user_id,
        display_name=optional_str(data, "display_name", max_length=128),
        email=optional_str(data, "email", max_length=120),
        role=data.get("role"),
        active=optional_bool(data, "active"),
    )
    return json_response(message="User updated", data=user.to_dict())


@user_bp.post("/<int:user_id>/reset-password")
@auth_required()
@require_role(Role.ADMIN)
def reset_password(user_id: int):
    data = clean_payload(request.get_json(silent=True), ("new_password",), required=("new_password",))
    UserService.reset_password(get_current_user(), user_id, data["new_password"])
    return json_response(message="Password reset")


@user_bp.delete("/<int:user_id>")
@auth_required()
@require_role(Role.ADMIN)
def delete_user(user_id: int):
    UserService.delete_user(get_current_user(), user_id)
    return json_response(message="User deleted")
