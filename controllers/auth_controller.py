# controllers/auth_controller.py
from flask import Blueprint, request

from constants.roles import Role
from controllers.auth_helpers import auth_required, require_role, client_address, current_token
from services.password_service import PasswordService
from services.session_service import SessionService
from utils.exceptions import ValidationFailed
from utils.permissions import capabilities_for, get_current_user
from utils.response import json_response
from utils.validators import clean_payload


auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/login")
def login():
    data = clean_payload(request.get_json(silent=True), ("username", "password"))
    username = data.get("username")
    password = data.get("password")
    if not isinstance(username, str) or not isinstance(password, str) or not username.strip() or not password:
        raise ValidationFailed("username and password are required")

    session = SessionService.login(username, password, client_address())
    return json_response(data={
        "token": session.token,
        "expires_at": session.to_dict()["expires_at"],
        "user": session.user.to_dict(),
        "capabilities": capabilities_for(session.user.role).to_dict(),
    })


@auth_bp.post("/logout")
def logout():
    # 无 token / 已注销都视为成功
    SessionService.logout(current_token())
    return json_response(message="Signed out")


@auth_bp.get("/me")
@auth_required()
@require_role(Role.READONLY)
def me():
    user = get_current_user()
    session = SessionService.get_session(current_token())
    return json_response(data={
        "user": user.to_dict(),
        "capabilities": capabilities_for(user.role).to_dict(),
        "expires_at": session.to_dict()["expires_at"] if session else None,
    })


@auth_bp.post("/change-password")
@auth_required()
@require_role(Role.EDIT)
def change_password():
    data = clean_payload(
        request.get_json(silent=True),
        ("current_password", "new_password"),
        required=("current_password", "new_password"),
    )
    PasswordService.change_password(
        user_id=get_current_user().id,
        current_password=data["current_password"],
        new_password=data["new_password"],
    )
    return json_response(message="Password changed")
