# -*- coding: utf-8 -*-
import pytest

from repositories.user_repository import UserRepository
from services.user_service import UserService
from utils.exceptions import ValidationFailed


def _user_id(username: str) -> int:
    return UserRepository.find_by_username(username).id


class TestUserAdministration:

    def test_admin_creates_user(self, admin_api):
        resp = admin_api.request("POST", "/api/users", json_data={
            "username": "newbie",
            "password": "longenough",
            "display_name": "New Bie",
            "email": "newbie@example.com",
            "role": "teamlead",
        })
        assert resp["_http_status"] == 201, resp
        assert resp["data"]["role"] == "teamlead"
        assert resp["data"]["active"] is True
        assert "password_hash" not in resp["data"]

    def test_duplicate_username(self, admin_api, make_user):
        make_user("taken")
        resp = admin_api.request("POST", "/api/users", json_data={"username": "taken", "password": "longenough"})
        assert resp["_http_status"] == 409
        assert resp["error"] == "DuplicateId"

    @pytest.mark.parametrize("payload", [
        {"username": "shorty", "password": "short"},
        {"username": "badrole", "password": "longenough", "role": "superuser"},
        {"username": "bademail", "password": "longenough", "email": "not-an-email"},
        {"username": "extra", "password": "longenough", "phone": "123"},
        {"password": "longenough"},
    ])
    def test_invalid_create_payloads(self, admin_api, payload):
        resp = admin_api.request("POST", "/api/users", json_data=payload)
        assert resp["_http_status"] == 400
        assert resp["error"] == "ValidationFailed"

    def test_user_list_requires_admin(self, api_as):
        lead = api_as("teamlead")
        assert lead.request("GET", "/api/users")["_http_status"] == 403
        brief = lead.request("GET", "/api/users/list")
        assert brief["_http_status"] == 200
        assert {"id", "username", "display_name", "role"} == set(brief["data"][0].keys())

    def test_brief_list_hides_inactive_users(self, admin_api, make_user):
        user = make_user("ghost")
        admin_api.request("PUT", f"/api/users/{user.id}", json_data={"active": False})
        names = [u["username"] for u in admin_api.request("GET", "/api/users/list")["data"]]
        assert "ghost" not in names
        assert "admin" in names

    def test_admin_cannot_delete_self(self, admin_api):
        resp = admin_api.request("DELETE", f"/api/users/{_user_id('admin')}")
        assert resp["_http_status"] == 400
        assert resp["error"] == "ValidationFailed"
        assert UserRepository.find_by_username("admin") is not None

    def test_admin_cannot_demote_self(self, admin_api):
        resp = admin_api.request("PUT", f"/api/users/{_user_id('admin')}", json_data={"role": "edit"})
        assert resp["_http_status"] == 400
        assert UserRepository.find_by_username("admin").role == "admin"

    def test_admin_cannot_deactivate_self(self, admin_api):
        resp = admin_api.request("PUT", f"/api/users/{_user_id('admin')}", json_data={"active": False})
        assert resp["_http_status"] == 400

    def test_last_active_admin_is_protected(self, app, make_user):
        other = make_user("second_admin", role="admin")
        admin = UserRepository.find_by_username("admin")
        UserService.update_user(other, admin.id, role="edit")
        # 现在 second_admin 是唯一的管理员
        with pytest.raises(ValidationFailed):
            UserService.update_user(admin, other.id, active=False)
        with pytest.raises(ValidationFailed):
            UserService.delete_user(admin, other.id)

    def test_role_change_revokes_sessions(self, admin_api, api_as):
        editor = api_as("edit", username="editor1")
        assert editor.request("GET", "/api/auth/me")["_http_status"] == 200

        resp = admin_api.request("PUT", f"/api/users/{_user_id('editor1')}", json_data={"role": "teamlead"})
        assert resp["_http_status"] == 200
        assert resp["data"]["role"] == "teamlead"
        assert editor.request("GET", "/api/auth/me")["_http_status"] == 401

    def test_reset_password(self, admin_api, api_as, api):
        editor = api_as("edit", username="editor2")
        uid = _user_id("editor2")

        short = admin_api.request("POST", f"/api/users/{uid}/reset-password", json_data={"new_password": "abc"})
        assert short["_http_status"] == 400

        resp = admin_api.request("POST", f"/api/users/{uid}/reset-password", json_data={"new_password": "brand-new-pass"})
        assert resp["_http_status"] == 200
        assert editor.request("GET", "/api/auth/me")["_http_status"] == 401
        assert api.login("editor2", "brand-new-pass")["_http_status"] == 200

    def test_delete_user(self, admin_api, api_as):
        viewer = api_as("readonly", username="leaving")
        resp = admin_api.request("DELETE", f"/api/users/{_user_id('leaving')}")
        assert resp["_http_status"] == 200
        assert UserRepository.find_by_username("leaving") is None
        assert viewer.request("GET", "/api/auth/me")["_http_status"] == 401

    def test_update_unknown_user(self, admin_api):
        resp = admin_api.request("PUT", "/api/users/9999", json_data={"display_name": "x"})
        assert resp["_http_status"] == 404


class TestChangeOwnPassword:

    def test_change_password(self, api_as, api):
        editor = api_as("edit", username="self_service")
        resp = editor.request("POST", "/api/auth/change-password", json_data={
            "current_password": "Passw0rd!",
            "new_password": "even-better-pass",
        })
        assert resp["_http_status"] == 200
        assert api.login("self_service", "even-better-pass")["_http_status"] == 200

    def test_wrong_current_password(self, api_as):
        editor = api_as("edit", username="self_service")
        resp = editor.request("POST", "/api/auth/change-password", json_data={
            "current_password": "wrong-one",
            "new_password": "even-better-pass",
        })
        assert resp["_http_status"] == 401
        assert resp["error"] == "InvalidCredentials"

    def test_new_password_too_short(self, api_as):
        editor = api_as("edit", username="self_service")
        resp = editor.request("POST", "/api/auth/change-password", json_data={
            "current_password": "Passw0rd!",
            "new_password": "short",
        })
        assert resp["_http_status"] == 400

    @pytest.mark.parametrize("payload", [
        {"current_password": 12345678, "new_password": "even-better-pass"},
        {"current_password": "Passw0rd!", "new_password": ["even-better-pass"]},
    ])
    def test_non_string_passwords_rejected(self, api_as, payload):
        editor = api_as("edit", username="self_service")
        resp = editor.request("POST", "/api/auth/change-password", json_data=payload)
        assert resp["_http_status"] == 400
        assert resp["error"] == "ValidationFailed"

    def test_readonly_cannot_change_password(self, api_as):
        viewer = api_as("readonly")
        resp = viewer.request("POST", "/api/auth/change-password", json_data={
            "current_password": "Passw0rd!",
            "new_password": "even-better-pass",
        })
        assert resp["_http_status"] == 403
