# -*- coding: utf-8 -*-
"""
公共 fixture：
- 每个测试一个全新的 create_app("testing")（内存 SQLite），启动时已写入默认管理员与模板目录
- 附件存储目录指向 tmp_path
- 进程内会话表 / 登录失败表在测试前后清空
"""
import json
from typing import Any, Dict, Optional

import pytest

from app import create_app
from extensions.database import db
from extensions.session_store import reset_stores
from services.project_service import ProjectService
from services.user_service import UserService

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin12345"
DEFAULT_PASSWORD = "Passw0rd!"


class APIClient:
    """Flask test client 的薄封装：统一带上 Bearer token，返回 dict 并附带 _http_status。"""

    def __init__(self, client, remote_addr: str = "127.0.0.1"):
        self.client = client
        self.remote_addr = remote_addr
        self.token: Optional[str] = None

    def set_token(self, token: str):
        self.token = token

    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def request(self, method: str, path: str,
                json_data: Any = None,
                params: Optional[Dict] = None,
                data: Optional[Dict] = None,
                remote_addr: Optional[str] = None,
                attach_token: bool = True) -> Dict[str, Any]:
        kwargs = {
            "method": method.upper(),
            "query_string": params,
            "headers": self.headers() if attach_token else {},
            "environ_base": {"REMOTE_ADDR": remote_addr or self.remote_addr},
        }
        if data is not None:
            kwargs["data"] = data
            kwargs["content_type"] = "multipart/form-data"
        elif json_data is not None:
            kwargs["data"] = json.dumps(json_data)
            kwargs["content_type"] = "application/json"

        response = self.client.open(path, **kwargs)
        result = response.get_json(silent=True)
        if not isinstance(result, dict):
            result = {"_raw": response.data}
        result["_http_status"] = response.status_code
        return result

    def login(self, username: str, password: str, remote_addr: Optional[str] = None) -> Dict[str, Any]:
        resp = self.request(
            "POST", "/api/auth/login",
            json_data={"username": username, "password": password},
            remote_addr=remote_addr,
            attach_token=False,
        )
        if resp["_http_status"] == 200:
            self.set_token(resp["data"]["token"])
        return resp


@pytest.fixture()
def app(tmp_path):
    reset_stores()
    app = create_app("testing")
    app.config["ATTACHMENT_STORAGE_DIR"] = str(tmp_path / "uploads")
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()
    reset_stores()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def api(client):
    """未登录的客户端。"""
    return APIClient(client)


@pytest.fixture()
def admin_api(client):
    api = APIClient(client)
    resp = api.login(ADMIN_USERNAME, ADMIN_PASSWORD)
    assert resp["_http_status"] == 200, f"管理员登录失败: {resp}"
    return api


@pytest.fixture()
def make_user(app):
    def _create(username: str, role: str = "edit", password: str = DEFAULT_PASSWORD,
                display_name: Optional[str] = None):
        return UserService.create_user(username, password, role=role, display_name=display_name)
    return _create


@pytest.fixture()
def api_as(client, make_user):
    """按角色创建用户并返回已登录的客户端。"""
    def _login_as(role: str, username: Optional[str] = None, display_name: Optional[str] = None):
        username = username or f"{role}_user"
        make_user(username, role=role, display_name=display_name)
        api = APIClient(client)
        resp = api.login(username, DEFAULT_PASSWORD)
        assert resp["_http_status"] == 200, f"登录失败: {resp}"
        return api
    return _login_as


@pytest.fixture()
def make_project(app):
    def _create(name: str = "Acme Integration", **attrs) -> int:
        project, _report = ProjectService.create({"name": name, **attrs})
        return project.id
    return _create
