# controllers/auth_helpers.py
from __future__ import annotations

from functools import wraps

from flask import g, request

from constants.roles import Role
from services.session_service import SessionService
from utils.permissions import assert_role, get_current_user


def extract_bearer(auth_header: str | None) -> str | None:
    if not auth_header:
        return None
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
        return token or None
    return None


def current_token() -> str | None:
    return extract_bearer(request.headers.get("Authorization"))


def client_address() -> str:
    return request.remote_addr or "unknown"


def auth_required():
    """
    鉴权装饰器：
      - 验证 Authorization: Bearer <token>
      - 会话不存在 -> Unauthenticated；已过期 -> SessionExpired（并清除该会话）
      - 通过后把会话中的用户快照注入 g.current_user
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            g.current_user = None
            g.current_user = SessionService.authenticate(current_token())
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def require_role(minimum: Role | str):
    """
    角色等级校验，必须放在 @auth_required() 之后。
    只比较等级：达到 minimum 即放行。
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            user = get_current_user()
            assert_role(user.role, minimum)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
