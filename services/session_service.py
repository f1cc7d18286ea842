# services/session_service.py
"""
登录会话服务。

会话状态：Issued -> Active -> Expired / Revoked
- 有效期固定 24h（不随访问续期），过期判断 now >= expires_at。
- 会话只存在于进程内存，进程重启后全部失效。
"""
import logging
import secrets
import time

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from repositories.session_repository import Session, SessionRepository, SessionUser
from repositories.user_repository import UserRepository
from services.rate_limit_service import LoginRateLimiter
from utils.exceptions import InvalidCredentials, SessionExpired, StorageFailure, Unauthenticated
from utils.password import verify_password

logger = logging.getLogger(__name__)


def _now(now):
    return time.time() if now is None else now


class SessionService:

    @staticmethod
    def _limiter(client_address: str) -> LoginRateLimiter:
        cfg = current_app.config
        return LoginRateLimiter(
            client_address,
            max_attempts=cfg.get("LOGIN_MAX_ATTEMPTS", 5),
            lockout_seconds=cfg.get("LOGIN_LOCKOUT_SECONDS", 900),
        )

    @staticmethod
    def login(username: str, password: str, client_address: str, now: float = None) -> Session:
        now = _now(now)
        limiter = SessionService._limiter(client_address)
        # 锁定期间直接拒绝，不再校验密码
        limiter.ensure_not_locked(now)

        user = UserRepository.find_by_username((username or "").strip()) if username else None
        if not user or not user.active or not verify_password(user.password_hash, password or ""):
            attempts = limiter.record_failure(now)
            logger.info("Login failed for %r from %s (attempt %s)", username, client_address, attempts)
            raise InvalidCredentials("Invalid username or password")

        limiter.clear()
        ttl = current_app.config.get("SESSION_TTL_SECONDS", 86400)
        session = Session(
            token=secrets.token_hex(32),
            user=SessionUser.from_user(user),
            issued_at=now,
            expires_at=now + ttl,
        )
        SessionRepository.save(session)

        user.touch_last_login()
        try:
            UserRepository.commit()
        except SQLAlchemyError as e:
            UserRepository.rollback()
            SessionRepository.delete(session.token)
            logger.error("Failed to record last_login for %s: %s", user.username, e)
            raise StorageFailure("Failed to record login")

        logger.info("User %s signed in from %s", user.username, client_address)
        return session

    @staticmethod
    def authenticate(token: str, now: float = None) -> SessionUser:
        if not token:
            raise Unauthenticated()
        session = SessionRepository.get(token)
        if session is None:
            raise Unauthenticated("Invalid or revoked session")
        if session.is_expired(_now(now)):
            SessionRepository.delete(token)
            raise SessionExpired()
        return session.user

    @staticmethod
    def get_session(token: str):
        return SessionRepository.get(token)

    @staticmethod
    def logout(token: str) -> bool:
        """重复注销或未知 token 不报错。"""
        return SessionRepository.delete(token)

    @staticmethod
    def revoke_user(user_id: int) -> int:
        count = SessionRepository.delete_for_user(user_id)
        if count:
            logger.info("Revoked %s session(s) of user %s", count, user_id)
        return count

    @staticmethod
    def purge_expired(now: float = None) -> int:
        count = SessionRepository.delete_expired(_now(now))
        logger.info("Session sweep removed %s expired session(s), %s remaining",
                    count, SessionRepository.count())
        return count
