# services/user_service.py
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from constants.roles import Role, DEFAULT_ROLE, normalize_role
from models.user import User
from repositories.user_repository import UserRepository
from services.session_service import SessionService
from utils.exceptions import DuplicateId, NotFound, StorageFailure, ValidationFailed
from utils.password import ensure_password_policy, hash_password
from utils.validators import validate_email

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    def _normalize_role(role_raw) -> str:
        if role_raw is not None and (not isinstance(role_raw, str) or not role_raw.strip()):
            raise ValidationFailed("Invalid role")
        try:
            return normalize_role(role_raw, default=DEFAULT_ROLE)
        except ValueError:
            raise ValidationFailed(f"Invalid role: {role_raw}")

    @staticmethod
    def _normalize_email(email):
        if email is None:
            return None
        email = email.strip()
        if email and not validate_email(email):
            raise ValidationFailed("Invalid email address")
        return email or None

    @staticmethod
    def _get_or_404(user_id: int) -> User:
        user = UserRepository.find_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    @staticmethod
    def _is_last_active_admin(target: User) -> bool:
        return (
            target.role == Role.ADMIN.value
            and bool(target.active)
            and UserRepository.count_active_admins_except(target.id) == 0
        )

    @staticmethod
    def _commit(action: str):
        try:
            UserRepository.commit()
        except IntegrityError:
            UserRepository.rollback()
            raise DuplicateId("Username already exists")
        except SQLAlchemyError as e:
            UserRepository.rollback()
            logger.error("User %s failed: %s", action, e)
            raise StorageFailure(f"Failed to {action} user")

    @staticmethod
    def create_user(username: str, password: str, role: str = None,
                    display_name: str = None, email: str = None) -> User:
        # 1. 基础校验
        username = (username or "").strip()
        if not username or not password:
            raise ValidationFailed("username and password are required")
        ensure_password_policy(password)
        role_value = UserService._normalize_role(role)
        email = UserService._normalize_email(email)

        if UserRepository.find_by_username(username):
            raise DuplicateId("Username already exists")

        # 2. 构造实体并持久化
        user = User(
            username=username,
            password_hash=hash_password(password),
            display_name=(display_name or "").strip() or username,
            email=email,
            role=role_value,
            active=True,
        )
        UserRepository.add(user)
        UserService._commit("create")
        logger.info("User created: %s (%s)", user.username, user.role)
        return user

    @staticmethod
    def list_users():
        return UserRepository.list_all()

    @staticmethod
    def list_active_brief():
        """供任务 owner 下拉框使用，只返回精简字段。"""
        return [u.to_brief() for u in UserRepository.list_active()]

    @staticmethod
    def update_user(actor, user_id: int, display_name=None, email=None, role=None, active=None) -> User:
        """
        管理员更新用户资料。
        业务校验：
          - 不能修改自己的角色为非 admin，不能停用自己
          - 不能降级或停用最后一个启用中的管理员
          - 角色变化或停用会立即注销该用户的全部会话
        """
        target = UserService._get_or_404(user_id)

        new_role = UserService._normalize_role(role) if role is not None else None
        new_email = UserService._normalize_email(email) if email is not None else None
        if display_name is not None:
            display_name = display_name.strip() or target.username

        if actor.id == target.id:
            if new_role is not None and new_role != target.role:
                raise ValidationFailed("You cannot change your own role")
            if active is False:
                raise ValidationFailed("You cannot deactivate your own account")

        demoting = new_role is not None and new_role != Role.ADMIN.value
        if (demoting or active is False) and UserService._is_last_active_admin(target):
            raise ValidationFailed("Cannot remove the last active administrator")

        role_changed = new_role is not None and new_role != target.role
        deactivated = active is False and bool(target.active)

        changed = UserRepository.update_profile(
            target,
            display_name=display_name,
            email=new_email,
            role=new_role,
            active=active,
        )
        # email 允许被清空
        if email is not None and new_email is None and target.email is not None:
            target.email = None
            changed = True
        if not changed:
            return target

        UserService._commit("update")
        if role_changed or deactivated:
            SessionService.revoke_user(target.id)
        return target

    @staticmethod
    def reset_password(actor, user_id: int, new_password: str) -> User:
        target = UserService._get_or_404(user_id)
        ensure_password_policy(new_password)
        UserRepository.update_password(target, hash_password(new_password))
        UserService._commit("reset password of")
        SessionService.revoke_user(target.id)
        logger.info("Password of %s reset by %s", target.username, actor.username)
        return target

    @staticmethod
    def delete_user(actor, user_id: int):
        if actor.id == user_id:
            raise ValidationFailed("You cannot delete your own account")
        target = UserService._get_or_404(user_id)
        if UserService._is_last_active_admin(target):
            raise ValidationFailed("Cannot remove the last active administrator")
        username = target.username
        UserRepository.delete(target)
        UserService._commit("delete")
        SessionService.revoke_user(user_id)
        logger.info("User %s deleted by %s", username, actor.username)

    @staticmethod
    def ensure_default_admin(app):
        uname = app.config["ADMIN_INIT_USERNAME"]
        if UserRepository.find_by_username(uname):
            return None
        user = User(
            username=uname,
            password_hash=hash_password(app.config["ADMIN_INIT_PASSWORD"]),
            display_name=app.config.get("ADMIN_INIT_DISPLAY_NAME") or uname,
            role=Role.ADMIN.value,
            active=True,
        )
        UserRepository.add(user)
        UserRepository.commit()
        app.logger.info("默认管理员已创建: %s", uname)
        return user
