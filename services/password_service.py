# services/password_service.py
from sqlalchemy.exc import SQLAlchemyError

from repositories.user_repository import UserRepository
from utils.exceptions import InvalidCredentials, NotFound, StorageFailure, ValidationFailed
from utils.password import ensure_password_policy, hash_password, verify_password


class PasswordService:

    @staticmethod
    def change_password(user_id: int, current_password: str, new_password: str):
        # 基本校验
        if not isinstance(current_password, str) or not isinstance(new_password, str):
            raise ValidationFailed("current_password and new_password must be strings")
        if not current_password or not new_password:
            raise ValidationFailed("current_password and new_password are required")

        user = UserRepository.find_by_id(user_id)
        if not user or not user.active:
            raise NotFound("User not found")

        if not verify_password(user.password_hash, current_password):
            raise InvalidCredentials("Current password is incorrect")

        # 策略
        ensure_password_policy(new_password)

        try:
            UserRepository.update_password(user, hash_password(new_password))
            UserRepository.commit()
        except SQLAlchemyError as e:
            UserRepository.rollback()
            raise StorageFailure(f"Password update failed: {e.__class__.__name__}")
        return user
