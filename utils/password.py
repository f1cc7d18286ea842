# utils/password.py
from werkzeug.security import generate_password_hash, check_password_hash
from flask import current_app

from utils.exceptions import ValidationFailed


def hash_password(plain: str) -> str:
    return generate_password_hash(plain)


def verify_password(hashed: str, plain: str) -> bool:
    if not hashed or plain is None:
        return False
    return check_password_hash(hashed, plain)


def validate_password_policy(pwd: str) -> list[str]:
    min_len = current_app.config.get("PASSWORD_MIN_LENGTH", 8)
    errs = []
    if not isinstance(pwd, str) or len(pwd) < min_len:
        errs.append(f"Password must be at least {min_len} characters")
    return errs


def ensure_password_policy(pwd: str) -> None:
    errors = validate_password_policy(pwd)
    if errors:
        raise ValidationFailed("; ".join(errors))
