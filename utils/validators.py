import re
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from utils.exceptions import ValidationFailed

EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
DATE_FORMAT = "%Y-%m-%d"


def validate_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def clean_payload(
    data: Any,
    allowed: Iterable[str],
    required: Iterable[str] = (),
) -> dict:
    """
    请求体入口校验：
      1. 必须是 JSON 对象
      2. 不允许出现白名单以外的字段
      3. required 中的字段必须存在且非空
    返回只包含白名单字段的新 dict。
    """
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValidationFailed("Request body must be a JSON object")
    allowed_set = set(allowed)
    unknown = sorted(k for k in data.keys() if k not in allowed_set)
    if unknown:
        raise ValidationFailed(f"Unknown fields: {', '.join(unknown)}")
    missing = [k for k in required if _is_blank(data.get(k))]
    if missing:
        raise ValidationFailed(f"Missing required fields: {', '.join(missing)}")
    return {k: data[k] for k in data.keys()}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def optional_str(data: Mapping, key: str, max_length: int = 255) -> Optional[str]:
    """字段存在时必须为字符串（或 null），返回去掉首尾空白的值。"""
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationFailed(f"{key} must be a string")
    value = value.strip()
    if len(value) > max_length:
        raise ValidationFailed(f"{key} must be at most {max_length} characters")
    return value


def required_str(data: Mapping, key: str, max_length: int = 255) -> str:
    value = optional_str(data, key, max_length=max_length)
    if not value:
        raise ValidationFailed(f"{key} is required")
    return value


def optional_date(data: Mapping, key: str) -> Optional[str]:
    """日期统一为 YYYY-MM-DD 字符串，空串视为清空。"""
    value = data.get(key)
    if value is None or value == "":
        return value
    if not isinstance(value, str):
        raise ValidationFailed(f"{key} must be a YYYY-MM-DD string")
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        raise ValidationFailed(f"{key} must be a YYYY-MM-DD string")
    return value


def optional_bool(data: Mapping, key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValidationFailed(f"{key} must be a boolean")
    return value


def optional_int(data: Mapping, key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationFailed(f"{key} must be an integer")
    return value


def optional_email(data: Mapping, key: str = "email") -> Optional[str]:
    value = optional_str(data, key, max_length=120)
    if value and not validate_email(value):
        raise ValidationFailed(f"{key} is not a valid email address")
    return value
