# utils/exceptions.py
from typing import Any, Optional
from werkzeug.exceptions import HTTPException


class BizError(HTTPException):
    code: int  # HTTP 状态码
    message: str  # 业务提示
    data: Optional[Any]  # 附加数据
    kind: str = "BizError"  # 稳定的错误类别，供前端分支判断

    def __init__(self, message: str = "Request failed", code: int = 400, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(description=message)


class _KindError(BizError):
    """固定 HTTP 状态码与默认文案的业务异常基类。"""

    status: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None, data: Any = None):
        super().__init__(message or self.default_message, self.status, data)


class InvalidCredentials(_KindError):
    kind = "InvalidCredentials"
    status = 401
    default_message = "Invalid credentials"


class LockedOut(_KindError):
    kind = "LockedOut"
    status = 429
    default_message = "Too many failed attempts"


class Unauthenticated(_KindError):
    kind = "Unauthenticated"
    status = 401
    default_message = "Authentication required"


class SessionExpired(_KindError):
    kind = "SessionExpired"
    status = 401
    default_message = "Session expired, please sign in again"


class Forbidden(_KindError):
    kind = "Forbidden"
    status = 403
    default_message = "Insufficient role"


class NotFound(_KindError):
    # 不区分“不存在”与“属于其他项目”
    kind = "NotFound"
    status = 404
    default_message = "Not found"


class DuplicateId(_KindError):
    kind = "DuplicateId"
    status = 409
    default_message = "Id already exists"


class ValidationFailed(_KindError):
    kind = "ValidationFailed"
    status = 400
    default_message = "Invalid request"


class FileTooLarge(_KindError):
    kind = "FileTooLarge"
    status = 413
    default_message = "File too large"


class DisallowedType(_KindError):
    kind = "DisallowedType"
    status = 415
    default_message = "File type not allowed"


class StorageFailure(_KindError):
    kind = "StorageFailure"
    status = 500
    default_message = "Storage error"
