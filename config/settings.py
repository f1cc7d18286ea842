# config/settings.py
import os
from dotenv import load_dotenv

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
load_dotenv(os.path.join(BASE_DIR, ".env"))  # 自动加载环境变量


def _as_bool(val, default=False):
    if val is None:
        return default
    return str(val).lower() in ("1", "true", "yes", "on")


def _as_list(val, default):
    if not val:
        return list(default)
    return [item.strip().lower() for item in val.split(",") if item.strip()]


DEFAULT_ALLOWED_EXTENSIONS = (
    "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx",
    "png", "jpg", "jpeg", "gif", "bmp",
    "txt", "csv", "zip", "msg", "eml",
)


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URI", "sqlite:///" + os.path.join(BASE_DIR, "tracker.db")
    )

    # 日志相关
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", "./logs")
    LOG_JSON = os.getenv("LOG_JSON", "1") == "1"  # 是否 JSON 格式
    LOG_TO_FILE = _as_bool(os.getenv("LOG_TO_FILE", "1"), True)
    LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", 5 * 1024 * 1024))
    LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", 5))
    APP_NAME = os.getenv("APP_NAME", "it-integration-tracker")

    # ========= 附件 =========
    ATTACHMENT_STORAGE_DIR = os.getenv(
        "ATTACHMENT_STORAGE_DIR", os.path.join(BASE_DIR, "uploads")
    )
    ATTACHMENT_MAX_BYTES = int(os.getenv("ATTACHMENT_MAX_BYTES", 10 * 1024 * 1024))
    ATTACHMENT_ALLOWED_EXTENSIONS = _as_list(
        os.getenv("ATTACHMENT_ALLOWED_EXTENSIONS"), DEFAULT_ALLOWED_EXTENSIONS
    )

    # ========= 会话 & 登录限流 =========
    # 固定 24 小时，不随访问刷新
    SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", 24 * 3600))
    SESSION_SWEEP_INTERVAL_SECONDS = int(os.getenv("SESSION_SWEEP_INTERVAL_SECONDS", 3600))
    SESSION_SWEEP_ENABLED = _as_bool(os.getenv("SESSION_SWEEP_ENABLED", "1"), True)
    LOGIN_MAX_ATTEMPTS = int(os.getenv("LOGIN_MAX_ATTEMPTS", 5))
    LOGIN_LOCKOUT_SECONDS = int(os.getenv("LOGIN_LOCKOUT_SECONDS", 900))

    # 默认管理员（首次启动自动创建）
    ADMIN_INIT_USERNAME = os.getenv("ADMIN_INIT_USERNAME", "admin")
    ADMIN_INIT_PASSWORD = os.getenv("ADMIN_INIT_PASSWORD", "admin12345")
    ADMIN_INIT_DISPLAY_NAME = os.getenv("ADMIN_INIT_DISPLAY_NAME", "Administrator")

    # 密码最小长度（创建 / 重置 / 自助修改统一使用）
    PASSWORD_MIN_LENGTH = int(os.getenv("PASSWORD_MIN_LENGTH", 8))

    # ========= 项目默认值 =========
    DEFAULT_PARENT_COMPANY = os.getenv("DEFAULT_PARENT_COMPANY", "Applied Industrial Technologies")
    SEED_DEMO_PROJECT = _as_bool(os.getenv("SEED_DEMO_PROJECT", "1"), True)
    # 启动时 create_all；使用 flask db upgrade 管理表结构时可关闭
    AUTO_CREATE_TABLES = _as_bool(os.getenv("AUTO_CREATE_TABLES", "1"), True)


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", BaseConfig.SQLALCHEMY_DATABASE_URI)


class ProductionConfig(BaseConfig):
    DEBUG = False
    SEED_DEMO_PROJECT = _as_bool(os.getenv("SEED_DEMO_PROJECT", "0"), False)


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URI", "sqlite:///:memory:")
    LOG_TO_FILE = False
    LOG_JSON = False
    SESSION_SWEEP_ENABLED = False
    SEED_DEMO_PROJECT = False


config_map = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(config_name):
    return config_map.get(config_name, DevelopmentConfig)
