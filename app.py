# app.py
import os

from flask import Flask, request
from sqlalchemy.exc import SQLAlchemyError

from config.settings import get_config
from extensions.database import db, migrate
from extensions.logger import init_logger
from extensions.scheduler import session_sweeper
from controllers.auth_controller import auth_bp
from controllers.user_controller import user_bp
from controllers.project_controller import project_bp
from controllers.template_controller import template_bp
from controllers.task_controller import task_bp
from controllers.contact_controller import contact_bp
from controllers.risk_controller import risk_bp
from controllers.attachment_controller import attachment_bp
from services.seed_service import SeedService
from services.session_service import SessionService
from utils.response import json_response
from utils.exceptions import BizError, StorageFailure
import models  # noqa: F401  注册所有模型


def create_app(config_name="development"):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    # 初始化扩展
    db.init_app(app)
    migrate.init_app(app, db)
    init_logger(app)
    app.logger.info("当前数据库 URI: %s", app.config["SQLALCHEMY_DATABASE_URI"])

    try:
        with app.app_context():
            if app.config.get("AUTO_CREATE_TABLES", True):
                db.create_all()
            # 默认管理员 + 模板目录 (+ 演示项目)
            SeedService.bootstrap_defaults(app)
    except SQLAlchemyError as e:
        app.logger.warning("首次启动初始化失败，请先执行 flask db upgrade: %s", e)

    # 登录 / 会话
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    # 用户管理
    app.register_blueprint(user_bp, url_prefix="/api/users")
    # 模板目录
    app.register_blueprint(template_bp)
    # 项目 / 任务 / 联系人 / 风险 / 附件
    app.register_blueprint(project_bp)
    app.register_blueprint(task_bp)
    app.register_blueprint(contact_bp)
    app.register_blueprint(risk_bp)
    app.register_blueprint(attachment_bp)

    # 过期会话定时清理（独立线程，不依赖请求）
    session_sweeper.init_app(
        app,
        SessionService.purge_expired,
        interval_seconds=app.config["SESSION_SWEEP_INTERVAL_SECONDS"],
        enabled=app.config.get("SESSION_SWEEP_ENABLED", True),
    )

    # 错误处理
    @app.errorhandler(404)
    def not_found(e):
        return json_response(message="Endpoint not found", code=404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return json_response(message="Method not allowed", code=405)

    @app.errorhandler(500)
    def server_error(e):
        return json_response(message="Internal server error", code=500)

    @app.errorhandler(BizError)
    def _biz_err(e: BizError):
        return json_response(code=e.code, message=e.message, data=e.data, error=e.kind)

    # 未被服务层转换的数据库异常（多为读路径）统一按 StorageFailure 返回
    @app.errorhandler(SQLAlchemyError)
    def _storage_err(e: SQLAlchemyError):
        db.session.rollback()
        app.logger.error("Storage error on %s %s: %s", request.method, request.path, e)
        failure = StorageFailure()
        return json_response(code=failure.code, message=failure.message, error=failure.kind)

    return app


if __name__ == "__main__":
    app = create_app(os.getenv("APP_ENV", "development"))
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", 3000)))
