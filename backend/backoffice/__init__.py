"""
目录站后台 (back-office) 的 Flask 应用工厂。

提供分类 (Category) 编辑器与工具 (Tool) 数据源的管理 API，
扩展对象 (db, migrate) 在此处定义，供模型和服务模块导入。
"""
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
import os
import logging
import click

from .utils.error_handler import ErrorHandler

from backoffice.config import (
    SECRET_KEY, SQLALCHEMY_TRACK_MODIFICATIONS, SQLALCHEMY_ECHO,
    get_database_uri,
    CORS_ORIGINS,
    LOG_LEVEL, LOG_DIR,
    ADMIN_CATEGORIES_PATH, TOOL_LIST_DEFAULT_LIMIT, TOOL_LIST_MAX_LIMIT,
)

# 初始化扩展
db = SQLAlchemy()
migrate = Migrate()

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def create_app(config_object=None):
    app = Flask(__name__, instance_relative_config=False)

    app.config.from_mapping(
        SECRET_KEY=SECRET_KEY,
        SQLALCHEMY_TRACK_MODIFICATIONS=SQLALCHEMY_TRACK_MODIFICATIONS,
        SQLALCHEMY_DATABASE_URI=get_database_uri(),
        SQLALCHEMY_ECHO=SQLALCHEMY_ECHO,
        ADMIN_CATEGORIES_PATH=ADMIN_CATEGORIES_PATH,
        TOOL_LIST_DEFAULT_LIMIT=TOOL_LIST_DEFAULT_LIMIT,
        TOOL_LIST_MAX_LIMIT=TOOL_LIST_MAX_LIMIT,
        LOG_LEVEL=LOG_LEVEL,
        LOG_DIR=LOG_DIR,
    )
    # 测试或部署时可传入覆盖配置
    if config_object:
        app.config.update(config_object)

    # 初始化扩展
    db.init_app(app)
    migrate.init_app(app, db)
    CORS(app,
         origins=CORS_ORIGINS,
         methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization"],
         supports_credentials=True,
    )

    configure_logging(app)

    ErrorHandler.register_handlers(app)
    app.logger.info("错误处理器已注册")

    with app.app_context():
        # 确保模型在 Flask-Migrate / create_all 之前已注册
        from backoffice import models  # noqa: F401
        from backoffice.routes.admin import admin_bp

        app.register_blueprint(admin_bp, url_prefix='/api/admin')

    register_commands(app)

    return app


def configure_logging(app):
    """配置 app.logger：控制台输出，非测试环境额外写入日志文件"""
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # 同一进程多次 create_app (例如测试) 时不重复添加处理器
    if getattr(app.logger, '_backoffice_configured', False):
        return

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    app.logger.addHandler(console_handler)

    if not app.config.get('TESTING'):
        log_file_path = os.path.join(app.config.get('LOG_DIR', 'logs'), 'backoffice.log')
        os.makedirs(os.path.dirname(log_file_path), exist_ok=True)
        file_handler = logging.FileHandler(log_file_path)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        app.logger.addHandler(file_handler)

    app.logger._backoffice_configured = True


def register_commands(app):
    @app.cli.command('init-db')
    @click.option('--seed/--no-seed', default=True, help='写入初始分类数据')
    def init_db_command(seed):
        """创建数据表并 (可选) 写入初始分类"""
        from backoffice.utils.init_db import init_categories

        db.create_all()
        click.echo('数据表已创建')
        if seed:
            created = init_categories()
            click.echo(f'初始分类写入完成，共添加 {created} 个分类。')
