"""viewkit - Flask 应用初始化.

基于可组合 HTML 视图与模型表单的 Web 应用.
"""

from importlib import import_module

from flask import Blueprint, Flask, jsonify
from flask.typing import ResponseReturnValue

from viewkit.core.exceptions import AppError
from viewkit.errors import map_exception_to_status
from viewkit.models import configure_date_formats
from viewkit.settings import Settings
from viewkit.utils.structlog_config import configure_structlog, get_system_logger


def create_app(*, settings: Settings | None = None) -> Flask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.

    Returns:
        Flask: Flask应用实例

    """
    resolved_settings = settings or Settings.load()
    app = Flask(__name__)

    # 配置应用
    configure_app(app, resolved_settings)

    # 注册蓝图
    configure_blueprints(app)

    # 配置统一日志系统
    configure_structlog(app)

    # 注册错误处理器
    configure_error_handlers(app)

    get_system_logger().info(
        "应用初始化完成",
        environment=resolved_settings.environment,
        debug=resolved_settings.debug,
        production=resolved_settings.is_production,
    )
    return app


def configure_app(app: Flask, settings: Settings) -> None:
    """写入 Settings 提供的配置并同步日期格式.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,包含环境变量解析、默认值与校验结果.

    Returns:
        None: 写入 `app.config` 后返回.

    """
    app.config.from_mapping(settings.to_flask_config())
    configure_date_formats(
        date_format=settings.date_format,
        date_format_hint=settings.date_format_hint,
        datetime_format=settings.datetime_format,
        datetime_format_hint=settings.datetime_format_hint,
    )


def configure_blueprints(app: Flask) -> None:
    """注册所有蓝图以暴露路由.

    Args:
        app: Flask 应用实例.

    Returns:
        None: 蓝图全部注册后返回.

    """
    blueprint_specs: list[tuple[str, str, str | None]] = [
        ("viewkit.routes.demo", "demo_bp", "/demo"),
    ]

    blueprints: list[tuple[Blueprint, str | None]] = []
    for module_path, attr_name, prefix in blueprint_specs:
        module = import_module(module_path)
        blueprint = getattr(module, attr_name)
        blueprints.append((blueprint, prefix))

    for blueprint, prefix in blueprints:
        if prefix:
            app.register_blueprint(blueprint, url_prefix=prefix)
        else:
            app.register_blueprint(blueprint)


def configure_error_handlers(app: Flask) -> None:
    """把 AppError 统一转换为 JSON 错误响应.

    Args:
        app: Flask 应用实例.

    Returns:
        None: 处理器注册后返回.

    """

    @app.errorhandler(AppError)
    def handle_app_error(error: AppError) -> ResponseReturnValue:
        payload = {
            "error": True,
            "message": error.message,
            "message_key": error.message_key,
            "category": error.category.value,
            "severity": error.severity.value,
            "recoverable": error.recoverable,
        }
        return jsonify(payload), map_exception_to_status(error)
