"""viewkit 的结构化日志配置与辅助函数."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, cast

import structlog
from flask import Flask, current_app, has_request_context, request

from viewkit.settings import APP_VERSION

if TYPE_CHECKING:
    from structlog.typing import BindableLogger, Processor

    from viewkit.types import StructlogEventDict


class StructlogConfig:
    """structlog 配置核心类.

    负责配置 structlog 的处理器链,并把请求与应用维度的上下文附加到每条日志.

    Attributes:
        configured: 是否已配置标志.

    Example:
        >>> config = StructlogConfig()
        >>> config.configure(app)
        >>> logger = get_logger('forms')

    """

    def __init__(self) -> None:
        self.configured = False

    def configure(self, app: Flask | None = None) -> None:
        """初始化 structlog 处理器(幂等).

        Args:
            app: Flask 应用实例,可选.如果提供,将按应用配置设置日志级别.

        """
        if not self.configured:
            processors = [
                structlog.stdlib.filter_by_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                self._add_request_context,
                self._add_global_context,
                self._get_renderer(),
            ]
            structlog.configure(
                processors=cast("list[structlog.types.Processor]", processors),
                context_class=dict,
                logger_factory=structlog.stdlib.LoggerFactory(),
                wrapper_class=structlog.stdlib.BoundLogger,
                cache_logger_on_first_use=True,
            )
            self.configured = True

        if app is not None:
            self._attach_app(app)

    @staticmethod
    def _attach_app(app: Flask) -> None:
        root = logging.getLogger()
        if not root.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter("%(message)s"))
            root.addHandler(handler)
        log_level_name = str(app.config.get("LOG_LEVEL", "INFO"))
        root.setLevel(getattr(logging, log_level_name, logging.INFO))

    @staticmethod
    def _add_request_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: StructlogEventDict,
    ) -> StructlogEventDict:
        """向事件字典写入请求上下文.

        Args:
            logger: 当前 logger 实例.
            method_name: 调用的方法名.
            event_dict: structlog 事件字典.

        Returns:
            包含 method/path 的事件字典.

        """
        if has_request_context():
            event_dict["method"] = request.method
            event_dict["path"] = request.path
        return event_dict

    @staticmethod
    def _add_global_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: StructlogEventDict,
    ) -> StructlogEventDict:
        """附加应用名、版本等全局上下文."""
        try:
            event_dict["app_name"] = current_app.config["APP_NAME"]
            event_dict["app_version"] = current_app.config["APP_VERSION"]
        except (RuntimeError, KeyError):
            event_dict["app_name"] = "viewkit"
            event_dict["app_version"] = APP_VERSION

        event_dict["logger_name"] = getattr(_logger, "name", "unknown")
        return event_dict

    @staticmethod
    def _get_renderer() -> Processor:
        """根据终端能力返回渲染器.

        Returns:
            交互终端使用彩色控制台渲染,否则输出 JSON.

        """
        if sys.stderr.isatty():
            return structlog.dev.ConsoleRenderer(colors=True)
        return structlog.processors.JSONRenderer(ensure_ascii=False)


structlog_config = StructlogConfig()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """获取结构化日志记录器.

    Args:
        name: 日志记录器名称,通常使用模块名.

    Returns:
        绑定的 structlog 日志记录器实例.

    Example:
        >>> logger = get_logger('forms')
        >>> logger.info('表单绑定完成', field_count=3)

    """
    structlog_config.configure()
    return structlog.get_logger(name)


def configure_structlog(app: Flask) -> None:
    """配置 structlog 并注册 Flask 钩子.

    Args:
        app: Flask 应用实例.

    """
    structlog_config.configure(app)

    @app.teardown_appcontext
    def log_teardown_error(exception: BaseException | None) -> None:
        if exception:
            get_logger("app").error("应用请求处理异常", module="system", exception=str(exception))


def get_system_logger() -> structlog.stdlib.BoundLogger:
    """返回系统级 logger."""
    return get_logger("system")


def get_form_logger() -> structlog.stdlib.BoundLogger:
    """返回表单绑定与渲染使用的 logger."""
    return get_logger("forms")


__all__ = [
    "StructlogConfig",
    "configure_structlog",
    "get_form_logger",
    "get_logger",
    "get_system_logger",
    "structlog_config",
]
