"""表单提交边界的结构化日志与异常分类.

`safe_form_bind` 包裹 `Form.bind`:
- 领域异常(AppError 子类)附带字段选择器记录后原样抛出;
- 请求层的数据读取异常(werkzeug HTTPException、OSError)记录后原样抛出,不做包装;
- 其余异常视为程序缺陷,记录 error 后包装为 fallback_exception.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, TypedDict, Unpack, cast

from werkzeug.exceptions import HTTPException

from viewkit.core.exceptions import AppError, FormFieldTypeNotSupportedError
from viewkit.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from viewkit.components import Context
    from viewkit.forms import FieldError, Form
    from viewkit.types import ContextDict, FormBindOptions, LoggerExtra

LogLevel = Literal["debug", "info", "warning", "error", "critical"]

# 请求数据读取失败: multipart 解析、超出 MAX_CONTENT_LENGTH、客户端断开、读流失败
DATA_ACCESS_EXCEPTIONS: tuple[type[BaseException], ...] = (HTTPException, OSError)


class LogContextOptions(TypedDict, total=False):
    """结构化日志可选参数."""

    context: ContextDict | None
    extra: LoggerExtra | None


def log_with_context(
    level: LogLevel,
    event: str,
    *,
    module: str,
    action: str,
    **options: Unpack[LogContextOptions],
) -> None:
    """记录带有统一上下文字段的结构化日志.

    Args:
        level: 日志级别,使用 structlog 的方法名,例如 "info"、"error".
        event: 日志事件描述.
        module: 所属模块,同时作为 logger 名称.
        action: 当前操作名称,例如 "profile_form_bind".
        **options: 支持 context、extra 选项以扩展日志内容.

    """
    logger = get_logger(module)
    payload: ContextDict = {"module": module, "action": action}

    context_opt = cast("ContextDict | None", options.get("context"))
    extra_opt = cast("LoggerExtra | None", options.get("extra"))
    if context_opt:
        payload.update(context_opt)
    if extra_opt:
        payload.update(extra_opt)

    log_method = getattr(logger, level, logger.error)
    log_method(event, **payload)


def field_selector_of(exc: BaseException) -> str | None:
    """取出异常关联的表单字段选择器,没有时返回 None."""
    if isinstance(exc, FormFieldTypeNotSupportedError):
        return exc.field.selector()
    if isinstance(exc, AppError):
        field = exc.extra.get("field")
        return str(field) if field else None
    return None


def describe_bind_error(exc: BaseException) -> LoggerExtra:
    """生成绑定失败日志的诊断字段."""
    payload: dict[str, object] = {"error_type": exc.__class__.__name__, "error_message": str(exc)}
    if isinstance(exc, AppError):
        payload["message_key"] = exc.message_key
        payload["category"] = exc.category.value
    elif isinstance(exc, HTTPException):
        payload["status_code"] = exc.code
    selector = field_selector_of(exc)
    if selector:
        payload["field"] = selector
    return cast("LoggerExtra", payload)


def _level_for(exc: BaseException) -> LogLevel:
    if isinstance(exc, AppError):
        return "warning" if exc.recoverable else "error"
    if isinstance(exc, HTTPException):
        return "warning"
    return "error"


def safe_form_bind(
    form: Form,
    ctx: Context,
    *,
    form_name: str,
    public_error: str,
    **options: Unpack[FormBindOptions],
) -> list[FieldError]:
    """绑定表单提交数据,集中处理日志与异常分类.

    Args:
        form: 待绑定的表单.
        ctx: 当前请求上下文.
        form_name: 表单名称,用于日志的 action 与上下文.
        public_error: 包装未知异常时暴露给客户端的文案.
        **options: 支持 context、extra、fallback_exception、log_event.

    Returns:
        `Form.bind` 的字段错误列表.

    Raises:
        AppError: 领域异常原样抛出,未知异常包装为 fallback_exception.
        HTTPException: multipart 解析失败或请求体超限,原样抛出.
        OSError: 读取上传流失败,原样抛出.

    """
    action = f"{form_name}_form_bind"
    event = options.get("log_event") or "表单绑定失败"
    fallback_exception = options.get("fallback_exception", AppError)
    context_payload: ContextDict = {"form_name": form_name}
    context_payload.update(cast("ContextDict | None", options.get("context")) or {})
    extra_payload = dict(cast("LoggerExtra | None", options.get("extra")) or {})

    try:
        return form.bind(ctx)
    except (AppError, *DATA_ACCESS_EXCEPTIONS) as exc:
        log_with_context(
            _level_for(exc),
            event,
            module="forms",
            action=action,
            context=context_payload,
            extra={**extra_payload, **describe_bind_error(exc)},
        )
        raise
    except Exception as exc:
        log_with_context(
            "error",
            event,
            module="forms",
            action=action,
            context=context_payload,
            extra={**extra_payload, "error_type": exc.__class__.__name__, "unexpected": True},
        )
        raise fallback_exception(public_error) from exc
