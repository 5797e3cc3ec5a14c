"""viewkit - 统一异常定义(Shared Kernel).

说明:
- 本模块只负责定义异常类型与语义字段,不包含 HTTP/Flask/Werkzeug 等框架细节.
- 异常到 HTTP status 的映射在 HTTP 边界完成(见 `viewkit/errors.py`).
- 请求层的数据读取异常(multipart 解析失败、读流失败)不在此包装,原样向上抛出.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from viewkit.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity

if TYPE_CHECKING:
    from viewkit.models.metadata import MetaData
    from viewkit.types import LoggerExtra


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    """异常的元信息(不包含传输层信息)."""

    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str


class AppError(Exception):
    """统一的基础业务异常.

    Args:
        message: 自定义错误文案,若为空则根据 ``message_key`` 推导.
        message_key: 自定义消息键.
        extra: 结构化日志附加字段.
        severity: 错误严重度.
        category: 错误分类.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: LoggerExtra | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
    ) -> None:
        self.message_key = message_key or self.metadata.default_message_key
        self.message = message or getattr(ErrorMessages, self.message_key, ErrorMessages.INTERNAL_ERROR)
        self.extra = dict(extra or {})
        self.severity = severity or self.metadata.severity
        self.category = category or self.metadata.category
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        """表示该异常是否可恢复."""

        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


class ValidationError(AppError):
    """表示输入参数或表单数据验证失败."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="VALIDATION_ERROR",
    )


class FormFieldTypeNotSupportedError(AppError):
    """没有任何表单字段控制器支持该模型字段的类型.

    Attributes:
        field: 出问题的字段描述(MetaData),用于诊断.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.FORM,
        severity=ErrorSeverity.HIGH,
        default_message_key="FORM_FIELD_TYPE_NOT_SUPPORTED",
    )

    def __init__(self, field: MetaData) -> None:
        self.field = field
        type_name = type(field.value).__name__
        selector = field.selector()
        super().__init__(
            f"Type {type_name} of form field {selector} not supported",
            extra={"field": selector, "value_type": type_name},
        )


class FieldConfigurationError(AppError):
    """字段的视图标签配置非法(如 cols/rows 非整数).

    属于模板/模型声明缺陷,构造视图时立即抛出,库内不做捕获.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.CONFIGURATION,
        severity=ErrorSeverity.CRITICAL,
        default_message_key="FIELD_CONFIGURATION_ERROR",
    )


class FieldValueError(ValidationError):
    """提交的文本无法解析为字段的类型化值."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="FIELD_VALUE_INVALID",
    )


class MissingFileError(ValidationError):
    """请求中没有该字段对应的上传文件."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="FILE_MISSING",
    )

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{ErrorMessages.FILE_MISSING}: {name}", extra={"field": name})


__all__ = [
    "AppError",
    "FieldConfigurationError",
    "FieldValueError",
    "FormFieldTypeNotSupportedError",
    "MissingFileError",
    "ValidationError",
]
