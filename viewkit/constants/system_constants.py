"""viewkit - 常量定义模块

统一管理错误分类、严重度与默认提示文案.
"""

from enum import Enum


class LogLevel(Enum):
    """日志级别枚举."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    FORM = "form"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# 错误消息常量
class ErrorMessages:
    """错误消息常量."""

    # 通用错误
    INTERNAL_ERROR = "服务器内部错误"
    VALIDATION_ERROR = "数据验证失败"

    # 表单错误
    FORM_FIELD_TYPE_NOT_SUPPORTED = "表单字段类型不受支持"
    FIELD_CONFIGURATION_ERROR = "表单字段配置错误"
    FIELD_VALUE_INVALID = "字段值格式错误"
    FILE_MISSING = "缺少上传文件"

    # 校验错误
    FIELD_REQUIRED = "此字段为必填项"
    FIELD_TOO_LONG = "长度不能超过 {maxlen} 个字符"
    INVALID_EMAIL = "无效的邮箱地址"
    INVALID_URL = "无效的 URL"
    INVALID_CHOICE = "无效的选项: {value}"
    INVALID_DATE = "日期格式应为 {format}"


# 成功消息常量
class SuccessMessages:
    """成功消息常量."""

    FORM_SAVED = "表单保存成功"


__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "LogLevel",
    "SuccessMessages",
]
