"""常量模块。

集中管理错误消息、Flash 类别与 HTTP 状态码常量。
"""

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

# 导入Flash类别常量
from .flash_categories import FlashCategory

# 导入所有系统常量
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    LogLevel,
    SuccessMessages,
)

__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "FlashCategory",
    "HttpStatus",
    "LogLevel",
    "SuccessMessages",
]
