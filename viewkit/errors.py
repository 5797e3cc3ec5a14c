"""viewkit - 异常到 HTTP 状态码的映射(HTTP 边界)."""

from __future__ import annotations

from werkzeug.exceptions import HTTPException

from viewkit.constants import HttpStatus
from viewkit.core.exceptions import (
    AppError,
    FieldConfigurationError,
    FieldValueError,
    FormFieldTypeNotSupportedError,
    MissingFileError,
    ValidationError,
)

EXCEPTION_STATUS_MAP: dict[type[BaseException], int] = {
    MissingFileError: HttpStatus.BAD_REQUEST,
    FieldValueError: HttpStatus.BAD_REQUEST,
    ValidationError: HttpStatus.BAD_REQUEST,
    FormFieldTypeNotSupportedError: HttpStatus.INTERNAL_SERVER_ERROR,
    FieldConfigurationError: HttpStatus.INTERNAL_SERVER_ERROR,
    AppError: HttpStatus.INTERNAL_SERVER_ERROR,
}


def map_exception_to_status(error: Exception, default: int = HttpStatus.INTERNAL_SERVER_ERROR) -> int:
    """根据异常类型推导 HTTP 状态码.

    Args:
        error: 捕获到的异常对象.
        default: 无法匹配时的默认状态码.

    Returns:
        int: 与异常对应的 HTTP 状态码.

    """
    if isinstance(error, HTTPException):
        code = getattr(error, "code", None)
        if code is not None:
            return int(code)

    for exc_type, status in EXCEPTION_STATUS_MAP.items():
        if isinstance(error, exc_type):
            return int(status)

    return int(default)


__all__ = [
    "EXCEPTION_STATUS_MAP",
    "AppError",
    "FieldConfigurationError",
    "FieldValueError",
    "FormFieldTypeNotSupportedError",
    "MissingFileError",
    "ValidationError",
    "map_exception_to_status",
]
