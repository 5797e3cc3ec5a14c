"""通用结构化数据类型别名.

统一日志上下文、模板上下文与结构标签的类型,方便在视图、表单等模块中共享定义.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, Sequence
from typing import TYPE_CHECKING, TypeAlias, TypedDict

if TYPE_CHECKING:
    from viewkit.core.exceptions import AppError

ScalarValue: TypeAlias = str | int | float | bool | None
ContextValue: TypeAlias = ScalarValue | Sequence["ContextValue"] | Mapping[str, "ContextValue"]
ContextDict: TypeAlias = dict[str, ContextValue]
JsonValue: TypeAlias = ScalarValue | Sequence["JsonValue"] | Mapping[str, "JsonValue"]
StructlogEventDict: TypeAlias = MutableMapping[str, JsonValue]
LoggerExtra: TypeAlias = Mapping[str, JsonValue]
TemplateContext: TypeAlias = Mapping[str, object]

# 结构标签: {"model": {"maxlen": "5"}, "view": {"cols": "40"}}
TagAttributes: TypeAlias = dict[str, str]
StructTags: TypeAlias = Mapping[str, TagAttributes]


class FormBindOptions(TypedDict, total=False):
    """safe_form_bind 的扩展配置."""

    context: ContextDict | None
    extra: LoggerExtra | None
    fallback_exception: type["AppError"]
    log_event: str | None


__all__ = [
    "ContextDict",
    "ContextValue",
    "FormBindOptions",
    "JsonValue",
    "LoggerExtra",
    "ScalarValue",
    "StructTags",
    "StructlogEventDict",
    "TagAttributes",
    "TemplateContext",
]
