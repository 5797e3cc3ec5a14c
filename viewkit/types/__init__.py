"""viewkit 共享类型别名."""

from .structures import (
    ContextDict,
    ContextValue,
    FormBindOptions,
    JsonValue,
    LoggerExtra,
    ScalarValue,
    StructlogEventDict,
    StructTags,
    TagAttributes,
    TemplateContext,
)

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
