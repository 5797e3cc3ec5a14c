"""类型化模型: 字段值、结构标签与字段描述."""

from .metadata import MetaData, walk_model
from .tags import MODEL_TAG_KEY, VIEW_TAG_KEY, field_tags, parse_tag, tagged
from .values import (
    Blob,
    Bool,
    Choice,
    Date,
    DateTime,
    DynamicChoice,
    Email,
    File,
    Float,
    Int,
    MultipleChoice,
    Password,
    Phone,
    String,
    Text,
    Url,
    Value,
    configure_date_formats,
    date_formats,
)

__all__ = [
    "MODEL_TAG_KEY",
    "VIEW_TAG_KEY",
    "Blob",
    "Bool",
    "Choice",
    "Date",
    "DateTime",
    "DynamicChoice",
    "Email",
    "File",
    "Float",
    "Int",
    "MetaData",
    "MultipleChoice",
    "Password",
    "Phone",
    "String",
    "Text",
    "Url",
    "Value",
    "configure_date_formats",
    "date_formats",
    "field_tags",
    "parse_tag",
    "tagged",
    "walk_model",
]
