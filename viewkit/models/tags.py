"""结构标签: 在 dataclass 字段上声明 model/view 属性.

标签文本形如 ``"maxlen=5|required"``, 以 ``|`` 分隔,每项为 ``key=value``,
只写 key 时值为空串.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any, TypeVar

from viewkit.types import StructTags, TagAttributes

# dataclass field.metadata 中保存标签的键
TAGS_METADATA_KEY = "viewkit.tags"

MODEL_TAG_KEY = "model"
VIEW_TAG_KEY = "view"

T = TypeVar("T")


def parse_tag(text: str) -> TagAttributes:
    """解析单个标签文本.

    Args:
        text: 形如 ``"cols=40|rows=5"`` 的文本.

    Returns:
        属性名到属性值的字典,空文本返回空字典.

    """
    attributes: TagAttributes = {}
    for part in text.split("|"):
        part = part.strip()
        if not part:
            continue
        key, _, value = part.partition("=")
        attributes[key.strip()] = value.strip()
    return attributes


def tagged(factory: Callable[[], T], *, model: str = "", view: str = "", **field_kwargs: Any) -> T:
    """声明带结构标签的 dataclass 字段.

    Example:
        >>> @dataclass
        ... class Signup:
        ...     name: String = tagged(String, model="maxlen=20|required")
        ...     bio: Text = tagged(Text, view="cols=40|rows=5")

    """
    tags: StructTags = {MODEL_TAG_KEY: parse_tag(model), VIEW_TAG_KEY: parse_tag(view)}
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[TAGS_METADATA_KEY] = tags
    return dataclasses.field(default_factory=factory, metadata=metadata, **field_kwargs)


def field_tags(field: dataclasses.Field) -> StructTags:
    """读取 dataclass 字段上声明的结构标签,未声明时返回空映射."""
    return field.metadata.get(TAGS_METADATA_KEY, {})
