"""模型字段描述(MetaData)与模型遍历."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from dataclasses import dataclass, field

from viewkit.core.exceptions import FieldConfigurationError
from viewkit.models.tags import field_tags
from viewkit.models.values import Value
from viewkit.types import StructTags

_FALSE_FLAGS = frozenset({"false", "0", "no", "off"})


@dataclass(eq=False)
class MetaData:
    """单个模型字段的反射描述.

    Attributes:
        name: 字段名,根节点为空串.
        value: 字段当前的值对象(通常为 `Value` 子类实例).
        tags: 字段声明的结构标签.
        index: 列表元素的下标,非列表元素为 -1.
        parent: 父节点描述,根节点为 None.
        depth: 距离根节点的层数.

    """

    name: str
    value: object
    tags: StructTags = field(default_factory=dict)
    index: int = -1
    parent: MetaData | None = None
    depth: int = 0

    def selector(self) -> str:
        """返回从根节点开始、以点号连接的字段路径(列表元素使用下标)."""
        parts: list[str] = []
        node: MetaData | None = self
        while node is not None and node.parent is not None:
            parts.append(str(node.index) if node.index >= 0 else node.name)
            node = node.parent
        return ".".join(reversed(parts))

    def attrib(self, tag_key: str, name: str) -> tuple[str, bool]:
        """读取结构标签属性.

        Returns:
            (属性值, 是否存在).属性不存在时返回 ("", False).

        """
        attributes = self.tags.get(tag_key) or {}
        if name in attributes:
            return attributes[name], True
        return "", False

    def bool_attrib(self, tag_key: str, name: str) -> bool:
        """标签属性作为开关读取,只写 key 或值非 false/0 时为 True."""
        value, found = self.attrib(tag_key, name)
        return found and value.lower() not in _FALSE_FLAGS

    def int_attrib(self, tag_key: str, name: str) -> tuple[int, bool]:
        """标签属性作为整数读取.

        Raises:
            FieldConfigurationError: 属性存在但不是整数.

        """
        value, found = self.attrib(tag_key, name)
        if not found:
            return 0, False
        try:
            return int(value), True
        except ValueError as exc:
            msg = f"字段 {self.selector()} 的标签属性 {tag_key}:{name}={value!r} 不是整数"
            raise FieldConfigurationError(msg, extra={"field": self.selector(), "attrib": name}) from exc

    def __repr__(self) -> str:
        return f"MetaData({self.selector()!r}, {type(self.value).__name__})"


def walk_model(model: object) -> Iterator[MetaData]:
    """深度优先遍历模型,依次产出每个叶子字段的 MetaData.

    嵌套的 dataclass 与列表会被展开,列表元素继承列表字段的标签.
    非 `Value` 的叶子同样会被产出,由控制器分发决定是否支持.

    Args:
        model: dataclass 模型实例.

    """
    root = MetaData(name="", value=model)
    yield from _walk_children(root)


def _walk_children(parent: MetaData) -> Iterator[MetaData]:
    for model_field in dataclasses.fields(parent.value):
        child = MetaData(
            name=model_field.name,
            value=getattr(parent.value, model_field.name),
            tags=field_tags(model_field),
            parent=parent,
            depth=parent.depth + 1,
        )
        yield from _walk_value(child)


def _walk_value(metadata: MetaData) -> Iterator[MetaData]:
    value = metadata.value
    if isinstance(value, Value):
        yield metadata
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        yield from _walk_children(metadata)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            yield from _walk_value(
                MetaData(
                    name=metadata.name,
                    value=item,
                    tags=metadata.tags,
                    index=index,
                    parent=metadata,
                    depth=metadata.depth + 1,
                )
            )
    else:
        yield metadata
