"""表单相关的 HTML 元素视图.

所有元素都输出成对或自闭合的完整标签,可选属性仅在非零值时输出.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from viewkit.components.base import IterateChildrenCallback, View, ViewBaseWithId, find_views
from viewkit.components.response import Response


class TextFieldType(str, Enum):
    """单行输入框类型."""

    TEXT = "text"
    PASSWORD = "password"
    EMAIL = "email"


@dataclass(eq=False)
class InputView(ViewBaseWithId):
    """表单输入控件的公共基类,Label 的 for 属性指向它的 ID."""

    class_: str = ""
    name: str = ""
    disabled: bool = False


@dataclass(eq=False)
class Div(ViewBaseWithId):
    """HTML div 元素."""

    class_: str = ""
    content: View | None = None

    def iterate_children(self, callback: IterateChildrenCallback) -> None:
        if self.content is not None:
            callback(self, self.content)

    def render(self, response: Response) -> None:
        response.xml.open_tag("div").attrib("id", self.id).attrib_if_not_default("class", self.class_)
        try:
            if self.content is not None:
                self.content.render(response)
        finally:
            response.xml.force_close_tag()


@dataclass(eq=False)
class Label(ViewBaseWithId):
    """HTML label 元素.

    ``for_view`` 可以是输入控件或包含输入控件的视图,
    渲染时 for 属性取其中第一个输入控件的 ID.
    """

    class_: str = ""
    for_view: View | None = None
    content: View | None = None

    def iterate_children(self, callback: IterateChildrenCallback) -> None:
        if self.content is not None:
            callback(self, self.content)

    def target_id(self) -> str:
        if self.for_view is None:
            return ""
        inputs = find_views(self.for_view, InputView)
        return inputs[0].id if inputs else ""  # type: ignore[attr-defined]

    def render(self, response: Response) -> None:
        response.xml.open_tag("label").attrib("id", self.id).attrib_if_not_default("class", self.class_)
        response.xml.attrib_if_not_default("for", self.target_id())
        try:
            if self.content is not None:
                self.content.render(response)
        finally:
            response.xml.force_close_tag()


@dataclass(eq=False)
class TextField(InputView):
    """单行输入框."""

    type: TextFieldType = TextFieldType.TEXT
    text: str = ""
    size: int = 0
    max_length: int = 0
    placeholder: str = ""

    def render(self, response: Response) -> None:
        xml = response.xml
        xml.open_tag("input").attrib("id", self.id).attrib_if_not_default("class", self.class_)
        xml.attrib("type", self.type.value).attrib("name", self.name)
        xml.attrib_if_not_default("size", self.size)
        xml.attrib_if_not_default("maxlength", self.max_length)
        xml.attrib_flag("disabled", self.disabled)
        xml.attrib_if_not_default("placeholder", self.placeholder)
        xml.attrib("value", self.text)
        xml.close_tag()


@dataclass(eq=False)
class TextArea(InputView):
    """多行输入框."""

    text: str = ""
    cols: int = 0
    rows: int = 0
    placeholder: str = ""

    def render(self, response: Response) -> None:
        xml = response.xml
        xml.open_tag("textarea").attrib("id", self.id).attrib_if_not_default("class", self.class_)
        xml.attrib("name", self.name)
        xml.attrib_if_not_default("rows", self.rows)
        xml.attrib_if_not_default("cols", self.cols)
        xml.attrib_flag("disabled", self.disabled)
        xml.attrib_if_not_default("placeholder", self.placeholder)
        xml.escape_content(self.text)
        xml.force_close_tag()


@dataclass(eq=False)
class Checkbox(InputView):
    """复选框,label 非空时在其后输出对应的 label 元素."""

    label: str = ""
    checked: bool = False

    def render(self, response: Response) -> None:
        xml = response.xml
        xml.open_tag("input").attrib("id", self.id).attrib_if_not_default("class", self.class_)
        xml.attrib("type", "checkbox").attrib("name", self.name).attrib("value", "true")
        xml.attrib_flag("disabled", self.disabled)
        xml.attrib_flag("checked", self.checked)
        xml.close_tag()
        if self.label:
            xml.open_tag("label").attrib("for", self.id)
            xml.escape_content(self.label)
            xml.force_close_tag()


class SelectModel(Protocol):
    """Select 的选项数据源."""

    def num_options(self) -> int: ...

    def value(self, index: int) -> str: ...

    def label(self, index: int) -> str: ...

    def selected(self, index: int) -> bool: ...


@dataclass
class StringsSelectModel:
    """以字符串列表为选项,按值匹配选中项."""

    options: list[str] = field(default_factory=list)
    selected_option: str = ""

    def num_options(self) -> int:
        return len(self.options)

    def value(self, index: int) -> str:
        return self.options[index]

    def label(self, index: int) -> str:
        return self.options[index]

    def selected(self, index: int) -> bool:
        return self.options[index] == self.selected_option


@dataclass
class IndexedStringsSelectModel:
    """以字符串列表为选项,按下标匹配选中项(-1 表示无)."""

    options: list[str] = field(default_factory=list)
    index: int = -1

    def num_options(self) -> int:
        return len(self.options)

    def value(self, index: int) -> str:
        return self.options[index]

    def label(self, index: int) -> str:
        return self.options[index]

    def selected(self, index: int) -> bool:
        return index == self.index


@dataclass(eq=False)
class Select(InputView):
    """下拉选择框."""

    model: SelectModel | None = None
    size: int = 0

    def render(self, response: Response) -> None:
        xml = response.xml
        xml.open_tag("select").attrib("id", self.id).attrib_if_not_default("class", self.class_)
        xml.attrib("name", self.name)
        xml.attrib_if_not_default("size", self.size)
        xml.attrib_flag("disabled", self.disabled)
        if self.model is not None:
            for index in range(self.model.num_options()):
                xml.open_tag("option").attrib("value", self.model.value(index))
                xml.attrib_flag("selected", self.model.selected(index))
                xml.escape_content(self.model.label(index))
                xml.force_close_tag()
        xml.force_close_tag()


@dataclass(eq=False)
class FileInput(InputView):
    """文件上传控件."""

    def render(self, response: Response) -> None:
        xml = response.xml
        xml.open_tag("input").attrib("id", self.id).attrib_if_not_default("class", self.class_)
        xml.attrib("type", "file").attrib("name", self.name)
        xml.attrib_flag("disabled", self.disabled)
        xml.close_tag()


@dataclass(eq=False)
class SubmitButton(ViewBaseWithId):
    """提交按钮."""

    class_: str = ""
    value: str = ""

    def render(self, response: Response) -> None:
        xml = response.xml
        xml.open_tag("input").attrib("id", self.id).attrib_if_not_default("class", self.class_)
        xml.attrib("type", "submit").attrib_if_not_default("value", self.value)
        xml.close_tag()
