"""模型表单: 字段展示策略、渲染与提交绑定."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from viewkit.components import (
    Div,
    Escape,
    FileInput,
    IterateChildrenCallback,
    Label,
    Span,
    SubmitButton,
    View,
    ViewBaseWithId,
    Views,
    find_views,
)
from viewkit.constants.system_constants import ErrorMessages
from viewkit.core.exceptions import FieldValueError
from viewkit.forms.controllers import STANDARD_FORM_FIELD_CONTROLLERS, FormFieldControllers
from viewkit.models import MODEL_TAG_KEY, VIEW_TAG_KEY, MetaData, Value, walk_model
from viewkit.utils.structlog_config import get_form_logger

if TYPE_CHECKING:
    from viewkit.components import Context, Response

logger = get_form_logger()


@dataclass(frozen=True, slots=True)
class FieldError:
    """单个字段的绑定/校验错误."""

    selector: str
    message: str


@dataclass(eq=False)
class Form(ViewBaseWithId):
    """把一个 dataclass 模型渲染为 HTML 表单,并把提交数据绑定回模型.

    字段级的展示策略按选择器(selector)配置,未配置时回退到字段的 view/model 标签.

    Attributes:
        model: 被编辑的 dataclass 模型实例.
        action: 表单提交地址,为空时提交到当前地址.
        class_: form 元素的 CSS 类.
        field_class: 包裹每个字段的 div 的 CSS 类.
        input_class: 输入控件的默认 CSS 类.
        input_size: 单行输入框的默认宽度,0 表示不设置.
        labels: 选择器到标签文本的映射.
        placeholders: 选择器到占位文本的映射.
        field_input_classes: 选择器到输入控件 CSS 类的映射.
        disabled_fields: 禁用的字段选择器,绑定时跳过.
        required_fields: 必填字段选择器.
        excluded_fields: 不渲染也不绑定的字段选择器(含其子字段).
        labels_after_inputs: 标签是否放在输入控件之后.
        controllers: 字段控制器列表.

    """

    model: object = None
    action: str = ""
    class_: str = ""
    field_class: str = "field"
    input_class: str = ""
    input_size: int = 0
    label_class: str = ""
    error_class: str = "error"
    required_marker: str = " *"
    labels: dict[str, str] = field(default_factory=dict)
    placeholders: dict[str, str] = field(default_factory=dict)
    field_input_classes: dict[str, str] = field(default_factory=dict)
    disabled_fields: list[str] = field(default_factory=list)
    required_fields: list[str] = field(default_factory=list)
    excluded_fields: list[str] = field(default_factory=list)
    labels_after_inputs: bool = False
    submit_button_text: str = "提交"
    submit_button_class: str = ""
    controllers: FormFieldControllers = field(default_factory=lambda: STANDARD_FORM_FIELD_CONTROLLERS)
    field_errors: dict[str, str] = field(default_factory=dict, init=False)
    _content: Views | None = field(default=None, init=False, repr=False)

    # ------------------------------------------------------------------ #
    # 展示策略(控制器只读查询)
    # ------------------------------------------------------------------ #
    def field_input_class(self, metadata: MetaData) -> str:
        return self.field_input_classes.get(metadata.selector(), self.input_class)

    def get_input_size(self, metadata: MetaData) -> int:
        size, found = metadata.int_attrib(VIEW_TAG_KEY, "size")
        return size if found else self.input_size

    def is_field_disabled(self, metadata: MetaData) -> bool:
        return metadata.selector() in self.disabled_fields or metadata.bool_attrib(VIEW_TAG_KEY, "disabled")

    def is_field_required(self, metadata: MetaData) -> bool:
        return metadata.selector() in self.required_fields or metadata.bool_attrib(MODEL_TAG_KEY, "required")

    def input_field_placeholder(self, metadata: MetaData) -> str:
        selector = metadata.selector()
        if selector in self.placeholders:
            return self.placeholders[selector]
        placeholder, _ = metadata.attrib(VIEW_TAG_KEY, "placeholder")
        return placeholder

    def field_label(self, metadata: MetaData) -> str:
        """标签文本: 显式配置 > view 标签 label > 字段名."""
        selector = metadata.selector()
        if selector in self.labels:
            return self.labels[selector]
        label, found = metadata.attrib(VIEW_TAG_KEY, "label")
        if found:
            return label
        label = metadata.name.replace("_", " ").title()
        if metadata.index >= 0:
            label = f"{label} {metadata.index + 1}"
        return label

    def add_standard_label(self, input_view: View, metadata: MetaData) -> View:
        """为输入视图加上标准标签,必填字段追加 required_marker."""
        text = self.field_label(metadata)
        if self.is_field_required(metadata):
            text += self.required_marker
        label = Label(class_=self.label_class, for_view=input_view, content=Escape(text))
        if self.labels_after_inputs:
            return Views([input_view, label])
        return Views([label, input_view])

    # ------------------------------------------------------------------ #
    # 字段遍历
    # ------------------------------------------------------------------ #
    def fields(self) -> Iterator[MetaData]:
        """按声明顺序产出需要渲染/绑定的字段."""
        for metadata in walk_model(self.model):
            if not self._is_excluded(metadata):
                yield metadata

    def _is_excluded(self, metadata: MetaData) -> bool:
        node: MetaData | None = metadata
        while node is not None and node.parent is not None:
            if node.selector() in self.excluded_fields or node.attrib(VIEW_TAG_KEY, "-")[1]:
                return True
            node = node.parent
        return False

    # ------------------------------------------------------------------ #
    # 渲染
    # ------------------------------------------------------------------ #
    def new_field_views(self) -> Views:
        views = Views()
        for metadata in self.fields():
            children = Views([self.controllers.new_input(True, metadata, self)])
            message = self.field_errors.get(metadata.selector())
            if message:
                children.append(Span(class_=self.error_class, content=Escape(message)))
            views.append(Div(class_=self.field_class, content=children))
        return views

    def content(self) -> Views:
        if self._content is None:
            views = self.new_field_views()
            views.append(SubmitButton(class_=self.submit_button_class, value=self.submit_button_text))
            self._content = views
        return self._content

    def iterate_children(self, callback: IterateChildrenCallback) -> None:
        callback(self, self.content())

    def render(self, response: Response) -> None:
        content = self.content()
        xml = response.xml
        xml.open_tag("form").attrib("id", self.id).attrib_if_not_default("class", self.class_)
        xml.attrib("method", "post").attrib_if_not_default("action", self.action)
        if find_views(content, FileInput):
            xml.attrib("enctype", "multipart/form-data")
        try:
            content.render(response)
        finally:
            xml.force_close_tag()

    # ------------------------------------------------------------------ #
    # 绑定
    # ------------------------------------------------------------------ #
    def bind(self, ctx: Context) -> list[FieldError]:
        """把提交数据写回模型并校验.

        解析失败的字段记为错误并跳过校验;禁用字段不绑定.
        不支持的字段类型与请求层读取异常直接抛出.

        Returns:
            字段错误列表,为空表示绑定成功.

        """
        errors: list[FieldError] = []
        bound = 0
        for metadata in self.fields():
            if self.is_field_disabled(metadata):
                continue
            try:
                self.controllers.set_value(ctx, metadata, self)
            except FieldValueError as exc:
                errors.append(FieldError(metadata.selector(), exc.message))
                continue
            bound += 1
            message = self.validate_field(metadata)
            if message:
                errors.append(FieldError(metadata.selector(), message))

        self.field_errors = {error.selector: error.message for error in errors}
        self._content = None
        logger.info("表单绑定完成", form_id=self.id, bound_fields=bound, error_count=len(errors))
        return errors

    def validate_field(self, metadata: MetaData) -> str | None:
        value = metadata.value
        if not isinstance(value, Value):
            return None
        if self.is_field_required(metadata) and value.is_empty():
            return ErrorMessages.FIELD_REQUIRED
        return value.validate(metadata)
