"""表单字段控制器.

每个控制器负责一种模型值类型: 判断是否支持某字段(`supports`),
为字段构造输入视图(`new_input`),以及把请求中的提交数据写回字段(`set_value`).

`FormFieldControllers` 按顺序线性扫描,第一个 `supports` 为真的控制器胜出;
顺序由调用方决定,是唯一的优先级机制.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from markupsafe import escape

from viewkit.components import (
    HTML,
    Checkbox,
    FileInput,
    IndexedStringsSelectModel,
    Select,
    StringsSelectModel,
    TextArea,
    TextField,
    TextFieldType,
    View,
    Views,
)
from viewkit.core.exceptions import FieldConfigurationError, FormFieldTypeNotSupportedError
from viewkit.models import (
    VIEW_TAG_KEY,
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
    date_formats,
)
from viewkit.utils.structlog_config import get_form_logger

if TYPE_CHECKING:
    from viewkit.components import Context
    from viewkit.forms.form import Form
    from viewkit.models import MetaData

logger = get_form_logger()


class FormFieldController(ABC):
    """表单字段控制器基类(无状态策略对象).

    具体子类以类属性 `value_type` 声明负责的值类型,并实现 `new_input` 与 `extract`.
    """

    @property
    @abstractmethod
    def value_type(self) -> type[Value]:
        """本控制器负责的值类型."""

    def supports(self, metadata: MetaData, form: Form) -> bool:
        """字段的值是否为本控制器负责的类型."""
        return isinstance(metadata.value, self.value_type)

    @abstractmethod
    def new_input(self, with_label: bool, metadata: MetaData, form: Form) -> View:
        """为字段构造输入视图.

        Raises:
            FormFieldTypeNotSupportedError: 字段类型不受本控制器支持.

        """

    @abstractmethod
    def extract(self, ctx: Context, metadata: MetaData, form: Form) -> object:
        """根据当前字段与提交数据计算新值,不修改模型."""

    def set_value(self, ctx: Context, metadata: MetaData, form: Form) -> None:
        """用提交数据更新字段的值.

        请求层的数据读取异常(缺少上传文件、multipart 解析失败、读流失败)原样抛出.
        """
        value = self._value(metadata, form)
        value.set(self.extract(ctx, metadata, form))

    def _value(self, metadata: MetaData, form: Form) -> Value:
        if not self.supports(metadata, form):
            raise FormFieldTypeNotSupportedError(metadata)
        return metadata.value  # type: ignore[return-value]

    @staticmethod
    def _with_label(with_label: bool, input_view: View, metadata: MetaData, form: Form) -> View:
        if with_label:
            return form.add_standard_label(input_view, metadata)
        return input_view

    @staticmethod
    def _text_field(metadata: MetaData, form: Form, text: str, **overrides: object) -> TextField:
        options: dict[str, object] = {
            "class_": form.field_input_class(metadata),
            "name": metadata.selector(),
            "text": text,
            "size": form.get_input_size(metadata),
            "disabled": form.is_field_disabled(metadata),
            "placeholder": form.input_field_placeholder(metadata),
        }
        options.update(overrides)
        return TextField(**options)  # type: ignore[arg-type]


class ModelValueControllerBase(FormFieldController):
    """通过 `parse_string` 从单个表单值解析新值的控制器基类."""

    def extract(self, ctx: Context, metadata: MetaData, form: Form) -> object:
        value = self._value(metadata, form)
        return value.parse_string(ctx.form_value(metadata.selector()))


class _MaxlenTextController(ModelValueControllerBase):
    field_type: ClassVar[TextFieldType] = TextFieldType.TEXT

    def new_input(self, with_label: bool, metadata: MetaData, form: Form) -> View:
        value = self._value(metadata, form)
        text_field = self._text_field(metadata, form, value.get(), type=self.field_type)
        maxlen, ok = value.maxlen(metadata)  # type: ignore[attr-defined]
        if ok:
            text_field.max_length = maxlen
            if maxlen < text_field.size:
                text_field.size = maxlen
        return self._with_label(with_label, text_field, metadata, form)


class _PlainTextController(ModelValueControllerBase):
    field_type: ClassVar[TextFieldType] = TextFieldType.TEXT

    def new_input(self, with_label: bool, metadata: MetaData, form: Form) -> View:
        value = self._value(metadata, form)
        text_field = self._text_field(metadata, form, str(value), type=self.field_type)
        return self._with_label(with_label, text_field, metadata, form)


class ModelStringController(_MaxlenTextController):
    value_type = String


class ModelPasswordController(_MaxlenTextController):
    value_type = Password
    field_type = TextFieldType.PASSWORD


class ModelUrlController(_PlainTextController):
    value_type = Url


class ModelEmailController(_PlainTextController):
    value_type = Email
    field_type = TextFieldType.EMAIL


class ModelPhoneController(_PlainTextController):
    value_type = Phone


class ModelTextController(ModelValueControllerBase):
    """多行文本,cols/rows 来自 view 标签,非整数时立即抛出 FieldConfigurationError."""

    value_type = Text

    def new_input(self, with_label: bool, metadata: MetaData, form: Form) -> View:
        value = self._value(metadata, form)
        # 未声明时为 0,不输出对应属性
        cols, _ = metadata.int_attrib(VIEW_TAG_KEY, "cols")
        rows, _ = metadata.int_attrib(VIEW_TAG_KEY, "rows")
        text_area = TextArea(
            class_=form.field_input_class(metadata),
            name=metadata.selector(),
            text=value.get(),
            cols=cols,
            rows=rows,
            disabled=form.is_field_disabled(metadata),
            placeholder=form.input_field_placeholder(metadata),
        )
        return self._with_label(with_label, text_area, metadata, form)


class ModelBoolController(FormFieldController):
    """复选框.表单中该键存在且非空即为 True,与具体取值无关."""

    value_type = Bool

    def new_input(self, with_label: bool, metadata: MetaData, form: Form) -> View:
        value = self._value(metadata, form)
        return Checkbox(
            class_=form.field_input_class(metadata),
            name=metadata.selector(),
            disabled=form.is_field_disabled(metadata),
            checked=value.get(),
            label=form.field_label(metadata) if with_label else "",
        )

    def extract(self, ctx: Context, metadata: MetaData, form: Form) -> bool:
        self._value(metadata, form)
        return ctx.form_value(metadata.selector()) != ""


def _with_empty_option(options: list[str]) -> tuple[list[str], bool]:
    """保证第一个选项为空串,返回 (选项, 是否插入了空选项)."""
    if not options or options[0] != "":
        return ["", *options], True
    return options, False


class ModelChoiceController(ModelValueControllerBase):
    value_type = Choice

    def new_input(self, with_label: bool, metadata: MetaData, form: Form) -> View:
        value = self._value(metadata, form)
        options, _ = _with_empty_option(value.options(metadata))  # type: ignore[attr-defined]
        select = Select(
            class_=form.field_input_class(metadata),
            name=metadata.selector(),
            model=StringsSelectModel(options, value.get()),
            disabled=form.is_field_disabled(metadata),
            size=1,
        )
        return self._with_label(with_label, select, metadata, form)


class ModelMultipleChoiceController(FormFieldController):
    """每个选项一个复选框,名称为 ``<selector>_<index>``."""

    value_type = MultipleChoice

    @staticmethod
    def _checkbox_name(metadata: MetaData, index: int) -> str:
        return f"{metadata.selector()}_{index}"

    def new_input(self, with_label: bool, metadata: MetaData, form: Form) -> View:
        value = self._value(metadata, form)
        checkboxes = Views(
            Checkbox(
                label=option,
                class_=form.field_input_class(metadata),
                name=self._checkbox_name(metadata, index),
                disabled=form.is_field_disabled(metadata),
                checked=value.is_set(option),  # type: ignore[attr-defined]
            )
            for index, option in enumerate(value.options(metadata))  # type: ignore[attr-defined]
        )
        return self._with_label(with_label, checkboxes, metadata, form)

    def extract(self, ctx: Context, metadata: MetaData, form: Form) -> list[str]:
        # 每次提交都从勾选框完整重建,不与旧值合并
        value = self._value(metadata, form)
        return [
            option
            for index, option in enumerate(value.options(metadata))  # type: ignore[attr-defined]
            if ctx.form_value(self._checkbox_name(metadata, index)) != ""
        ]


class ModelDynamicChoiceController(ModelValueControllerBase):
    """插入空选项时选中下标同步后移一位."""

    value_type = DynamicChoice

    def new_input(self, with_label: bool, metadata: MetaData, form: Form) -> View:
        value = self._value(metadata, form)
        options, shifted = _with_empty_option(value.options())  # type: ignore[attr-defined]
        index = value.index()  # type: ignore[attr-defined]
        if shifted:
            index += 1
        select = Select(
            class_=form.field_input_class(metadata),
            name=metadata.selector(),
            model=IndexedStringsSelectModel(options, index),
            disabled=form.is_field_disabled(metadata),
            size=1,
        )
        return self._with_label(with_label, select, metadata, form)


class _FormattedDateController(ModelValueControllerBase):
    """日期类输入框,前置格式提示.

    提示串是展示给用户的格式字面量(如 "YYYY-MM-DD"),输入框宽度等于它的长度.
    """

    @abstractmethod
    def _format_hint(self) -> str:
        """当前生效的格式提示."""

    def new_input(self, with_label: bool, metadata: MetaData, form: Form) -> View:
        value = self._value(metadata, form)
        hint = self._format_hint()
        input_view = Views(
            [
                HTML(f"(格式: {escape(hint)})<br/>"),
                self._text_field(metadata, form, value.get(), size=len(hint)),
            ]
        )
        return self._with_label(with_label, input_view, metadata, form)


class ModelDateController(_FormattedDateController):
    value_type = Date

    def _format_hint(self) -> str:
        return date_formats.date_format_hint


class ModelDateTimeController(_FormattedDateController):
    value_type = DateTime

    def _format_hint(self) -> str:
        return date_formats.datetime_format_hint


class ModelFloatController(_PlainTextController):
    value_type = Float

    def new_input(self, with_label: bool, metadata: MetaData, form: Form) -> View:
        value = self._value(metadata, form)
        text_field = self._text_field(metadata, form, str(value), size=0)
        return self._with_label(with_label, text_field, metadata, form)


class ModelIntController(ModelFloatController):
    value_type = Int


def _read_upload(ctx: Context, metadata: MetaData) -> tuple[str, bytes]:
    """一次性读取整个上传内容,无论读取成功与否都关闭上传流."""
    upload = ctx.form_file(metadata.selector())
    try:
        data = upload.read()
    finally:
        upload.close()
    return upload.filename or "", data


class _UploadController(FormFieldController):
    def new_input(self, with_label: bool, metadata: MetaData, form: Form) -> View:
        self._value(metadata, form)
        file_input = FileInput(
            class_=form.field_input_class(metadata),
            name=metadata.selector(),
            disabled=form.is_field_disabled(metadata),
        )
        return self._with_label(with_label, file_input, metadata, form)


class ModelFileController(_UploadController):
    value_type = File

    def extract(self, ctx: Context, metadata: MetaData, form: Form) -> tuple[str, bytes]:
        self._value(metadata, form)
        return _read_upload(ctx, metadata)


class ModelBlobController(_UploadController):
    value_type = Blob

    def extract(self, ctx: Context, metadata: MetaData, form: Form) -> bytes:
        self._value(metadata, form)
        _, data = _read_upload(ctx, metadata)
        return data


class FormFieldControllers(list):
    """有序的控制器列表,按顺序线性分发,第一个支持该字段的控制器胜出."""

    def controller_for(self, metadata: MetaData, form: Form) -> FormFieldController | None:
        for controller in self:
            if controller.supports(metadata, form):
                return controller
        return None

    def supports(self, metadata: MetaData, form: Form) -> bool:
        return self.controller_for(metadata, form) is not None

    def new_input(self, with_label: bool, metadata: MetaData, form: Form) -> View:
        controller = self._require(metadata, form)
        try:
            return controller.new_input(with_label, metadata, form)
        except FieldConfigurationError as exc:
            logger.error("表单字段配置错误", field=metadata.selector(), error_message=str(exc))
            raise

    def set_value(self, ctx: Context, metadata: MetaData, form: Form) -> None:
        self._require(metadata, form).set_value(ctx, metadata, form)

    def _require(self, metadata: MetaData, form: Form) -> FormFieldController:
        controller = self.controller_for(metadata, form)
        if controller is None:
            logger.warning(
                "表单字段类型不受支持",
                field=metadata.selector(),
                value_type=type(metadata.value).__name__,
            )
            raise FormFieldTypeNotSupportedError(metadata)
        return controller


STANDARD_FORM_FIELD_CONTROLLERS = FormFieldControllers(
    [
        ModelStringController(),
        ModelTextController(),
        ModelUrlController(),
        ModelEmailController(),
        ModelPasswordController(),
        ModelPhoneController(),
        ModelBoolController(),
        ModelChoiceController(),
        ModelMultipleChoiceController(),
        ModelDynamicChoiceController(),
        ModelDateController(),
        ModelDateTimeController(),
        ModelFloatController(),
        ModelIntController(),
        ModelFileController(),
        ModelBlobController(),
    ]
)
