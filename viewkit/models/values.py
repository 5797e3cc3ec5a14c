"""类型化的模型字段值.

每个值对象包装一个可变的 Python 值,模型(dataclass)以这些对象作为字段.
表单控制器通过 `isinstance` 判断字段类型,并用 `parse_string`/`set` 写回提交数据.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, ClassVar
from urllib.parse import urlparse

from viewkit.constants.system_constants import ErrorMessages
from viewkit.core.exceptions import FieldValueError
from viewkit.models.tags import MODEL_TAG_KEY
from viewkit.settings import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_DATE_FORMAT_HINT,
    DEFAULT_DATETIME_FORMAT,
    DEFAULT_DATETIME_FORMAT_HINT,
)

if TYPE_CHECKING:
    from viewkit.models.metadata import MetaData

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass
class DateFormats:
    """日期/时间的解析格式与展示提示."""

    date_format: str = DEFAULT_DATE_FORMAT
    date_format_hint: str = DEFAULT_DATE_FORMAT_HINT
    datetime_format: str = DEFAULT_DATETIME_FORMAT
    datetime_format_hint: str = DEFAULT_DATETIME_FORMAT_HINT


# 进程级配置,create_app 时写入
date_formats = DateFormats()


def configure_date_formats(
    *,
    date_format: str,
    date_format_hint: str,
    datetime_format: str,
    datetime_format_hint: str,
) -> None:
    """更新进程级日期格式配置."""
    date_formats.date_format = date_format
    date_formats.date_format_hint = date_format_hint
    date_formats.datetime_format = datetime_format
    date_formats.datetime_format_hint = datetime_format_hint


class Value:
    """模型字段值基类."""

    zero: ClassVar[object] = None

    def __init__(self, value: object = None) -> None:
        self._value = self.zero if value is None else value

    def get(self) -> object:
        return self._value

    def set(self, value: object) -> None:
        self._value = value

    def is_empty(self) -> bool:
        return self._value == self.zero

    def parse_string(self, text: str) -> object:
        """把提交的文本解析为类型化值,不修改自身.

        Raises:
            FieldValueError: 文本格式非法.

        """
        return text

    def set_string(self, text: str) -> None:
        self.set(self.parse_string(text))

    def validate(self, metadata: MetaData) -> str | None:
        """校验当前值,返回错误文案,合法时返回 None."""
        if self.is_empty() and metadata.bool_attrib(MODEL_TAG_KEY, "required"):
            return ErrorMessages.FIELD_REQUIRED
        return None

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is type(self):
            return self.get() == other.get()  # type: ignore[attr-defined]
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]


class StringValue(Value):
    """文本类值的公共基类."""

    zero: ClassVar[str] = ""

    def get(self) -> str:
        return str(self._value)


class _MaxlenMixin:
    def maxlen(self, metadata: MetaData) -> tuple[int, bool]:
        """读取 model 标签中的 maxlen."""
        return metadata.int_attrib(MODEL_TAG_KEY, "maxlen")

    def _validate_maxlen(self, text: str, metadata: MetaData) -> str | None:
        maxlen, ok = self.maxlen(metadata)
        if ok and len(text) > maxlen:
            return ErrorMessages.FIELD_TOO_LONG.format(maxlen=maxlen)
        return None


class String(_MaxlenMixin, StringValue):
    """单行文本."""

    def validate(self, metadata: MetaData) -> str | None:
        return super().validate(metadata) or self._validate_maxlen(self.get(), metadata)


class Password(_MaxlenMixin, StringValue):
    """密码."""

    def validate(self, metadata: MetaData) -> str | None:
        return super().validate(metadata) or self._validate_maxlen(self.get(), metadata)


class Text(StringValue):
    """多行文本."""


class Phone(StringValue):
    """电话号码."""


class Email(StringValue):
    """邮箱地址."""

    def validate(self, metadata: MetaData) -> str | None:
        error = super().validate(metadata)
        if error:
            return error
        if self.get() and not _EMAIL_PATTERN.match(self.get()):
            return ErrorMessages.INVALID_EMAIL
        return None


class Url(StringValue):
    """URL."""

    def validate(self, metadata: MetaData) -> str | None:
        error = super().validate(metadata)
        if error:
            return error
        if self.get():
            parsed = urlparse(self.get())
            if not parsed.scheme or not parsed.netloc:
                return ErrorMessages.INVALID_URL
        return None


class Bool(Value):
    """布尔值."""

    zero: ClassVar[bool] = False

    def get(self) -> bool:
        return bool(self._value)

    def parse_string(self, text: str) -> bool:
        return text != ""

    def is_empty(self) -> bool:
        return not self._value

    def __str__(self) -> str:
        return "true" if self._value else "false"


def _split_options(metadata: MetaData) -> list[str]:
    text, found = metadata.attrib(MODEL_TAG_KEY, "options")
    if not found:
        return []
    return [option.strip() for option in text.split(",")]


class Choice(StringValue):
    """单选,选项来自 model 标签 ``options=a,b,c``."""

    def options(self, metadata: MetaData) -> list[str]:
        return _split_options(metadata)

    def validate(self, metadata: MetaData) -> str | None:
        error = super().validate(metadata)
        if error:
            return error
        if self.get() and self.get() not in self.options(metadata):
            return ErrorMessages.INVALID_CHOICE.format(value=self.get())
        return None


class MultipleChoice(Value):
    """多选,值为已选选项列表."""

    def __init__(self, value: list[str] | None = None) -> None:
        super().__init__(list(value or []))

    def get(self) -> list[str]:
        return list(self._value)

    def set(self, value: object) -> None:
        self._value = list(value or [])  # type: ignore[call-overload]

    def is_empty(self) -> bool:
        return not self._value

    def is_set(self, option: str) -> bool:
        return option in self._value

    def options(self, metadata: MetaData) -> list[str]:
        return _split_options(metadata)

    def validate(self, metadata: MetaData) -> str | None:
        error = super().validate(metadata)
        if error:
            return error
        options = self.options(metadata)
        for option in self._value:
            if option not in options:
                return ErrorMessages.INVALID_CHOICE.format(value=option)
        return None

    def __str__(self) -> str:
        return ",".join(self._value)


class DynamicChoice(Value):
    """运行时提供选项的单选,按下标记录当前选中项(-1 表示未选)."""

    def __init__(self, options: list[str] | None = None, index: int = -1) -> None:
        super().__init__(None)
        self._options = list(options or [])
        self._index = index

    def options(self) -> list[str]:
        return list(self._options)

    def set_options(self, options: list[str]) -> None:
        self._options = list(options)
        if self._index >= len(self._options):
            self._index = -1

    def index(self) -> int:
        return self._index

    def set_index(self, index: int) -> None:
        if index < -1 or index >= len(self._options):
            msg = f"DynamicChoice 下标越界: {index}"
            raise IndexError(msg)
        self._index = index

    def get(self) -> str:
        if self._index < 0:
            return ""
        return self._options[self._index]

    def set(self, value: object) -> None:
        """按选项文本设置选中项,空串表示未选."""
        text = self.parse_string(str(value))
        self.set_index(self._options.index(text) if text else -1)

    def parse_string(self, text: str) -> str:
        """校验文本是当前选项之一(或空串)并原样返回."""
        if text and text not in self._options:
            raise FieldValueError(ErrorMessages.INVALID_CHOICE.format(value=text))
        return text

    def is_empty(self) -> bool:
        return self._index < 0

    def __str__(self) -> str:
        return self.get()

    def __repr__(self) -> str:
        return f"DynamicChoice({self._options!r}, index={self._index})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DynamicChoice):
            return self._options == other._options and self._index == other._index
        return NotImplemented


class _FormattedStringValue(StringValue, ABC):
    """按 strftime 格式存储的日期类文本."""

    @abstractmethod
    def _format(self) -> str:
        """strptime/strftime 使用的格式串."""

    @abstractmethod
    def _hint(self) -> str:
        """展示给用户的格式提示."""

    def parse_string(self, text: str) -> str:
        text = text.strip()
        if text:
            try:
                datetime.strptime(text, self._format())
            except ValueError as exc:
                raise FieldValueError(ErrorMessages.INVALID_DATE.format(format=self._hint())) from exc
        return text

    def validate(self, metadata: MetaData) -> str | None:
        error = super().validate(metadata)
        if error:
            return error
        if self.get():
            try:
                datetime.strptime(self.get(), self._format())
            except ValueError:
                return ErrorMessages.INVALID_DATE.format(format=self._hint())
        return None


class Date(_FormattedStringValue):
    """日期,文本格式由 DATE_FORMAT 配置."""

    def _format(self) -> str:
        return date_formats.date_format

    def _hint(self) -> str:
        return date_formats.date_format_hint

    def get_date(self) -> date | None:
        if not self.get():
            return None
        return datetime.strptime(self.get(), self._format()).date()

    def set_date(self, value: date) -> None:
        self.set(value.strftime(self._format()))


class DateTime(_FormattedStringValue):
    """日期时间,文本格式由 DATETIME_FORMAT 配置."""

    def _format(self) -> str:
        return date_formats.datetime_format

    def _hint(self) -> str:
        return date_formats.datetime_format_hint

    def get_datetime(self) -> datetime | None:
        if not self.get():
            return None
        return datetime.strptime(self.get(), self._format())

    def set_datetime(self, value: datetime) -> None:
        self.set(value.strftime(self._format()))


class Float(Value):
    """浮点数."""

    zero: ClassVar[float] = 0.0

    def get(self) -> float:
        return float(self._value)

    def parse_string(self, text: str) -> float:
        text = text.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError as exc:
            raise FieldValueError(f"{ErrorMessages.FIELD_VALUE_INVALID}: {text}") from exc

    def __str__(self) -> str:
        text = repr(self.get())
        return text[:-2] if text.endswith(".0") else text


class Int(Value):
    """整数."""

    zero: ClassVar[int] = 0

    def get(self) -> int:
        return int(self._value)

    def parse_string(self, text: str) -> int:
        text = text.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError as exc:
            raise FieldValueError(f"{ErrorMessages.FIELD_VALUE_INVALID}: {text}") from exc


class File(Value):
    """上传文件: 文件名与内容."""

    def __init__(self, name: str = "", data: bytes = b"") -> None:
        super().__init__(None)
        self.name = name
        self.data = data

    def get(self) -> bytes:
        return self.data

    def set(self, value: object) -> None:
        self.name, self.data = value  # type: ignore[misc]

    def is_empty(self) -> bool:
        return not self.data

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"File({self.name!r}, {len(self.data)} bytes)"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, File):
            return (self.name, self.data) == (other.name, other.data)
        return NotImplemented


class Blob(Value):
    """二进制内容."""

    zero: ClassVar[bytes] = b""

    def get(self) -> bytes:
        return bytes(self._value)

    def __str__(self) -> str:
        return f"<{len(self._value)} bytes>"


__all__ = [
    "Blob",
    "Bool",
    "Choice",
    "Date",
    "DateFormats",
    "DateTime",
    "DynamicChoice",
    "Email",
    "File",
    "Float",
    "Int",
    "MultipleChoice",
    "Password",
    "Phone",
    "String",
    "StringValue",
    "Text",
    "Url",
    "Value",
    "configure_date_formats",
    "date_formats",
]
