"""可组合的 HTML 视图组件."""

from .base import (
    HTML,
    Escape,
    IterateChildrenCallback,
    View,
    ViewBaseWithId,
    Views,
    find_views,
    new_view_id,
    walk_views,
)
from .context import Context
from .elements import (
    Checkbox,
    Div,
    FileInput,
    IndexedStringsSelectModel,
    InputView,
    Label,
    Select,
    SelectModel,
    StringsSelectModel,
    SubmitButton,
    TextArea,
    TextField,
    TextFieldType,
)
from .response import Response
from .span import Span
from .xml_writer import XMLWriter

__all__ = [
    "HTML",
    "Checkbox",
    "Context",
    "Div",
    "Escape",
    "FileInput",
    "IndexedStringsSelectModel",
    "InputView",
    "IterateChildrenCallback",
    "Label",
    "Response",
    "Select",
    "SelectModel",
    "Span",
    "StringsSelectModel",
    "SubmitButton",
    "TextArea",
    "TextField",
    "TextFieldType",
    "View",
    "ViewBaseWithId",
    "Views",
    "XMLWriter",
    "find_views",
    "new_view_id",
    "walk_views",
]
