"""行内 span 元素."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from viewkit.components.base import IterateChildrenCallback, View, ViewBaseWithId

if TYPE_CHECKING:
    from viewkit.components.response import Response


@dataclass(eq=False)
class Span(ViewBaseWithId):
    """HTML span 元素.

    Attributes:
        class_: CSS 类名,为空时不输出 class 属性.
        content: 可选的子视图.

    """

    class_: str = ""
    content: View | None = None

    def iterate_children(self, callback: IterateChildrenCallback) -> None:
        if self.content is not None:
            callback(self, self.content)

    def render(self, response: Response) -> None:
        response.xml.open_tag("span").attrib("id", self.id).attrib_if_not_default("class", self.class_)
        try:
            if self.content is not None:
                self.content.render(response)
        finally:
            response.xml.force_close_tag()
