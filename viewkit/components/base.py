"""视图树基础类型.

视图是可组合的 HTML 输出单元: `render` 向 Response 写出完整、成对的元素,
`iterate_children` 以回调暴露子节点,供通用的树遍历使用.
"""

from __future__ import annotations

import itertools
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field

from viewkit.components.response import Response

IterateChildrenCallback = Callable[["View", "View"], None]

_id_counter = itertools.count(1)
_id_lock = threading.Lock()


def new_view_id() -> str:
    """分配进程内唯一的视图 ID(十六进制)."""
    with _id_lock:
        return f"{next(_id_counter):x}"


class View(ABC):
    """所有视图的基类."""

    @abstractmethod
    def render(self, response: Response) -> None:
        """向 Response 写出本视图的完整 HTML."""

    def iterate_children(self, callback: IterateChildrenCallback) -> None:
        """对每个子视图调用 ``callback(self, child)``,叶子节点不调用."""

    def render_to_string(self) -> str:
        response = Response()
        self.render(response)
        return response.getvalue()


@dataclass(eq=False)
class ViewBaseWithId(View):
    """带 ID 的视图,ID 在首次访问时分配."""

    _id: str = field(default="", init=False, repr=False)

    @property
    def id(self) -> str:
        if not self._id:
            self._id = new_view_id()
        return self._id


class Views(list, View):
    """按顺序渲染的视图列表."""

    def render(self, response: Response) -> None:
        for view in self:
            if view is not None:
                view.render(response)

    def iterate_children(self, callback: IterateChildrenCallback) -> None:
        for view in self:
            if view is not None:
                callback(self, view)


@dataclass(eq=False)
class HTML(View):
    """原样输出的 HTML 片段."""

    content: str

    def render(self, response: Response) -> None:
        response.write(self.content)


@dataclass(eq=False)
class Escape(View):
    """转义后输出的文本."""

    text: str

    def render(self, response: Response) -> None:
        response.xml.escape_content(self.text)


def walk_views(view: View, visitor: Callable[[View], None]) -> None:
    """深度优先(先序)遍历视图树."""
    visitor(view)
    view.iterate_children(lambda _parent, child: walk_views(child, visitor))


def find_views(root: View, view_type: type[View]) -> list[View]:
    """收集树中所有 view_type 类型的视图,保持先序顺序."""
    found: list[View] = []

    def _visit(view: View) -> None:
        if isinstance(view, view_type):
            found.append(view)

    walk_views(root, _visit)
    return found
