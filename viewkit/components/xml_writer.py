"""流式 XML/HTML 标签写入器.

开始标签的 ``>`` 延迟到写入内容或关闭标签时才输出,
因此空元素可以按需自闭合(`close_tag`)或强制成对关闭(`force_close_tag`).
"""

from __future__ import annotations

from typing import TextIO

from markupsafe import escape


class XMLWriter:
    """向文本流写入标签、属性与内容,支持链式调用."""

    def __init__(self, out: TextIO) -> None:
        self._out = out
        self._open_tags: list[str] = []
        self._in_open_tag = False

    def open_tag(self, name: str) -> XMLWriter:
        self._finish_open_tag()
        self._out.write(f"<{name}")
        self._open_tags.append(name)
        self._in_open_tag = True
        return self

    def attrib(self, name: str, value: object) -> XMLWriter:
        if not self._in_open_tag:
            msg = f"属性 {name} 只能写在开始标签内"
            raise RuntimeError(msg)
        self._out.write(f' {name}="{escape(str(value))}"')
        return self

    def attrib_if_not_default(self, name: str, value: object) -> XMLWriter:
        """值不等于其类型零值("", 0, False, None)时才写入属性."""
        if value:
            self.attrib(name, value)
        return self

    def attrib_flag(self, name: str, flag: bool) -> XMLWriter:
        """写入布尔属性,例如 ``disabled="disabled"``."""
        if flag:
            self.attrib(name, name)
        return self

    def content(self, markup: str) -> XMLWriter:
        """写入原始标记,不做转义."""
        self._finish_open_tag()
        self._out.write(markup)
        return self

    def escape_content(self, text: str) -> XMLWriter:
        self._finish_open_tag()
        self._out.write(str(escape(text)))
        return self

    def close_tag(self) -> XMLWriter:
        """关闭最近打开的标签,无内容时自闭合."""
        name = self._pop_tag()
        if self._in_open_tag:
            self._out.write("/>")
            self._in_open_tag = False
        else:
            self._out.write(f"</{name}>")
        return self

    def force_close_tag(self) -> XMLWriter:
        """关闭最近打开的标签,总是输出结束标签."""
        name = self._pop_tag()
        self._finish_open_tag()
        self._out.write(f"</{name}>")
        return self

    def _pop_tag(self) -> str:
        if not self._open_tags:
            msg = "没有可关闭的标签"
            raise RuntimeError(msg)
        return self._open_tags.pop()

    def _finish_open_tag(self) -> None:
        if self._in_open_tag:
            self._out.write(">")
            self._in_open_tag = False
