"""渲染输出缓冲."""

from __future__ import annotations

from io import StringIO

from viewkit.components.xml_writer import XMLWriter


class Response:
    """视图渲染的输出目标.

    Attributes:
        xml: 写入同一缓冲区的标签写入器.

    """

    def __init__(self) -> None:
        self._buffer = StringIO()
        self.xml = XMLWriter(self._buffer)

    def write(self, markup: str) -> None:
        self.xml.content(markup)

    def getvalue(self) -> str:
        return self._buffer.getvalue()
