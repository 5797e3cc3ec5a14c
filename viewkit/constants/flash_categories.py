"""Flask Flash消息类别常量.

定义Flash消息的标准类别,避免魔法字符串.
"""

from __future__ import annotations

from typing import ClassVar


class FlashCategory:
    """Flask Flash消息类别常量.

    这些类别对应Bootstrap的alert样式类.
    """

    SUCCESS = "success"  # 成功消息(绿色)
    ERROR = "error"  # 错误消息(红色)
    WARNING = "warning"  # 警告消息(黄色)
    INFO = "info"  # 信息消息(蓝色)

    ALL: ClassVar[tuple[str, ...]] = (SUCCESS, ERROR, WARNING, INFO)
