"""请求上下文: 表单值与上传文件的读取入口."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from viewkit.core.exceptions import MissingFileError

if TYPE_CHECKING:
    from werkzeug.datastructures import FileStorage
    from werkzeug.wrappers import Request


@dataclass
class Context:
    """包装一次请求,供表单控制器读取提交数据.

    Attributes:
        request: werkzeug/Flask 请求对象.

    """

    request: Request

    def form_value(self, name: str) -> str:
        """返回查询参数或表单中 name 的第一个值,不存在时返回空串.

        multipart 解析错误由 werkzeug 原样抛出.
        """
        return self.request.values.get(name, "")

    def form_file(self, name: str) -> FileStorage:
        """返回 name 对应的上传文件.

        Raises:
            MissingFileError: 请求中没有该文件.

        """
        upload = self.request.files.get(name)
        # 未选择文件时浏览器仍会提交一个 filename 为空的分段
        if upload is None or not upload.filename:
            raise MissingFileError(name)
        return upload
