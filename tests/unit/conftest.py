# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供环境隔离与请求上下文构造相关的通用 fixtures。
"""

import pytest
from werkzeug.test import EnvironBuilder

from viewkit.components import Context
from viewkit.models import configure_date_formats
from viewkit.settings import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_DATE_FORMAT_HINT,
    DEFAULT_DATETIME_FORMAT,
    DEFAULT_DATETIME_FORMAT_HINT,
)

_ISOLATED_ENV_KEYS = (
    "FLASK_DEBUG",
    "LOG_LEVEL",
    "MAX_CONTENT_LENGTH",
    "DATE_FORMAT",
    "DATE_FORMAT_HINT",
    "DATETIME_FORMAT",
    "DATETIME_FORMAT_HINT",
    "FORM_INPUT_SIZE",
)


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - 避免开发者本机环境变量影响测试稳定性
    - 每个用例结束后恢复进程级日期格式
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key")
    for key in _ISOLATED_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)

    yield

    configure_date_formats(
        date_format=DEFAULT_DATE_FORMAT,
        date_format_hint=DEFAULT_DATE_FORMAT_HINT,
        datetime_format=DEFAULT_DATETIME_FORMAT,
        datetime_format_hint=DEFAULT_DATETIME_FORMAT_HINT,
    )


@pytest.fixture
def make_context():
    """构造包装 werkzeug 请求的 Context.

    data 中的值为 (stream, filename) 元组时按 multipart 文件上传编码。
    """

    def _make(data=None, *, method="POST"):
        builder = EnvironBuilder(method=method, data=data or {})
        return Context(builder.get_request())

    return _make
