"""viewkit - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口,避免散落在各模块中重复解析.
- `create_app(settings=...)` 只消费 Settings,不再直接读取环境变量.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
- 生产环境默认更严格: 缺失 SECRET_KEY 会直接抛出 ValueError.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from viewkit.constants.system_constants import LogLevel

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

DEFAULT_ENVIRONMENT = "development"
APP_VERSION = "0.3.0"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_CONTENT_LENGTH_BYTES = 16 * 1024 * 1024

# 日期格式: strftime 格式用于解析,提示串展示给用户并决定输入框宽度
DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_DATE_FORMAT_HINT = "YYYY-MM-DD"
DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_DATETIME_FORMAT_HINT = "YYYY-MM-DD hh:mm:ss"

DEFAULT_FORM_INPUT_SIZE = 0

_LOG_LEVELS = frozenset(level.value for level in LogLevel)


def _is_valid_strftime(fmt: str) -> bool:
    sample = datetime(2006, 1, 2, 15, 4, 5)
    try:
        return datetime.strptime(sample.strftime(fmt), fmt) is not None
    except ValueError:
        return False


class Settings(BaseSettings):
    """应用运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, validation_alias="FLASK_ENV")
    debug: bool = Field(default=False, validation_alias="FLASK_DEBUG")

    app_name: str = Field(default="viewkit", validation_alias="APP_NAME")
    app_version: str = APP_VERSION

    secret_key: str = Field(default="", validation_alias="SECRET_KEY")

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="LOG_LEVEL")
    max_content_length_bytes: int = Field(
        default=DEFAULT_MAX_CONTENT_LENGTH_BYTES, validation_alias="MAX_CONTENT_LENGTH"
    )

    date_format: str = Field(default=DEFAULT_DATE_FORMAT, validation_alias="DATE_FORMAT")
    date_format_hint: str = Field(default=DEFAULT_DATE_FORMAT_HINT, validation_alias="DATE_FORMAT_HINT")
    datetime_format: str = Field(default=DEFAULT_DATETIME_FORMAT, validation_alias="DATETIME_FORMAT")
    datetime_format_hint: str = Field(
        default=DEFAULT_DATETIME_FORMAT_HINT, validation_alias="DATETIME_FORMAT_HINT"
    )

    form_input_size: int = Field(default=DEFAULT_FORM_INPUT_SIZE, validation_alias="FORM_INPUT_SIZE")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def is_production(self) -> bool:
        """当前是否为生产环境."""
        return self.environment.strip().lower() == "production"

    def to_flask_config(self) -> dict[str, object]:
        """转换为 Flask app.config 可写入的配置字典."""
        return {
            "ENV": self.environment,
            "DEBUG": self.debug,
            "APP_NAME": self.app_name,
            "APP_VERSION": self.app_version,
            "SECRET_KEY": self.secret_key,
            "LOG_LEVEL": self.log_level,
            # 0 表示不限制上传大小
            "MAX_CONTENT_LENGTH": self.max_content_length_bytes or None,
            "DATE_FORMAT": self.date_format,
            "DATE_FORMAT_HINT": self.date_format_hint,
            "DATETIME_FORMAT": self.datetime_format,
            "DATETIME_FORMAT_HINT": self.datetime_format_hint,
            "FORM_INPUT_SIZE": self.form_input_size,
        }

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings 并执行必要校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    @model_validator(mode="after")
    def _apply_defaults_and_validate(self) -> Settings:
        environment_normalized = self.environment.strip().lower()

        debug = self._resolve_debug(environment_normalized)
        self._ensure_secret_key(debug)

        self._validate()
        return self

    def _resolve_debug(self, environment_normalized: str) -> bool:
        if "debug" in self.model_fields_set:
            return bool(self.debug)
        debug = environment_normalized != "production"
        object.__setattr__(self, "debug", debug)
        return debug

    def _ensure_secret_key(self, debug: bool) -> None:
        if self.secret_key:
            return
        if not debug:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        object.__setattr__(self, "secret_key", secrets.token_urlsafe(32))
        logger.warning("⚠️  开发环境使用随机生成的SECRET_KEY,生产环境请设置环境变量")

    def _validate(self) -> None:
        """执行跨字段校验,统一抛出可读的 ValueError."""
        errors: list[str] = []
        checks: list[tuple[str, bool]] = [
            ("LOG_LEVEL 仅支持 DEBUG/INFO/WARNING/ERROR/CRITICAL", self.log_level not in _LOG_LEVELS),
            ("MAX_CONTENT_LENGTH 必须为非负整数(字节),0 表示不限制", self.max_content_length_bytes < 0),
            ("FORM_INPUT_SIZE 必须为非负整数", self.form_input_size < 0),
            ("DATE_FORMAT 不是合法的 strftime 格式", not _is_valid_strftime(self.date_format)),
            ("DATETIME_FORMAT 不是合法的 strftime 格式", not _is_valid_strftime(self.datetime_format)),
            ("DATE_FORMAT_HINT 不能为空", not self.date_format_hint),
            ("DATETIME_FORMAT_HINT 不能为空", not self.datetime_format_hint),
        ]
        for message, condition in checks:
            if condition:
                errors.append(message)

        if errors:
            joined = "; ".join(errors)
            raise ValueError(f"配置校验失败: {joined}")
