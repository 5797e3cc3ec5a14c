"""viewkit - 演示表单路由.

用一个覆盖全部字段类型的资料模型演示表单渲染与提交绑定.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field, fields

from flask import Blueprint, current_app

from viewkit.forms import Form
from viewkit.models import (
    Blob,
    Bool,
    Choice,
    Date,
    DateTime,
    DynamicChoice,
    Email,
    File,
    Float,
    Int,
    MultipleChoice,
    Password,
    Phone,
    String,
    Text,
    Url,
    tagged,
)
from viewkit.utils.structlog_config import get_form_logger
from viewkit.views.model_form_view import ModelFormView

demo_bp = Blueprint("demo", __name__)

# 最近提交记录保存在 app.extensions 中的键,只保留最近 SUBMISSION_HISTORY_LIMIT 条
SUBMISSIONS_EXTENSION_KEY = "viewkit.demo_submissions"
SUBMISSION_HISTORY_LIMIT = 20

logger = get_form_logger()

TEAM_OPTIONS = ["研发", "运维", "产品"]


@dataclass
class Address:
    street: String = tagged(String, model="maxlen=60", view="label=街道")
    city: String = tagged(String, model="required", view="label=城市")


@dataclass
class Profile:
    """演示用的用户资料."""

    name: String = tagged(String, model="maxlen=20|required", view="label=姓名|size=30")
    password: Password = tagged(Password, model="maxlen=32", view="label=密码")
    email: Email = tagged(Email, model="required", view="label=邮箱|placeholder=name@example.com")
    homepage: Url = tagged(Url, view="label=主页")
    phone: Phone = tagged(Phone, view="label=电话")
    bio: Text = tagged(Text, view="label=简介|cols=40|rows=5")
    newsletter: Bool = tagged(Bool, view="label=订阅通知")
    gender: Choice = tagged(Choice, model="options=female,male,other", view="label=性别")
    interests: MultipleChoice = tagged(MultipleChoice, model="options=books,music,sports", view="label=兴趣")
    team: DynamicChoice = tagged(lambda: DynamicChoice(TEAM_OPTIONS), view="label=团队")
    birthday: Date = tagged(Date, view="label=生日")
    last_login: DateTime = tagged(DateTime, view="label=最近登录|disabled")
    height: Float = tagged(Float, view="label=身高")
    age: Int = tagged(Int, view="label=年龄")
    address: Address = field(default_factory=Address)
    nicknames: list[String] = tagged(lambda: [String(), String()], model="maxlen=12", view="label=昵称")
    internal_note: String = tagged(String, view="-")


@dataclass
class Attachment:
    """演示用的附件上传."""

    title: String = tagged(String, model="required", view="label=标题")
    document: File = tagged(File, view="label=文档")
    thumbnail: Blob = tagged(Blob, view="label=缩略图")


def _record_submission(form_name: str, model: object) -> None:
    """记录一次成功提交: 日志只含字段名,模型本身进入定长的最近记录."""
    history: deque[object] = current_app.extensions.setdefault(
        SUBMISSIONS_EXTENSION_KEY, deque(maxlen=SUBMISSION_HISTORY_LIMIT)
    )
    history.append(model)
    logger.info(
        "演示表单提交已记录",
        form_name=form_name,
        model=type(model).__name__,
        fields=[item.name for item in fields(model)],  # type: ignore[arg-type]
        history_size=len(history),
    )


class ProfileFormView(ModelFormView):
    """资料表单."""

    form_name = "profile"
    title = "用户资料"
    model_factory = Profile

    def build_form(self, model: object) -> Form:
        form = super().build_form(model)
        form.labels["nicknames.0"] = "常用昵称"
        form.submit_button_text = "保存"
        return form

    def on_submit(self, model: object) -> None:
        _record_submission(self.form_name, model)


class AttachmentFormView(ModelFormView):
    """附件上传表单."""

    form_name = "attachment"
    title = "上传附件"
    model_factory = Attachment
    success_message = "附件上传成功"
    redirect_endpoint = "demo.profile"

    def on_submit(self, model: object) -> None:
        _record_submission(self.form_name, model)


demo_bp.add_url_rule(
    "/profile",
    view_func=ProfileFormView.as_view("profile"),
    methods=["GET", "POST"],
)
demo_bp.add_url_rule(
    "/attachment",
    view_func=AttachmentFormView.as_view("attachment"),
    methods=["GET", "POST"],
)
