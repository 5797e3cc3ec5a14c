"""通用模型表单视图.

集成 GET/POST 逻辑: GET 渲染表单,POST 绑定并校验提交数据.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from flask import current_app, flash, redirect, render_template, request, url_for
from flask.views import MethodView
from markupsafe import Markup

from viewkit.components import Context
from viewkit.constants import FlashCategory, HttpStatus, SuccessMessages
from viewkit.forms import FieldError, Form
from viewkit.utils.form_safety import log_with_context, safe_form_bind

if TYPE_CHECKING:
    from collections.abc import Callable

    from flask.typing import ResponseReturnValue

    from viewkit.types import TemplateContext


class ModelFormView(MethodView):
    """通用 GET/POST 视图,子类设置 model_factory 并可覆写 build_form/on_submit.

    Attributes:
        form_name: 表单名称,用于日志.
        title: 页面标题.
        template: 渲染所用的模板路径.
        model_factory: 创建待编辑模型的工厂.
        success_message: 保存成功后的提示语.
        redirect_endpoint: 保存成功后跳转的端点,为空时回到当前地址.

    """

    form_name: str = "form"
    title: str = ""
    template: str = "forms/page.html"
    model_factory: Callable[[], object] | None = None
    success_message: str = SuccessMessages.FORM_SAVED
    redirect_endpoint: str | None = None

    def __init__(self) -> None:
        """初始化视图.

        Raises:
            RuntimeError: 当子类未配置 model_factory 时抛出.

        """
        if self.model_factory is None:
            msg = f"{self.__class__.__name__} 未配置 model_factory"
            raise RuntimeError(msg)

    # ------------------------------------------------------------------ #
    # HTTP Methods
    # ------------------------------------------------------------------ #
    def get(self) -> ResponseReturnValue:
        """GET 请求处理,显示表单."""
        form = self.build_form(self.load_model())
        return render_template(self.template, **self._build_context(form, errors=[]))

    def post(self) -> ResponseReturnValue:
        """POST 请求处理,绑定提交数据.

        Returns:
            成功时返回重定向响应,校验失败时返回 400 与重新渲染的表单.

        """
        model = self.load_model()
        form = self.build_form(model)
        ctx = Context(request)

        errors = safe_form_bind(form, ctx, form_name=self.form_name, public_error="表单提交失败")
        if errors:
            log_with_context(
                "info",
                "表单校验未通过",
                module="forms",
                action=f"{self.form_name}_form_bind",
                context={"form_name": self.form_name, "fields": [error.selector for error in errors]},
            )
            flash(errors[0].message, FlashCategory.ERROR)
            context = self._build_context(form, errors=errors)
            return render_template(self.template, **context), HttpStatus.BAD_REQUEST

        self.on_submit(model)
        flash(self.success_message, FlashCategory.SUCCESS)
        return redirect(self._resolve_success_redirect())

    # ------------------------------------------------------------------ #
    # Hooks
    # ------------------------------------------------------------------ #
    def load_model(self) -> object:
        # 通过类访问,避免普通函数被绑定为方法
        factory = cast("Callable[[], object]", type(self).model_factory)
        return factory()

    def build_form(self, model: object) -> Form:
        """构造表单,默认使用应用配置中的输入框宽度."""
        return Form(model=model, input_size=int(current_app.config.get("FORM_INPUT_SIZE", 0)))

    def on_submit(self, model: object) -> None:
        """校验通过后的回调,默认不做任何事."""

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _build_context(self, form: Form, errors: list[FieldError]) -> TemplateContext:
        return {
            "title": self.title,
            "form": form,
            "form_html": Markup(form.render_to_string()),
            "form_errors": errors,
        }

    def _resolve_success_redirect(self) -> str:
        if not self.redirect_endpoint:
            return request.path
        return url_for(self.redirect_endpoint)
