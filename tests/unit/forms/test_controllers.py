import io
from dataclasses import dataclass

import pytest

from viewkit.components import HTML, Label, Select, TextArea, TextField, Views, find_views
from viewkit.core.exceptions import (
    FieldConfigurationError,
    FieldValueError,
    FormFieldTypeNotSupportedError,
    MissingFileError,
)
from viewkit.forms import (
    STANDARD_FORM_FIELD_CONTROLLERS,
    Form,
    FormFieldController,
    FormFieldControllers,
    ModelBlobController,
    ModelDateController,
    ModelFileController,
    ModelStringController,
    ModelValueControllerBase,
)
from viewkit.forms.controllers import _FormattedDateController
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


@dataclass
class _AllKinds:
    string: String = tagged(String)
    text: Text = tagged(Text)
    url: Url = tagged(Url)
    email: Email = tagged(Email)
    password: Password = tagged(Password)
    phone: Phone = tagged(Phone)
    flag: Bool = tagged(Bool)
    choice: Choice = tagged(Choice, model="options=a,b")
    multiple: MultipleChoice = tagged(MultipleChoice, model="options=a,b,c")
    dynamic: DynamicChoice = tagged(lambda: DynamicChoice(["x", "y"]))
    day: Date = tagged(Date)
    moment: DateTime = tagged(DateTime)
    ratio: Float = tagged(Float)
    count: Int = tagged(Int)
    upload: File = tagged(File)
    raw: Blob = tagged(Blob)


@dataclass
class _Unsupported:
    count: int = 0


class _FakeUpload:
    def __init__(self, data: bytes = b"", filename: str = "x.png", error: Exception | None = None) -> None:
        self.filename = filename
        self._data = data
        self._error = error
        self.closed = False

    def read(self) -> bytes:
        if self._error is not None:
            raise self._error
        return self._data

    def close(self) -> None:
        self.closed = True


class _FakeContext:
    def __init__(self, upload: _FakeUpload) -> None:
        self.upload = upload

    def form_value(self, name: str) -> str:
        return ""

    def form_file(self, name: str) -> _FakeUpload:
        return self.upload


def _field(form, selector):
    return next(metadata for metadata in form.fields() if metadata.selector() == selector)


@pytest.mark.unit
def test_each_value_kind_has_exactly_one_standard_controller() -> None:
    form = Form(model=_AllKinds())
    fields = list(form.fields())
    assert len(fields) == 16
    for metadata in fields:
        matches = [c for c in STANDARD_FORM_FIELD_CONTROLLERS if c.supports(metadata, form)]
        assert len(matches) == 1, metadata.selector()


@pytest.mark.unit
def test_unsupported_field_type_raises(make_context) -> None:
    form = Form(model=_Unsupported())
    metadata = _field(form, "count")

    assert not STANDARD_FORM_FIELD_CONTROLLERS.supports(metadata, form)
    with pytest.raises(FormFieldTypeNotSupportedError) as exc_info:
        STANDARD_FORM_FIELD_CONTROLLERS.new_input(True, metadata, form)
    assert str(exc_info.value) == "Type int of form field count not supported"
    assert exc_info.value.field is metadata

    with pytest.raises(FormFieldTypeNotSupportedError):
        STANDARD_FORM_FIELD_CONTROLLERS.set_value(make_context({"count": "1"}), metadata, form)


@pytest.mark.unit
def test_controller_rejects_field_of_other_type() -> None:
    form = Form(model=_AllKinds())
    with pytest.raises(FormFieldTypeNotSupportedError):
        ModelStringController().new_input(True, _field(form, "count"), form)


@pytest.mark.unit
def test_first_matching_controller_wins() -> None:
    class _CustomStringController(ModelStringController):
        def new_input(self, with_label, metadata, form):
            return HTML("custom")

    form = Form(model=_AllKinds())
    controllers = FormFieldControllers([_CustomStringController(), *STANDARD_FORM_FIELD_CONTROLLERS])
    view = controllers.new_input(True, _field(form, "string"), form)
    assert view.render_to_string() == "custom"


@pytest.mark.unit
def test_with_label_wraps_input() -> None:
    form = Form(model=_AllKinds())
    metadata = _field(form, "string")

    bare = STANDARD_FORM_FIELD_CONTROLLERS.new_input(False, metadata, form)
    assert isinstance(bare, TextField)

    labelled = STANDARD_FORM_FIELD_CONTROLLERS.new_input(True, metadata, form)
    label, text_field = labelled
    assert isinstance(label, Label)
    assert label.target_id() == text_field.id


@pytest.mark.unit
def test_bool_is_true_for_any_submitted_value(make_context) -> None:
    model = _AllKinds()
    form = Form(model=model)
    metadata = _field(form, "flag")

    STANDARD_FORM_FIELD_CONTROLLERS.set_value(make_context({"flag": "false"}), metadata, form)
    assert model.flag.get() is True

    STANDARD_FORM_FIELD_CONTROLLERS.set_value(make_context({}), metadata, form)
    assert model.flag.get() is False


@pytest.mark.unit
def test_multiple_choice_rebuilds_selection_from_checkboxes(make_context) -> None:
    model = _AllKinds()
    form = Form(model=model)
    metadata = _field(form, "multiple")
    ctx = make_context({"multiple_0": "true", "multiple_2": "true"})

    STANDARD_FORM_FIELD_CONTROLLERS.set_value(ctx, metadata, form)
    assert model.multiple.get() == ["a", "c"]

    STANDARD_FORM_FIELD_CONTROLLERS.set_value(ctx, metadata, form)
    assert model.multiple.get() == ["a", "c"]

    STANDARD_FORM_FIELD_CONTROLLERS.set_value(make_context({}), metadata, form)
    assert model.multiple.get() == []


@pytest.mark.unit
def test_multiple_choice_renders_checkbox_per_option() -> None:
    model = _AllKinds()
    model.multiple.set(["b"])
    form = Form(model=model)
    html = STANDARD_FORM_FIELD_CONTROLLERS.new_input(False, _field(form, "multiple"), form).render_to_string()
    assert 'name="multiple_0"' in html
    assert 'name="multiple_2"' in html
    assert html.count('checked="checked"') == 1


@pytest.mark.unit
def test_choice_gets_leading_empty_option() -> None:
    form = Form(model=_AllKinds())
    view = STANDARD_FORM_FIELD_CONTROLLERS.new_input(False, _field(form, "choice"), form)
    assert view.model.options == ["", "a", "b"]
    assert view.size == 1


@pytest.mark.unit
def test_choice_keeps_existing_empty_option() -> None:
    @dataclass
    class _Model:
        choice: Choice = tagged(Choice, model="options=,a,b")

    form = Form(model=_Model())
    view = STANDARD_FORM_FIELD_CONTROLLERS.new_input(False, _field(form, "choice"), form)
    assert view.model.options == ["", "a", "b"]


@pytest.mark.unit
def test_dynamic_choice_shifts_index_for_inserted_empty_option() -> None:
    model = _AllKinds()
    model.dynamic.set_index(1)
    form = Form(model=model)

    select = STANDARD_FORM_FIELD_CONTROLLERS.new_input(True, _field(form, "dynamic"), form)
    (select_view,) = find_views(select, Select)
    assert select_view.model.options == ["", "x", "y"]
    assert select_view.model.index == 2

    model.dynamic.set_options(["", "x"])
    model.dynamic.set_index(1)
    select_view = STANDARD_FORM_FIELD_CONTROLLERS.new_input(False, _field(form, "dynamic"), form)
    assert select_view.model.index == 1


@pytest.mark.unit
def test_dynamic_choice_set_value(make_context) -> None:
    model = _AllKinds()
    form = Form(model=model)
    metadata = _field(form, "dynamic")

    STANDARD_FORM_FIELD_CONTROLLERS.set_value(make_context({"dynamic": "y"}), metadata, form)
    assert model.dynamic.index() == 1

    STANDARD_FORM_FIELD_CONTROLLERS.set_value(make_context({"dynamic": ""}), metadata, form)
    assert model.dynamic.index() == -1

    with pytest.raises(FieldValueError):
        STANDARD_FORM_FIELD_CONTROLLERS.set_value(make_context({"dynamic": "z"}), metadata, form)
    assert model.dynamic.index() == -1


@pytest.mark.unit
@pytest.mark.parametrize(("maxlen", "expected_size"), [(5, 5), (20, 10)])
def test_maxlen_clamps_input_size(maxlen, expected_size) -> None:
    @dataclass
    class _Model:
        name: String = tagged(String, model=f"maxlen={maxlen}")
        secret: Password = tagged(Password, model=f"maxlen={maxlen}")

    form = Form(model=_Model(), input_size=10)
    for selector in ("name", "secret"):
        text_field = STANDARD_FORM_FIELD_CONTROLLERS.new_input(False, _field(form, selector), form)
        assert text_field.max_length == maxlen
        assert text_field.size == expected_size


@pytest.mark.unit
def test_view_size_tag_overrides_form_input_size() -> None:
    @dataclass
    class _Model:
        phone: Phone = tagged(Phone, view="size=15")

    form = Form(model=_Model(), input_size=10)
    text_field = STANDARD_FORM_FIELD_CONTROLLERS.new_input(False, _field(form, "phone"), form)
    assert text_field.size == 15


@pytest.mark.unit
def test_numbers_render_without_size() -> None:
    model = _AllKinds()
    model.ratio.set(2.5)
    form = Form(model=model, input_size=10)

    for selector, text in (("ratio", "2.5"), ("count", "0")):
        text_field = STANDARD_FORM_FIELD_CONTROLLERS.new_input(False, _field(form, selector), form)
        assert text_field.size == 0
        assert text_field.text == text


@pytest.mark.unit
def test_email_and_password_input_types() -> None:
    form = Form(model=_AllKinds())
    email = STANDARD_FORM_FIELD_CONTROLLERS.new_input(False, _field(form, "email"), form)
    password = STANDARD_FORM_FIELD_CONTROLLERS.new_input(False, _field(form, "password"), form)
    assert 'type="email"' in email.render_to_string()
    assert 'type="password"' in password.render_to_string()


@pytest.mark.unit
@pytest.mark.parametrize(("selector", "hint"), [("day", "YYYY-MM-DD"), ("moment", "YYYY-MM-DD hh:mm:ss")])
def test_date_inputs_show_format_hint(selector, hint) -> None:
    form = Form(model=_AllKinds())
    view = STANDARD_FORM_FIELD_CONTROLLERS.new_input(False, _field(form, selector), form)
    (text_field,) = find_views(view, TextField)
    assert text_field.size == len(hint)
    assert view.render_to_string().startswith(f"(格式: {hint})<br/>")


@pytest.mark.unit
def test_date_input_width_follows_overridden_hint() -> None:
    class _CompactDateController(ModelDateController):
        def _format_hint(self) -> str:
            return "YYMMDD"

    form = Form(model=_AllKinds())
    view = _CompactDateController().new_input(False, _field(form, "day"), form)
    (text_field,) = find_views(view, TextField)
    assert text_field.size == 6
    assert "(格式: YYMMDD)<br/>" in view.render_to_string()


@pytest.mark.unit
def test_date_set_value_rejects_malformed_text(make_context) -> None:
    model = _AllKinds()
    form = Form(model=model)
    metadata = _field(form, "day")

    STANDARD_FORM_FIELD_CONTROLLERS.set_value(make_context({"day": "2024-01-31"}), metadata, form)
    assert model.day.get() == "2024-01-31"

    with pytest.raises(FieldValueError):
        STANDARD_FORM_FIELD_CONTROLLERS.set_value(make_context({"day": "31.01.2024"}), metadata, form)
    assert model.day.get() == "2024-01-31"


@pytest.mark.unit
def test_text_area_reads_cols_and_rows() -> None:
    @dataclass
    class _Model:
        bio: Text = tagged(Text, view="cols=40|rows=5")

    form = Form(model=_Model())
    area = STANDARD_FORM_FIELD_CONTROLLERS.new_input(False, _field(form, "bio"), form)
    assert isinstance(area, TextArea)
    assert (area.cols, area.rows) == (40, 5)


@pytest.mark.unit
def test_text_area_malformed_cols_is_configuration_error() -> None:
    @dataclass
    class _Model:
        bio: Text = tagged(Text, view="cols=wide")

    form = Form(model=_Model())
    with pytest.raises(FieldConfigurationError):
        STANDARD_FORM_FIELD_CONTROLLERS.new_input(True, _field(form, "bio"), form)


@pytest.mark.unit
def test_file_upload_reads_name_and_bytes(make_context) -> None:
    model = _AllKinds()
    form = Form(model=model)
    payload = b"\x89PNG" + bytes(range(256)) * 4
    ctx = make_context({"upload": (io.BytesIO(payload), "x.png")})

    STANDARD_FORM_FIELD_CONTROLLERS.set_value(ctx, _field(form, "upload"), form)
    assert model.upload.name == "x.png"
    assert model.upload.get() == payload


@pytest.mark.unit
def test_blob_upload_keeps_bytes_only(make_context) -> None:
    model = _AllKinds()
    form = Form(model=model)
    ctx = make_context({"raw": (io.BytesIO(b"abc"), "raw.bin")})

    STANDARD_FORM_FIELD_CONTROLLERS.set_value(ctx, _field(form, "raw"), form)
    assert model.raw.get() == b"abc"


@pytest.mark.unit
def test_missing_upload_raises(make_context) -> None:
    form = Form(model=_AllKinds())
    with pytest.raises(MissingFileError) as exc_info:
        STANDARD_FORM_FIELD_CONTROLLERS.set_value(make_context({"string": "x"}), _field(form, "upload"), form)
    assert exc_info.value.name == "upload"


@pytest.mark.unit
@pytest.mark.parametrize("controller", [ModelFileController(), ModelBlobController()])
def test_upload_stream_closed_after_read(controller) -> None:
    model = _AllKinds()
    form = Form(model=model)
    upload = _FakeUpload(b"data")
    selector = "upload" if isinstance(controller, ModelFileController) else "raw"

    controller.set_value(_FakeContext(upload), _field(form, selector), form)
    assert upload.closed


@pytest.mark.unit
def test_upload_stream_closed_when_read_fails() -> None:
    model = _AllKinds()
    form = Form(model=model)
    upload = _FakeUpload(error=OSError("disk gone"))

    with pytest.raises(OSError, match="disk gone"):
        ModelFileController().set_value(_FakeContext(upload), _field(form, "upload"), form)
    assert upload.closed
    assert model.upload.is_empty()


@pytest.mark.unit
def test_upload_renders_file_input() -> None:
    form = Form(model=_AllKinds())
    view = STANDARD_FORM_FIELD_CONTROLLERS.new_input(True, _field(form, "upload"), form)
    assert isinstance(view, Views)
    assert 'type="file" name="upload"' in view.render_to_string()


@pytest.mark.unit
def test_incomplete_controllers_cannot_be_instantiated() -> None:
    class _NoValueType(ModelValueControllerBase):
        def new_input(self, with_label, metadata, form):  # type: ignore[no-untyped-def]
            return HTML("")

    class _NoExtract(FormFieldController):
        value_type = String

        def new_input(self, with_label, metadata, form):  # type: ignore[no-untyped-def]
            return HTML("")

    class _NoHint(_FormattedDateController):
        value_type = Date

    with pytest.raises(TypeError, match="value_type"):
        _NoValueType()
    with pytest.raises(TypeError, match="extract"):
        _NoExtract()
    with pytest.raises(TypeError, match="_format_hint"):
        _NoHint()
