import dataclasses
from dataclasses import dataclass

import pytest

from viewkit.models import MODEL_TAG_KEY, VIEW_TAG_KEY, String, field_tags, parse_tag, tagged


@pytest.mark.unit
def test_parse_tag_splits_pairs_and_flags() -> None:
    assert parse_tag("maxlen=5|required") == {"maxlen": "5", "required": ""}
    assert parse_tag(" cols = 40 | rows=5 ") == {"cols": "40", "rows": "5"}
    assert parse_tag("") == {}


@pytest.mark.unit
def test_tagged_field_exposes_model_and_view_tags() -> None:
    @dataclass
    class Signup:
        name: String = tagged(String, model="maxlen=20|required", view="label=Name")
        nickname: String = dataclasses.field(default_factory=String)

    name_field, nickname_field = dataclasses.fields(Signup)
    assert field_tags(name_field) == {
        MODEL_TAG_KEY: {"maxlen": "20", "required": ""},
        VIEW_TAG_KEY: {"label": "Name"},
    }
    assert field_tags(nickname_field) == {}


@pytest.mark.unit
def test_tagged_field_creates_fresh_value_per_instance() -> None:
    @dataclass
    class Signup:
        name: String = tagged(String)

    first, second = Signup(), Signup()
    first.name.set("a")
    assert second.name.get() == ""
