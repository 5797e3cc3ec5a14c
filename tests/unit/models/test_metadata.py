from dataclasses import dataclass, field

import pytest

from viewkit.core.exceptions import FieldConfigurationError
from viewkit.models import MODEL_TAG_KEY, VIEW_TAG_KEY, Int, String, tagged, walk_model


@dataclass
class _Address:
    city: String = tagged(String, model="required")


@dataclass
class _Person:
    name: String = tagged(String, model="maxlen=5", view="size=abc|disabled=false|hidden")
    address: _Address = field(default_factory=_Address)
    tags: list[String] = tagged(lambda: [String("a"), String("b")], model="maxlen=3")
    count: int = 0
    age: Int = field(default_factory=Int)


def _by_selector(model):
    return {metadata.selector(): metadata for metadata in walk_model(model)}


@pytest.mark.unit
def test_walk_model_yields_leaves_in_declaration_order() -> None:
    selectors = [metadata.selector() for metadata in walk_model(_Person())]
    assert selectors == ["name", "address.city", "tags.0", "tags.1", "count", "age"]


@pytest.mark.unit
def test_walk_model_tracks_depth_index_and_parent() -> None:
    fields = _by_selector(_Person())

    assert fields["name"].depth == 1
    assert fields["address.city"].depth == 2
    assert fields["address.city"].parent.name == "address"
    assert fields["tags.1"].index == 1
    assert fields["tags.1"].name == "tags"
    assert fields["tags.1"].value.get() == "b"


@pytest.mark.unit
def test_list_items_inherit_list_tags() -> None:
    fields = _by_selector(_Person())
    assert fields["tags.0"].int_attrib(MODEL_TAG_KEY, "maxlen") == (3, True)


@pytest.mark.unit
def test_walk_model_yields_unsupported_leaves() -> None:
    fields = _by_selector(_Person())
    assert fields["count"].value == 0


@pytest.mark.unit
def test_attrib_helpers() -> None:
    name = _by_selector(_Person())["name"]

    assert name.attrib(MODEL_TAG_KEY, "maxlen") == ("5", True)
    assert name.attrib(MODEL_TAG_KEY, "missing") == ("", False)
    assert name.bool_attrib(VIEW_TAG_KEY, "hidden") is True
    assert name.bool_attrib(VIEW_TAG_KEY, "disabled") is False
    assert name.bool_attrib(VIEW_TAG_KEY, "missing") is False
    assert name.int_attrib(MODEL_TAG_KEY, "missing") == (0, False)


@pytest.mark.unit
def test_int_attrib_rejects_malformed_value() -> None:
    name = _by_selector(_Person())["name"]
    with pytest.raises(FieldConfigurationError) as exc_info:
        name.int_attrib(VIEW_TAG_KEY, "size")
    assert isinstance(exc_info.value.__cause__, ValueError)
    assert exc_info.value.extra["field"] == "name"
