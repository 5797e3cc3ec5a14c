import io

import pytest

from viewkit.components.xml_writer import XMLWriter


def _writer():
    out = io.StringIO()
    return XMLWriter(out), out


@pytest.mark.unit
def test_close_tag_self_closes_empty_element() -> None:
    xml, out = _writer()
    xml.open_tag("br").close_tag()
    assert out.getvalue() == "<br/>"


@pytest.mark.unit
def test_force_close_tag_always_writes_end_tag() -> None:
    xml, out = _writer()
    xml.open_tag("span").attrib("id", "1").force_close_tag()
    assert out.getvalue() == '<span id="1"></span>'


@pytest.mark.unit
def test_close_tag_after_content_writes_end_tag() -> None:
    xml, out = _writer()
    xml.open_tag("div").escape_content("x").open_tag("span").close_tag().force_close_tag()
    assert out.getvalue() == "<div>x<span/></div>"


@pytest.mark.unit
def test_attrib_and_content_are_escaped() -> None:
    xml, out = _writer()
    xml.open_tag("p").attrib("title", 'a"<b').escape_content("1 < 2 & 3").force_close_tag()
    assert out.getvalue() == '<p title="a&#34;&lt;b">1 &lt; 2 &amp; 3</p>'


@pytest.mark.unit
def test_raw_content_is_not_escaped() -> None:
    xml, out = _writer()
    xml.open_tag("p").content("<b>bold</b>").force_close_tag()
    assert out.getvalue() == "<p><b>bold</b></p>"


@pytest.mark.unit
def test_attrib_if_not_default_skips_zero_values() -> None:
    xml, out = _writer()
    xml.open_tag("input")
    xml.attrib_if_not_default("class", "").attrib_if_not_default("size", 0)
    xml.attrib_if_not_default("maxlength", 5)
    xml.attrib_flag("disabled", False).attrib_flag("checked", True)
    xml.close_tag()
    assert out.getvalue() == '<input maxlength="5" checked="checked"/>'


@pytest.mark.unit
def test_attrib_outside_start_tag_raises() -> None:
    xml, _ = _writer()
    xml.open_tag("p").escape_content("text")
    with pytest.raises(RuntimeError):
        xml.attrib("id", "1")


@pytest.mark.unit
def test_closing_without_open_tag_raises() -> None:
    xml, _ = _writer()
    with pytest.raises(RuntimeError):
        xml.force_close_tag()
