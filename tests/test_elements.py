import logging

import pytest

from result_templates.elements import (
    Element,
    ElementType,
    Style,
    TableType,
    template_canvas_size,
    template_elements,
    to_number,
)
from result_templates.exceptions import TemplateFormatError

# -------------------------------
# Value coercion
# -------------------------------


@pytest.mark.parametrize(
    "value, expected",
    [(12, 12.0), (2.5, 2.5), ("14", 14.0), ("2px", 2.0), (" 3PX ", 3.0), ("wide", None), (None, None), (True, None)],
)
def test_to_number(value, expected):
    assert to_number(value) == expected


# -------------------------------
# Style
# -------------------------------


def test_style_defaults_when_missing():
    style = Style.from_dict(None)
    assert style.color is None
    assert style.font_size is None
    assert style.text_align == "left"
    assert style.font_name == "Helvetica"


@pytest.mark.parametrize(
    "weight, font_style, expected",
    [
        ("bold", "normal", "Helvetica-Bold"),
        ("700", "normal", "Helvetica-Bold"),
        ("500", "normal", "Helvetica"),
        ("normal", "italic", "Helvetica-Oblique"),
        ("bold", "italic", "Helvetica-BoldOblique"),
    ],
)
def test_style_font_name(weight, font_style, expected):
    style = Style.from_dict({"fontWeight": weight, "fontStyle": font_style})
    assert style.font_name == expected


def test_style_transparent_background_is_no_fill():
    style = Style.from_dict({"backgroundColor": "transparent", "borderColor": "#000"})
    assert style.background_color is None
    assert style.border_color == "#000"


# -------------------------------
# Element parsing
# -------------------------------


def test_element_from_dict_reads_metadata():
    element = Element.from_dict({
        "id": "tbl",
        "type": "table",
        "x": 20, "y": "300", "width": 550, "height": 400,
        "metadata": {
            "tableType": "subjects",
            "rows": 12,
            "cols": "9",
            "headers": ["SUBJECTS", None, "EXAM"],
            "columnWidths": [120, "45", 50],
        },
    })
    assert element.type is ElementType.TABLE
    assert element.y == 300.0
    assert element.metadata.table_type is TableType.SUBJECTS
    assert element.metadata.cols == 9
    assert element.metadata.headers == ("SUBJECTS", "", "EXAM")
    assert element.metadata.column_widths == (120.0, 45.0, 50.0)
    assert element.metadata.traits is None


def test_unknown_element_type_is_kept_untyped():
    element = Element.from_dict({"type": "hologram", "x": 1})
    assert element.type is None
    assert element.raw_type == "hologram"


def test_negative_size_is_clamped():
    element = Element.from_dict({"type": "shape", "width": -10, "height": -1})
    assert (element.width, element.height) == (0.0, 0.0)


def test_unknown_table_type_parses_to_none():
    element = Element.from_dict({"type": "table", "metadata": {"tableType": "finance"}})
    assert element.metadata.table_type is None


# -------------------------------
# Template envelopes
# -------------------------------


def test_template_elements_accepts_bare_and_wrapped_forms():
    elements = [{"type": "text", "content": "A"}, {"type": "shape"}]
    bare = template_elements({"elements": elements})
    wrapped = template_elements({"content": {"elements": elements}})
    assert [e.type for e in bare] == [ElementType.TEXT, ElementType.SHAPE]
    assert bare == wrapped


def test_template_elements_drops_non_mapping_entries():
    elements = template_elements({"elements": [None, "text", {"type": "line"}]})
    assert [e.type for e in elements] == [ElementType.LINE]


def test_template_without_elements_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="result_templates"):
        assert template_elements({"name": "empty"}) == []
    assert "no elements list" in caplog.text


def test_template_must_be_a_mapping():
    with pytest.raises(TemplateFormatError):
        template_elements(["not", "a", "template"])


def test_canvas_size():
    assert template_canvas_size({"canvasSize": {"width": 1123, "height": 794}, "elements": []}) == (1123, 794)
    assert template_canvas_size({"content": {"elements": [], "canvasSize": {"width": 794, "height": 1123}}}) == (
        794, 1123,
    )
    assert template_canvas_size({"elements": [], "canvasSize": {"width": 0, "height": 10}}) is None
    assert template_canvas_size({"elements": []}) is None
