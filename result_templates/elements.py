"""
Typed view of the JSON template format.

Templates arrive as loosely-typed dictionaries authored by the template
editor. Everything is parsed once into frozen dataclasses here so the
renderers never have to guess at missing keys or value types.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from .exceptions import TemplateFormatError

logger = logging.getLogger(__name__)

NO_COLOR = ("transparent", "none", "inherit")


class Choice(str, Enum):
    """A closed set of string symbols read from template JSON."""

    @classmethod
    def parse(cls, value):
        """Return the member for ``value``, or None when it is not recognised."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class ElementType(Choice):
    SHAPE = "shape"
    LINE = "line"
    TEXT = "text"
    DYNAMIC = "dynamic"
    IMAGE = "image"
    TABLE = "table"


class TableType(Choice):
    SUBJECTS = "subjects"
    AFFECTIVE = "affective"
    PSYCHOMOTOR = "psychomotor"


def to_number(value, default=None):
    """Coerce JSON numbers and numeric strings ("12", "2px") to float."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text.endswith("px"):
            text = text[:-2]
        try:
            return float(text)
        except ValueError:
            return default
    return default


def to_int(value, default=None):
    number = to_number(value)
    if number is None:
        return default
    return int(number)


def _text_or_none(value):
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _color_or_none(value):
    color = _text_or_none(value)
    if color and color.lower() in NO_COLOR:
        return None
    return color


@dataclass(frozen=True)
class Style:
    """Visual properties of an element. Missing keys keep their defaults."""

    color: str = None
    font_size: float = None
    font_weight: str = "normal"
    font_style: str = "normal"
    text_align: str = "left"
    background_color: str = None
    border_color: str = None
    border_width: float = None
    border_bottom: str = None
    header_bg_color: str = None
    header_text_color: str = None
    alt_row_color: str = None

    @classmethod
    def from_dict(cls, raw):
        if not isinstance(raw, Mapping):
            return cls()
        return cls(
            color=_color_or_none(raw.get("color")),
            font_size=to_number(raw.get("fontSize")),
            font_weight=str(raw.get("fontWeight") or "normal").lower(),
            font_style=str(raw.get("fontStyle") or "normal").lower(),
            text_align=str(raw.get("textAlign") or "left").lower(),
            background_color=_color_or_none(raw.get("backgroundColor")),
            border_color=_color_or_none(raw.get("borderColor")),
            border_width=to_number(raw.get("borderWidth")),
            border_bottom=_text_or_none(raw.get("borderBottom")),
            header_bg_color=_color_or_none(raw.get("headerBgColor")),
            header_text_color=_color_or_none(raw.get("headerTextColor")),
            alt_row_color=_color_or_none(raw.get("altRowColor")),
        )

    @property
    def is_bold(self):
        if self.font_weight.isdigit():
            return int(self.font_weight) >= 600
        return self.font_weight in ("bold", "bolder")

    @property
    def is_italic(self):
        return self.font_style in ("italic", "oblique")

    @property
    def font_name(self):
        if self.is_bold and self.is_italic:
            return "Helvetica-BoldOblique"
        if self.is_italic:
            return "Helvetica-Oblique"
        if self.is_bold:
            return "Helvetica-Bold"
        return "Helvetica"


def _string_list(value):
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple("" if item is None else str(item) for item in value)


@dataclass(frozen=True)
class ElementMetadata:
    """Type-specific payload of an element."""

    field: str = None
    display_type: str = None
    is_placeholder: bool = False
    rows: int = None
    cols: int = None
    headers: tuple = ()
    table_type: TableType = None
    column_widths: tuple = None
    traits: tuple = None
    skills: tuple = None

    @classmethod
    def from_dict(cls, raw):
        if not isinstance(raw, Mapping):
            return cls()

        column_widths = raw.get("columnWidths")
        if isinstance(column_widths, (list, tuple)):
            column_widths = tuple(to_number(w, 0.0) for w in column_widths)
        else:
            column_widths = None

        return cls(
            field=_text_or_none(raw.get("field")),
            display_type=_text_or_none(raw.get("displayType")),
            is_placeholder=bool(raw.get("isPlaceholder")),
            rows=to_int(raw.get("rows")),
            cols=to_int(raw.get("cols")),
            headers=_string_list(raw.get("headers")),
            table_type=TableType.parse(raw.get("tableType")),
            column_widths=column_widths,
            traits=_string_list(raw["traits"]) if "traits" in raw else None,
            skills=_string_list(raw["skills"]) if "skills" in raw else None,
        )


@dataclass(frozen=True)
class Element:
    """
    One positioned item on the template canvas.

    Geometry is in template-authoring units until the scaler has been
    applied. ``type`` is None for element types this renderer does not
    know, which the orchestrator skips.
    """

    type: ElementType
    raw_type: str = ""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    style: Style = field(default_factory=Style)
    metadata: ElementMetadata = field(default_factory=ElementMetadata)
    content: str = None
    id: str = None

    @classmethod
    def from_dict(cls, raw):
        if not isinstance(raw, Mapping):
            return None
        content = raw.get("content")
        return cls(
            type=ElementType.parse(raw.get("type")),
            raw_type=str(raw.get("type") or ""),
            x=to_number(raw.get("x"), 0.0),
            y=to_number(raw.get("y"), 0.0),
            width=max(to_number(raw.get("width"), 0.0), 0.0),
            height=max(to_number(raw.get("height"), 0.0), 0.0),
            style=Style.from_dict(raw.get("style")),
            metadata=ElementMetadata.from_dict(raw.get("metadata")),
            content=None if content is None else str(content),
            id=_text_or_none(raw.get("id")),
        )


# -------------------------------
# Template envelopes
# -------------------------------

def _template_body(template):
    if not isinstance(template, Mapping):
        raise TemplateFormatError(
            f"Template must be a mapping with an 'elements' list, got {type(template).__name__}."
        )
    content = template.get("content")
    if isinstance(content, Mapping) and "elements" in content:
        return content
    return template


def template_elements(template):
    """
    Return the parsed elements of a template in declared (paint) order.

    Accepts both a bare ``{"elements": [...]}`` template and one wrapped
    as ``{"content": {"elements": [...]}}``. Entries that are not
    mappings are dropped.
    """
    body = _template_body(template)
    raw_elements = body.get("elements")
    if not isinstance(raw_elements, (list, tuple)):
        logger.warning("Template has no elements list; nothing will be rendered.")
        return []

    elements = []
    for index, raw in enumerate(raw_elements):
        element = Element.from_dict(raw)
        if element is None:
            logger.debug("Skipping template element %d: not a mapping.", index)
            continue
        elements.append(element)
    return elements


def template_canvas_size(template):
    """Return the authored (width, height) of the template canvas, or None."""
    body = _template_body(template)
    for source in (body, template):
        size = source.get("canvasSize")
        if isinstance(size, Mapping):
            width = to_number(size.get("width"))
            height = to_number(size.get("height"))
            if width and height and width > 0 and height > 0:
                return width, height
    return None
