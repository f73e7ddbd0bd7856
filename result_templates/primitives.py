"""
Renderers for the simple element types: shapes, lines, text, dynamic
fields and images.

Every renderer receives an element that has already been scaled to
page units and paints it onto the surface it is given. Missing data and
broken images degrade to visible fallbacks instead of raising.
"""
import logging

from .dynamic_fields import resolve
from .exceptions import ImageFetchError
from .images import image_source

logger = logging.getLogger(__name__)

DEFAULT_TEXT_COLOR = "#000000"
CAPTION_FONT_SIZE = 8
CAPTION_COLOR = "#94a3b8"
ERROR_BORDER_COLOR = "#e5e7eb"
PLACEHOLDER_BORDER_COLOR = "#cbd5e1"
PLACEHOLDER_DASH = (5, 2)


def parse_border_bottom(value):
    """
    Parse the CSS shorthand "<width> <style> <color>" used by divider lines.

    Returns (width, style, color); width falls back to 1 and color to black.

        >>> parse_border_bottom("2px solid #1e40af")
        (2, 'solid', '#1e40af')
    """
    parts = value.split()
    width_text = parts[0] if parts else ""
    digits = ""
    for char in width_text:
        if not char.isdigit():
            break
        digits += char
    width = int(digits) if digits else 0
    line_style = parts[1] if len(parts) > 1 else "solid"
    color = parts[2] if len(parts) > 2 else DEFAULT_TEXT_COLOR
    return width or 1, line_style, color


def render_shape(surface, element):
    """Paint a shape or line element: background fill, then border or bottom rule."""
    style = element.style
    x, y, width, height = element.x, element.y, element.width, element.height

    with surface.state():
        if style.background_color:
            surface.fill_rect(x, y, width, height, style.background_color)

        if style.border_color and style.border_width:
            surface.stroke_rect(x, y, width, height, style.border_color, line_width=style.border_width)
        elif style.border_bottom:
            line_width, _, color = parse_border_bottom(style.border_bottom)
            surface.line(x, y + height, x + width, y + height, color, line_width=line_width)


def render_text(surface, element, content=None):
    """
    Paint text at the element's box, wrapped to its width.

    ``content`` overrides the element's own literal content; dynamic
    elements pass their resolved value through here.
    """
    if content is None:
        content = element.content
    if not content:
        return

    style = element.style
    kwargs = {
        "font_name": style.font_name,
        "color": style.color or DEFAULT_TEXT_COLOR,
        "align": style.text_align,
    }
    if style.font_size:
        kwargs["font_size"] = style.font_size

    with surface.state():
        surface.text_box(content, element.x, element.y, element.width, **kwargs)


def render_dynamic(surface, element, data):
    metadata = element.metadata
    content = resolve(metadata.field, data, display_type=metadata.display_type)
    if not content:
        logger.debug("Dynamic field %r resolved to an empty value.", metadata.field)
    render_text(surface, element, content)


def _error_box(surface, element, scale):
    x, y, width, height = element.x, element.y, element.width, element.height
    with surface.state():
        surface.stroke_rect(x, y, width, height, ERROR_BORDER_COLOR)
        surface.text_cell(
            "Image Error", x + 5, y, width - 10, height,
            font_size=CAPTION_FONT_SIZE * scale, color=CAPTION_COLOR,
        )


def _placeholder_box(surface, element, scale):
    x, y, width, height = element.x, element.y, element.width, element.height
    caption = (element.metadata.field or "").replace("_", " ").upper()
    with surface.state():
        surface.stroke_rect(x, y, width, height, PLACEHOLDER_BORDER_COLOR, dash=PLACEHOLDER_DASH)
        surface.text_cell(
            caption, x, y, width, height,
            font_size=CAPTION_FONT_SIZE * scale, color=CAPTION_COLOR,
        )


def render_image(surface, element, data, images, scale=1.0):
    """
    Paint an image element.

    Args:
        surface: Surface to paint on.
        element: Scaled image element.
        data: RenderData bundle used to resolve ``metadata.field``.
        images: Mapping of source -> bytes or ImageFetchError, as returned
            by ``ImageFetcher.fetch_all``.
        scale: Page scale factor, used for caption font size.
    """
    field = element.metadata.field
    source = image_source(field, data)

    if not source:
        if element.metadata.is_placeholder:
            _placeholder_box(surface, element, scale)
        return

    payload = images.get(source)
    if payload is None:
        payload = ImageFetchError(source, "image was not fetched")

    if isinstance(payload, ImageFetchError):
        logger.warning("Failed to load image %s: %s", field, payload.reason)
        _error_box(surface, element, scale)
        return

    try:
        with surface.state():
            surface.image(payload, element.x, element.y, element.width, element.height)
    except Exception as e:
        logger.warning("Failed to draw image %s from %r: %s", field, source, e)
        _error_box(surface, element, scale)
