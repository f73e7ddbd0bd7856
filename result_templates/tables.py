"""
Generic table renderer.

A table element declares its grid (rows, cols, headers, proportional
column widths) and a ``tableType`` that selects where the cell values
come from:

- ``subjects``: one row per result, columns picked by header label
  (subject, component scores, total, grade, remark).
- ``affective`` / ``psychomotor``: one row per trait or skill listed in
  the element metadata, with ratings taken from the first result.

Rows are laid out top to bottom with a running y cursor; the body
height is split evenly between rows and never grows to fit content.
"""
import logging
from collections.abc import Mapping
from typing import NamedTuple

from .elements import TableType
from .render_data import dig
from .dynamic_fields import format_number

logger = logging.getLogger(__name__)

DEFAULT_ROWS = 3
DEFAULT_COLS = 3
DEFAULT_FONT_SIZE = 11
HEADER_HEIGHT = 22
CELL_PADDING = 2
DEFAULT_BORDER_COLOR = "#000000"
DEFAULT_BORDER_WIDTH = 0.5
DEFAULT_HEADER_BG = "#1e293b"
DEFAULT_HEADER_TEXT = "#ffffff"
DEFAULT_CELL_COLOR = "#000000"
CHECKMARK = "✓"
EMPTY_CELL = "-"


class TableLayout(NamedTuple):
    """Geometry of a rendered table, in page units."""

    column_widths: tuple
    header_height: float
    row_height: float
    top: float
    bottom: float


# -------------------------------
# Layout
# -------------------------------

def column_widths(metadata, width, cols):
    """
    Split ``width`` between ``cols`` columns.

    ``columnWidths`` are proportional weights: when there is exactly one
    per column they are normalised by their sum, otherwise every column
    gets an equal share.
    """
    if cols <= 0:
        return ()
    weights = metadata.column_widths
    if weights and len(weights) == cols:
        total = sum(weights)
        if total > 0:
            return tuple(weight / total * width for weight in weights)
    return tuple(width / cols for _ in range(cols))


def has_headers(headers):
    return any(header and header.strip() for header in headers)


def padded_headers(headers, cols):
    return tuple(headers[c] if c < len(headers) else "" for c in range(cols))


# -------------------------------
# Cell values
# -------------------------------

def match_component_score(header, component_scores):
    """
    Find the score for a column header among a result's component scores.

    The upper-cased header matches a component when the names are equal
    or either one contains the other. The first match in component order
    wins; no match gives "-". Entries without a component name are ignored.
    """
    for component_score in component_scores or ():
        if not isinstance(component_score, Mapping):
            continue
        name = str(dig(component_score, "component", "name", default="")).strip().upper()
        if not name:
            continue
        if name == header or name in header or header in name:
            score = component_score.get("score")
            return format_number(score) if score is not None else EMPTY_CELL
    return EMPTY_CELL


def subject_cell(header, column, result):
    """
    Return (text, bold) for one cell of a subjects table row.

    Args:
        header: Column header as authored.
        column: 0-based column index.
        result: The result record shown on this row.
    """
    header = (header or "").upper()

    if column == 0 or "SUBJECT" in header:
        return format_number(dig(result, "subject", "name", default="")), False
    if header == "TOTAL":
        total = result.get("total")
        return (format_number(total) if total not in (None, "") else "0"), True
    if header == "GRADE":
        return format_number(result.get("grade") or EMPTY_CELL), False
    if header in ("REMARK", "REMARKS"):
        return format_number(result.get("remark") or EMPTY_CELL), False
    return match_component_score(header, result.get("componentScores")), False


def trait_cell(name, header, column, ratings, cols):
    """
    Return the text for one cell of an affective/psychomotor row.

    With more than two columns each rating column is a checkbox: a
    checkmark goes in the column whose header equals the rating. With
    two columns the rating itself is printed in the second column.
    """
    if column == 0:
        return name
    rating = dig(ratings, name)
    if cols > 2:
        return CHECKMARK if rating is not None and format_number(rating) == header else ""
    return format_number(rating) if rating is not None else ""


def _trait_names(metadata, table_type):
    if table_type is TableType.PSYCHOMOTOR:
        names = metadata.skills if metadata.skills is not None else metadata.traits
    else:
        names = metadata.traits if metadata.traits is not None else metadata.skills
    return names or ()


def _trait_ratings(data, table_type):
    key = "affectiveTraits" if table_type is TableType.AFFECTIVE else "psychomotorSkills"
    return dig(data.first_result, key, default={})


# -------------------------------
# Painting
# -------------------------------

def render_table(surface, element, data, scale=1.0):
    """
    Paint a table element and return its TableLayout.

    Args:
        surface: Surface to paint on.
        element: Scaled table element.
        data: RenderData bundle.
        scale: Page scale factor for the header height and default font size.
    """
    metadata = element.metadata
    style = element.style
    x, y, width, height = element.x, element.y, element.width, element.height

    rows = max(metadata.rows if metadata.rows is not None else DEFAULT_ROWS, 0)
    cols = max(metadata.cols if metadata.cols is not None else DEFAULT_COLS, 0)
    if cols == 0:
        rows = 0
    headers = padded_headers(metadata.headers, cols)
    table_type = metadata.table_type
    border_color = style.border_color or DEFAULT_BORDER_COLOR
    border_width = style.border_width or DEFAULT_BORDER_WIDTH
    font_size = style.font_size or DEFAULT_FONT_SIZE * scale
    cell_color = style.color or DEFAULT_CELL_COLOR

    widths = column_widths(metadata, width, cols)
    show_header = has_headers(metadata.headers)
    header_height = HEADER_HEIGHT * scale if show_header else 0.0
    row_height = (height - header_height) / (rows or 1)
    current_y = y

    with surface.state():
        # ========== HEADER ==========
        if show_header:
            surface.fill_rect(x, y, width, header_height, style.header_bg_color or DEFAULT_HEADER_BG)
            header_x = x
            for c in range(cols):
                if headers[c]:
                    surface.text_cell(
                        headers[c].upper(), header_x + CELL_PADDING, y, widths[c] - 2 * CELL_PADDING,
                        header_height, font_name="Helvetica-Bold", font_size=font_size,
                        color=style.header_text_color or DEFAULT_HEADER_TEXT,
                    )
                if c < cols - 1:
                    divider_x = header_x + widths[c]
                    surface.line(divider_x, y, divider_x, y + header_height, border_color, line_width=border_width)
                header_x += widths[c]
            current_y += header_height

        # ========== DATA SOURCE ==========
        if table_type is TableType.SUBJECTS:
            source = list(data.results)
            ratings = None
        elif table_type in (TableType.AFFECTIVE, TableType.PSYCHOMOTOR):
            source = list(_trait_names(metadata, table_type))
            ratings = _trait_ratings(data, table_type)
        else:
            source = []
            ratings = None

        # ========== ROWS ==========
        for r in range(rows):
            if r % 2 == 1 and style.alt_row_color:
                surface.fill_rect(x, current_y, width, row_height, style.alt_row_color)

            surface.line(x, current_y, x + width, current_y, border_color, line_width=border_width)

            row_data = source[r] if r < len(source) else None
            row_x = x
            for c in range(cols):
                text, bold = "", False
                if row_data is not None:
                    if table_type is TableType.SUBJECTS:
                        text, bold = subject_cell(headers[c], c, row_data)
                    else:
                        text = trait_cell(row_data, headers[c], c, ratings, cols)

                if text:
                    surface.text_cell(
                        text, row_x + CELL_PADDING, current_y, widths[c] - 2 * CELL_PADDING, row_height,
                        font_name="Helvetica-Bold" if bold else "Helvetica", font_size=font_size,
                        color=cell_color,
                    )

                if c < cols - 1:
                    divider_x = row_x + widths[c]
                    surface.line(divider_x, current_y, divider_x, current_y + row_height, border_color,
                                 line_width=border_width)
                row_x += widths[c]
            current_y += row_height

        # ========== FRAME ==========
        if current_y > y:
            surface.line(x, current_y, x + width, current_y, border_color, line_width=border_width)
            surface.stroke_rect(x, y, width, current_y - y, border_color, line_width=border_width)

    if len(source) > rows and table_type is not None:
        logger.debug("Table %s shows %d of %d rows.", table_type.value, rows, len(source))

    return TableLayout(widths, header_height, row_height if rows else 0.0, y, current_y)
