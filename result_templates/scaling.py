"""
Conversion from template-authoring units to output page points.

Templates are designed on a fixed virtual canvas (794 units wide, the
A4 width at 96 DPI). The page they are painted on is measured in PDF
points, so every position, size, font size and column width is
multiplied by one linear factor before any drawing happens.
"""
from dataclasses import replace

from . import conf


class Scaler:
    """
    Linear scale from the template canvas to the output page.

    Args:
        page_width: Width of the output page in points.
        reference_width: Width of the authoring canvas in template units.
    """

    def __init__(self, page_width, reference_width=conf.DEFAULT_REFERENCE_WIDTH):
        if reference_width <= 0:
            raise ValueError(f"reference_width must be positive, got {reference_width!r}")
        self.page_width = float(page_width)
        self.reference_width = float(reference_width)
        self.factor = self.page_width / self.reference_width

    @classmethod
    def for_page(cls, page_width, canvas_size=None):
        """
        Build a scaler for a page, honouring a template's own canvas size.

        A template that declares ``canvasSize`` (e.g. a landscape canvas
        1123 units wide) is scaled against that width; otherwise the
        configured reference width is used.
        """
        if canvas_size:
            return cls(page_width, canvas_size[0])
        return cls(page_width, conf.get_reference_width())

    def __call__(self, value):
        return value * self.factor

    def apply(self, element):
        """
        Return a copy of ``element`` with geometry, font size and column
        widths converted to page units. The input element is not modified.
        """
        style = element.style
        if style.font_size is not None:
            style = replace(style, font_size=self(style.font_size))

        metadata = element.metadata
        if metadata.column_widths is not None:
            metadata = replace(
                metadata,
                column_widths=tuple(self(width) for width in metadata.column_widths),
            )

        return replace(
            element,
            x=self(element.x),
            y=self(element.y),
            width=self(element.width),
            height=self(element.height),
            style=style,
            metadata=metadata,
        )

    def __repr__(self):
        return f"Scaler(page_width={self.page_width!r}, reference_width={self.reference_width!r})"
