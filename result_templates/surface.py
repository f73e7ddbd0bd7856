"""
Document surfaces: the single ordered sink every renderer paints into.

Renderers work in page points with a top-left origin and y growing
downwards, like the template editor. ``PDFSurface`` converts that to
reportlab's bottom-left origin; ``RecordingSurface`` keeps the draw
calls as data so they can be inspected or replayed onto another surface
in their original order.
"""
import logging
from contextlib import contextmanager
from io import BytesIO
from typing import NamedTuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase.pdfmetrics import getAscentDescent

logger = logging.getLogger(__name__)

LINE_HEIGHT = 1.2
DEFAULT_FONT_SIZE = 12


def to_color(value, default=colors.black):
    """Convert a CSS-style color string ("#1e40af", "white") to a reportlab color."""
    if not value:
        return default
    try:
        return colors.toColor(value)
    except ValueError:
        logger.warning("Unrecognised color %r, falling back to %r.", value, default)
        return default


class Surface:
    """
    Drawing operations shared by every surface.

    All coordinates are page points from the top-left corner.
    """

    width = 0.0
    height = 0.0

    def save_state(self):
        raise NotImplementedError

    def restore_state(self):
        raise NotImplementedError

    @contextmanager
    def state(self):
        """Isolate color, line and clip changes made inside the block."""
        self.save_state()
        try:
            yield self
        finally:
            self.restore_state()

    def fill_rect(self, x, y, width, height, color):
        raise NotImplementedError

    def stroke_rect(self, x, y, width, height, color, line_width=1, dash=None):
        raise NotImplementedError

    def line(self, x1, y1, x2, y2, color, line_width=1):
        raise NotImplementedError

    def text_box(self, text, x, y, width, font_name="Helvetica", font_size=DEFAULT_FONT_SIZE,
                 color=None, align="left"):
        """Draw wrapped text whose first line starts at the top of the box."""
        raise NotImplementedError

    def text_cell(self, text, x, y, width, height, font_name="Helvetica", font_size=DEFAULT_FONT_SIZE,
                  color=None):
        """Draw one line of text centered in a cell and clipped to it."""
        raise NotImplementedError

    def image(self, data, x, y, width, height):
        """Draw encoded image bytes fitted inside the box, keeping aspect ratio."""
        raise NotImplementedError


class PDFSurface(Surface):
    """
    Surface backed by a reportlab canvas page.

    Args:
        canvas: reportlab.pdfgen.canvas.Canvas to paint into.
        page_size: (width, height) of the page; defaults to the canvas size.
    """

    def __init__(self, canvas, page_size=None):
        self.canvas = canvas
        self.width, self.height = page_size or canvas._pagesize

    def _y(self, y):
        return self.height - y

    def save_state(self):
        self.canvas.saveState()

    def restore_state(self):
        self.canvas.restoreState()

    def fill_rect(self, x, y, width, height, color):
        self.canvas.setFillColor(to_color(color))
        self.canvas.rect(x, self._y(y + height), width, height, stroke=0, fill=1)

    def stroke_rect(self, x, y, width, height, color, line_width=1, dash=None):
        self.canvas.setStrokeColor(to_color(color))
        self.canvas.setLineWidth(line_width)
        self.canvas.setDash(list(dash) if dash else [])
        self.canvas.rect(x, self._y(y + height), width, height, stroke=1, fill=0)

    def line(self, x1, y1, x2, y2, color, line_width=1):
        self.canvas.setStrokeColor(to_color(color))
        self.canvas.setLineWidth(line_width)
        self.canvas.setDash([])
        self.canvas.line(x1, self._y(y1), x2, self._y(y2))

    def text_box(self, text, x, y, width, font_name="Helvetica", font_size=DEFAULT_FONT_SIZE,
                 color=None, align="left"):
        if width > 0:
            lines = simpleSplit(text, font_name, font_size, width)
        else:
            lines = text.split("\n")

        ascent, _ = getAscentDescent(font_name, font_size)
        self.canvas.setFillColor(to_color(color))
        self.canvas.setFont(font_name, font_size)

        baseline = y + ascent
        for line in lines:
            if align == "center":
                self.canvas.drawCentredString(x + width / 2, self._y(baseline), line)
            elif align == "right":
                self.canvas.drawRightString(x + width, self._y(baseline), line)
            else:
                self.canvas.drawString(x, self._y(baseline), line)
            baseline += font_size * LINE_HEIGHT

    def text_cell(self, text, x, y, width, height, font_name="Helvetica", font_size=DEFAULT_FONT_SIZE,
                  color=None):
        if width <= 0 or height <= 0:
            return
        ascent, descent = getAscentDescent(font_name, font_size)
        baseline = y + height / 2 + (ascent + descent) / 2

        self.canvas.saveState()
        clip = self.canvas.beginPath()
        clip.rect(x, self._y(y + height), width, height)
        self.canvas.clipPath(clip, stroke=0, fill=0)
        self.canvas.setFillColor(to_color(color))
        self.canvas.setFont(font_name, font_size)
        self.canvas.drawCentredString(x + width / 2, self._y(baseline), " ".join(text.splitlines()))
        self.canvas.restoreState()

    def image(self, data, x, y, width, height):
        if width <= 0 or height <= 0:
            return
        reader = ImageReader(BytesIO(data))
        image_width, image_height = reader.getSize()
        if image_width <= 0 or image_height <= 0:
            raise ValueError("Image has no pixels")

        fit = min(width / image_width, height / image_height)
        draw_width = image_width * fit
        draw_height = image_height * fit
        self.canvas.drawImage(reader, x, self._y(y + draw_height), draw_width, draw_height, mask="auto")


class DrawCommand(NamedTuple):
    op: str
    args: dict


class RecordingSurface(Surface):
    """
    Surface that records draw calls instead of painting them.

    Useful for buffering a render and replaying it in order onto a real
    surface, and for inspecting exactly what a template produced.
    """

    def __init__(self, page_size=A4):
        self.width, self.height = page_size
        self.commands = []

    def _record(self, op, **args):
        self.commands.append(DrawCommand(op, args))

    def save_state(self):
        self._record("save_state")

    def restore_state(self):
        self._record("restore_state")

    def fill_rect(self, x, y, width, height, color):
        self._record("fill_rect", x=x, y=y, width=width, height=height, color=color)

    def stroke_rect(self, x, y, width, height, color, line_width=1, dash=None):
        self._record("stroke_rect", x=x, y=y, width=width, height=height, color=color,
                     line_width=line_width, dash=dash)

    def line(self, x1, y1, x2, y2, color, line_width=1):
        self._record("line", x1=x1, y1=y1, x2=x2, y2=y2, color=color, line_width=line_width)

    def text_box(self, text, x, y, width, font_name="Helvetica", font_size=DEFAULT_FONT_SIZE,
                 color=None, align="left"):
        self._record("text_box", text=text, x=x, y=y, width=width, font_name=font_name,
                     font_size=font_size, color=color, align=align)

    def text_cell(self, text, x, y, width, height, font_name="Helvetica", font_size=DEFAULT_FONT_SIZE,
                  color=None):
        self._record("text_cell", text=text, x=x, y=y, width=width, height=height,
                     font_name=font_name, font_size=font_size, color=color)

    def image(self, data, x, y, width, height):
        self._record("image", data=data, x=x, y=y, width=width, height=height)

    def ops(self, *names):
        """Return the recorded commands, optionally only those named."""
        if not names:
            return list(self.commands)
        return [command for command in self.commands if command.op in names]

    def texts(self):
        """Return every piece of text drawn, in paint order."""
        return [command.args["text"] for command in self.ops("text_box", "text_cell")]

    def replay(self, surface):
        """Paint the recorded commands onto ``surface`` in their original order."""
        for command in self.commands:
            getattr(surface, command.op)(**command.args)
