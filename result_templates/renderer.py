"""
Document orchestration for result templates.

Walks a template's elements in declared order (earlier elements are
painted first and may be covered by later ones), scales each one to
page units and hands it to the renderer for its type. Images are
fetched up front, concurrently, so the paint pass itself is strictly
sequential on a single surface.
"""
import logging
from io import BytesIO

from asgiref.sync import async_to_sync
from reportlab.lib import colors
from reportlab.pdfgen import canvas as pdf_canvas

from . import conf
from .elements import ElementType, template_canvas_size, template_elements
from .images import ImageFetcher, image_source
from .primitives import render_dynamic, render_image, render_shape, render_text
from .render_data import RenderData
from .scaling import Scaler
from .surface import PDFSurface
from .tables import render_table

logger = logging.getLogger(__name__)


def render_element(surface, element, data, images, scaler):
    """Dispatch one scaled element to the renderer for its type."""
    element_type = element.type
    if element_type in (ElementType.SHAPE, ElementType.LINE):
        render_shape(surface, element)
    elif element_type is ElementType.TEXT:
        render_text(surface, element)
    elif element_type is ElementType.DYNAMIC:
        render_dynamic(surface, element, data)
    elif element_type is ElementType.IMAGE:
        render_image(surface, element, data, images, scale=scaler.factor)
    elif element_type is ElementType.TABLE:
        render_table(surface, element, data, scale=scaler.factor)


def paint(surface, elements, data, images, scaler):
    """
    Paint already-parsed elements in order.

    A failure while painting one element is logged and does not stop the
    elements after it.
    """
    for index, element in enumerate(elements):
        if element.type is None:
            logger.debug("Skipping element %d with unknown type %r.", index, element.raw_type)
            continue
        try:
            render_element(surface, scaler.apply(element), data, images, scaler)
        except Exception:
            logger.exception("Failed to render %s element %d (%s).", element.type.value, index, element.id)


async def arender_template(surface, template, data, fetcher=None):
    """
    Render a template onto ``surface`` from async code.

    Args:
        surface: Surface to paint on (PDFSurface, RecordingSurface, ...).
        template: ``{"elements": [...]}`` or ``{"content": {"elements": [...]}}``.
        data: RenderData or its camelCase dict payload.
        fetcher: ImageFetcher used for image elements; a default one is
            built from settings when omitted.

    Returns:
        The surface, for chaining.
    """
    elements = template_elements(template)
    data = RenderData.from_dict(data)
    scaler = Scaler.for_page(surface.width, template_canvas_size(template))

    sources = [
        image_source(element.metadata.field, data)
        for element in elements
        if element.type is ElementType.IMAGE
    ]
    fetcher = fetcher or ImageFetcher()
    images = await fetcher.fetch_all(sources)

    paint(surface, elements, data, images, scaler)
    return surface


def render_template(surface, template, data, fetcher=None):
    """
    Render a template onto ``surface``.

    Synchronous entry point for views, management commands and tasks;
    use ``arender_template`` from inside a running event loop.
    """
    return async_to_sync(arender_template)(surface, template, data, fetcher=fetcher)


def draw_watermark(canvas, page_size, text):
    """Draw a light diagonal watermark across the page"""
    width, height = page_size
    canvas.saveState()
    canvas.setFont("Helvetica-Bold", 40)
    canvas.setFillColor(colors.lightgrey)
    canvas.setFillAlpha(0.15)
    canvas.translate(width / 2, height / 2)
    canvas.rotate(45)
    canvas.drawCentredString(0, 0, text)
    canvas.restoreState()


def render_template_pdf(template, data, fetcher=None, watermark=None):
    """
    Render a template to a single-page PDF.

    The page size comes from RESULT_TEMPLATE_PAGE_SIZE, turned landscape
    when the template canvas is wider than it is tall.

    Args:
        template: Template value (bare or content-wrapped).
        data: RenderData or its dict payload.
        fetcher: Optional ImageFetcher.
        watermark: Watermark text; defaults to RESULT_TEMPLATE_WATERMARK.

    Returns:
        BytesIO object containing PDF
    """
    canvas_size = template_canvas_size(template)
    landscape = bool(canvas_size and canvas_size[0] > canvas_size[1])
    page_size = conf.get_page_size(landscape=landscape)

    pdf_buffer = BytesIO()
    pdf = pdf_canvas.Canvas(pdf_buffer, pagesize=page_size)

    watermark = conf.get_watermark() if watermark is None else watermark
    if watermark:
        draw_watermark(pdf, page_size, watermark)

    render_template(PDFSurface(pdf, page_size), template, data, fetcher=fetcher)

    pdf.showPage()
    pdf.save()
    pdf_buffer.seek(0)

    return pdf_buffer
