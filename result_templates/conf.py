"""
Settings access for the result template renderer.

All values are read from ``django.conf.settings`` with defaults, so the
app works inside any host project without extra configuration.
"""
from pathlib import Path

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from reportlab.lib import pagesizes

DEFAULT_PAGE_SIZE = "A4"
DEFAULT_REFERENCE_WIDTH = 794
DEFAULT_IMAGE_TIMEOUT = 10.0


def get_page_size(landscape=False):
    """
    Return the output page size as a (width, height) tuple in points.

    RESULT_TEMPLATE_PAGE_SIZE may be a reportlab page size name such as
    "A4" or "LETTER", or an explicit (width, height) pair.
    """
    value = getattr(settings, "RESULT_TEMPLATE_PAGE_SIZE", DEFAULT_PAGE_SIZE)
    if isinstance(value, str):
        size = getattr(pagesizes, value.upper(), None)
    else:
        size = value

    try:
        width, height = (float(v) for v in size)
    except (TypeError, ValueError):
        raise ImproperlyConfigured(f"RESULT_TEMPLATE_PAGE_SIZE {value!r} is not a valid page size.")
    if width <= 0 or height <= 0:
        raise ImproperlyConfigured(f"RESULT_TEMPLATE_PAGE_SIZE {value!r} must have positive dimensions.")

    if landscape:
        return pagesizes.landscape((width, height))
    return pagesizes.portrait((width, height))


def get_reference_width():
    return float(getattr(settings, "RESULT_TEMPLATE_REFERENCE_WIDTH", DEFAULT_REFERENCE_WIDTH))


def get_public_root():
    root = getattr(settings, "RESULT_TEMPLATE_PUBLIC_ROOT", None)
    if root:
        return Path(root)
    base_dir = getattr(settings, "BASE_DIR", None)
    return Path(base_dir) / "public" if base_dir else Path.cwd() / "public"


def get_image_timeout():
    return float(getattr(settings, "RESULT_TEMPLATE_IMAGE_TIMEOUT", DEFAULT_IMAGE_TIMEOUT))


def get_watermark():
    return getattr(settings, "RESULT_TEMPLATE_WATERMARK", None)
