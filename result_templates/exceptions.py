"""
Exceptions raised by the result template renderer.
"""


class ResultTemplateError(Exception):
    """Base class for result template rendering errors."""


class TemplateFormatError(ResultTemplateError):
    """Raised when a template value is not a JSON-shaped mapping."""


class ImageFetchError(ResultTemplateError):
    """
    Raised when an image cannot be fetched or read.

    The image renderer absorbs it and paints an error box instead.
    """

    def __init__(self, source, reason):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load image {source!r}: {reason}")
