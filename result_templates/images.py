"""
Image acquisition for image elements.

Fetching is the only I/O a render performs. All images a template needs
are fetched concurrently before painting starts; each result is either
the raw bytes or the ``ImageFetchError`` that explains why it could not
be loaded, so painting itself never waits or raises on I/O.
"""
import asyncio
import logging
from pathlib import Path

import httpx
from asgiref.sync import sync_to_async

from . import conf
from .exceptions import ImageFetchError
from .render_data import dig

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = ("http://", "https://")


def _student_photo(data):
    return dig(data.student, "user", "image") or dig(data.student, "user", "profileImage")


IMAGE_FIELDS = {
    "school_logo": lambda data: dig(data.school, "logo"),
    "student_photo": _student_photo,
    "school_stamp": lambda data: dig(data.school, "stamp"),
    "principal_signature": lambda data: dig(data.school, "principalSignature"),
}


def image_source(field, data):
    """Resolve an image field symbol to a URL or local path, or None."""
    resolver = IMAGE_FIELDS.get(field)
    if resolver is None:
        return None
    source = resolver(data)
    if not source:
        return None
    return str(source).strip() or None


def is_remote(source):
    return source.lower().startswith(REMOTE_SCHEMES)


def local_path(source, root):
    """
    Map a site-relative path such as "/uploads/logo.png" to a file under
    the public assets root. Paths that escape the root are rejected.
    """
    root = Path(root).resolve()
    path = (root / source.lstrip("/")).resolve()
    if path != root and root not in path.parents:
        raise ImageFetchError(source, "path is outside the public assets root")
    return path


class ImageFetcher:
    """
    Loads image bytes from HTTP(S) URLs or the local public assets root.

    Args:
        public_root: Directory local paths are resolved against. Defaults
            to RESULT_TEMPLATE_PUBLIC_ROOT.
        timeout: Seconds allowed per image. Defaults to
            RESULT_TEMPLATE_IMAGE_TIMEOUT.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
    """

    def __init__(self, public_root=None, timeout=None, transport=None):
        self.public_root = Path(public_root) if public_root else conf.get_public_root()
        self.timeout = conf.get_image_timeout() if timeout is None else float(timeout)
        self.transport = transport

    def client(self):
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport, follow_redirects=True)

    async def fetch(self, source, client):
        """Return the bytes for ``source``; raises ImageFetchError on any failure."""
        if is_remote(source):
            response = await client.get(source)
            response.raise_for_status()
            return response.content

        path = local_path(source, self.public_root)
        if not path.is_file():
            raise ImageFetchError(source, f"Local file not found: {path}")
        return await sync_to_async(path.read_bytes, thread_sensitive=False)()

    async def _fetch_or_error(self, source, client):
        try:
            return await asyncio.wait_for(self.fetch(source, client), timeout=self.timeout)
        except ImageFetchError as e:
            logger.warning("%s", e)
            return e
        except Exception as e:
            error = ImageFetchError(source, str(e) or e.__class__.__name__)
            logger.warning("%s", error)
            return error

    async def fetch_all(self, sources):
        """
        Fetch every distinct source concurrently.

        Returns a dict mapping each source to its bytes or to the
        ImageFetchError describing the failure.
        """
        unique = list(dict.fromkeys(source for source in sources if source))
        if not unique:
            return {}
        async with self.client() as client:
            results = await asyncio.gather(*(self._fetch_or_error(source, client) for source in unique))
        return dict(zip(unique, results))
