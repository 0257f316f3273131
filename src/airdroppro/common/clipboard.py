"""
Clipboard bridge

Reads the OS clipboard as one of three payload shapes and writes text to
it. Reading probes the supported formats in a fixed priority order:

    image -> native file list -> file links inside HTML -> plain text

and returns the first one that yields content.
"""
import re
import time
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from airdroppro import config
from airdroppro.platform.base import ClipboardBackend, LinkNormalizer, PosixLinkNormalizer
from .errors import ClipboardError, UnsupportedClipboardFormat

logger = logging.getLogger(__name__)

FILE_LINK_RE = re.compile(r'src="(?P<path>file:///[^"]+)"')
FILE_SCHEME = "file://"


@dataclass
class TextPayload:
    content: str
    type_tag: str = field(default="text", init=False)


@dataclass
class ImagePayload:
    png_bytes: bytes
    type_tag: str = field(default="img", init=False)


@dataclass
class FileListPayload:
    paths: List[str]
    source: str = "native"  # 'native' or 'html'
    type_tag: str = field(default="file", init=False)


ClipboardPayload = Union[TextPayload, ImagePayload, FileListPayload]


def clean_path_string(path: str) -> str:
    """Trim trailing CR, LF and spaces"""
    return path.rstrip('\r\n ')


def extract_file_links(html: str, normalizer: LinkNormalizer) -> List[str]:
    """Collect paths of src="file:///..." attributes in document order"""
    paths = []
    for match in FILE_LINK_RE.finditer(html):
        path = clean_path_string(match.group('path'))
        if path.startswith(FILE_SCHEME):
            path = path[len(FILE_SCHEME):]
        paths.append(normalizer.normalize(path))
    return paths


# Probes: each inspects one format and returns a payload or None

def probe_image(backend: ClipboardBackend, normalizer: LinkNormalizer) -> Optional[ClipboardPayload]:
    png = backend.get_image_png()
    if png:
        return ImagePayload(png)
    return None


def probe_file_list(backend: ClipboardBackend, normalizer: LinkNormalizer) -> Optional[ClipboardPayload]:
    files = backend.get_file_list()
    if files:
        paths = [clean_path_string(p) for p in files]
        return FileListPayload(paths, source="native")
    return None


def probe_html_links(backend: ClipboardBackend, normalizer: LinkNormalizer) -> Optional[ClipboardPayload]:
    html = backend.get_html()
    if html:
        paths = extract_file_links(html, normalizer)
        if paths:
            return FileListPayload(paths, source="html")
    return None


def probe_text(backend: ClipboardBackend, normalizer: LinkNormalizer) -> Optional[ClipboardPayload]:
    text = backend.get_text()
    if text:
        return TextPayload(text)
    return None


DEFAULT_PROBES = (probe_image, probe_file_list, probe_html_links, probe_text)


class ClipboardBridge:
    """
    Polymorphic read/write over the OS clipboard.

    A fresh backend is opened for every call, so a clipboard that is
    unavailable at startup (no display yet) only fails single requests.
    """

    def __init__(self,
                 backend_factory: Callable[[], ClipboardBackend],
                 normalizer: LinkNormalizer = None,
                 probes=DEFAULT_PROBES,
                 settle_delay: float = config.CLIPBOARD_SETTLE_DELAY,
                 sleep: Callable[[float], None] = time.sleep):
        self._backend_factory = backend_factory
        self.normalizer = normalizer or PosixLinkNormalizer()
        self.probes = tuple(probes)
        self.settle_delay = settle_delay
        self._sleep = sleep

    def _open(self) -> ClipboardBackend:
        try:
            return self._backend_factory()
        except Exception as e:
            raise ClipboardError("Failed to initialize clipboard") from e

    def read(self) -> ClipboardPayload:
        """
        Return the highest-priority payload on the clipboard.

        Raises:
            ClipboardError: if the clipboard cannot be opened
            UnsupportedClipboardFormat: if no probe finds content
        """
        backend = self._open()

        for probe in self.probes:
            try:
                payload = probe(backend, self.normalizer)
            except ClipboardError as e:
                # A format that cannot be read counts as absent
                logger.debug(f"{probe.__name__} failed: {e}")
                continue
            if payload is not None:
                logger.debug(f"{probe.__name__} matched ({payload.type_tag})")
                return payload

        raise UnsupportedClipboardFormat()

    def write(self, text: str):
        """
        Set the clipboard to text and wait for the write to settle.

        Some platforms commit clipboard writes asynchronously, so other
        readers may not see the text until the settle delay has passed.
        """
        backend = self._open()
        try:
            backend.set_text(text)
        except ClipboardError as e:
            raise ClipboardError("Failed to set clipboard contents") from e

        logger.info(f"Set text in clipboard ({len(text)} chars)")
        if self.settle_delay > 0:
            self._sleep(self.settle_delay)
