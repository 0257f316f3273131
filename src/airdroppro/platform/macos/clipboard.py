"""
macOS Clipboard Backend

Uses PyObjC to read the macOS pasteboard:
- Image data (NSPasteboardTypePNG, TIFF) - screenshots, copied images
- File copies (NSFilenamesPboardType, file URLs) - files from Finder
- HTML (NSPasteboardTypeHTML)
- Text (NSPasteboardTypeString)
"""
import logging
from typing import Optional, List
from urllib.parse import unquote, urlparse

try:
    from AppKit import (
        NSPasteboard, NSPasteboardTypeFileURL, NSFilenamesPboardType,
        NSPasteboardTypePNG, NSPasteboardTypeTIFF, NSPasteboardTypeHTML,
        NSBitmapImageRep, NSPNGFileType, NSPasteboardTypeString
    )
    HAS_APPKIT = True
except ImportError:
    HAS_APPKIT = False

from airdroppro.common.errors import ClipboardError
from airdroppro.platform.base import ClipboardBackend

logger = logging.getLogger(__name__)

if not HAS_APPKIT:
    logger.warning("pyobjc not installed. Run: pip install pyobjc-framework-Cocoa")


class MacClipboard(ClipboardBackend):
    """macOS general pasteboard via PyObjC"""

    def __init__(self):
        if not HAS_APPKIT:
            raise RuntimeError("pyobjc is required for macOS clipboard access")

        self._pasteboard = NSPasteboard.generalPasteboard()

    def _types(self):
        return self._pasteboard.types() or []

    def get_image_png(self) -> Optional[bytes]:
        types = self._types()

        if NSPasteboardTypePNG in types:
            data = self._pasteboard.dataForType_(NSPasteboardTypePNG)
            return bytes(data) if data else None

        if NSPasteboardTypeTIFF in types:
            tiff_data = self._pasteboard.dataForType_(NSPasteboardTypeTIFF)
            if not tiff_data:
                return None
            # Convert TIFF to PNG
            bitmap = NSBitmapImageRep.imageRepWithData_(tiff_data)
            if bitmap is None:
                raise ClipboardError("Failed to decode TIFF image")
            png_data = bitmap.representationUsingType_properties_(NSPNGFileType, None)
            if png_data is None:
                raise ClipboardError("Failed to convert image to PNG")
            return bytes(png_data)

        return None

    def get_file_list(self) -> Optional[List[str]]:
        types = self._types()

        # Try NSFilenamesPboardType first (older but more reliable)
        if NSFilenamesPboardType in types:
            filenames = self._pasteboard.propertyListForType_(NSFilenamesPboardType)
            if filenames:
                return [str(f) for f in filenames]

        if NSPasteboardTypeFileURL in types:
            paths = []
            for item in self._pasteboard.pasteboardItems():
                url_string = item.stringForType_(NSPasteboardTypeFileURL)
                if url_string and url_string.startswith('file://'):
                    paths.append(unquote(urlparse(url_string).path))
            return paths or None

        return None

    def get_html(self) -> Optional[str]:
        if NSPasteboardTypeHTML not in self._types():
            return None
        html = self._pasteboard.stringForType_(NSPasteboardTypeHTML)
        return str(html) if html else None

    def get_text(self) -> Optional[str]:
        if NSPasteboardTypeString not in self._types():
            return None
        text = self._pasteboard.stringForType_(NSPasteboardTypeString)
        return str(text) if text is not None else None

    def set_text(self, text: str) -> None:
        self._pasteboard.clearContents()
        if not self._pasteboard.setString_forType_(text, NSPasteboardTypeString):
            raise ClipboardError("Pasteboard rejected the text")
