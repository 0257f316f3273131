"""
Windows Clipboard Backend

Uses pywin32 to read the Windows clipboard:
- Image data (PNG/CF_DIBV5/CF_DIB) - screenshots, copied images
- File copies (CF_HDROP) - files from Explorer
- HTML Format - browsers and Office
- Text (CF_UNICODETEXT)
"""
import io
import struct
import logging
from contextlib import contextmanager
from typing import Optional, List

try:
    import win32clipboard
    import win32con
    import pywintypes
    HAS_WIN32 = True
except ImportError:
    HAS_WIN32 = False

from PIL import Image

from airdroppro.common.errors import ClipboardError
from airdroppro.platform.base import ClipboardBackend

logger = logging.getLogger(__name__)

if not HAS_WIN32:
    logger.warning("pywin32 not installed. Run: pip install pywin32")

# Clipboard formats
CF_HDROP = 15  # File list format
CF_DIB = 8     # Device Independent Bitmap
CF_DIBV5 = 17  # DIB v5 (with alpha)


class WindowsClipboard(ClipboardBackend):
    """Windows clipboard via pywin32"""

    def __init__(self):
        if not HAS_WIN32:
            raise RuntimeError("pywin32 is required for Windows clipboard access")

        self._cf_png = win32clipboard.RegisterClipboardFormat("PNG")
        self._cf_html = win32clipboard.RegisterClipboardFormat("HTML Format")

    @contextmanager
    def _opened(self):
        try:
            win32clipboard.OpenClipboard()
        except pywintypes.error as e:
            # Clipboard might be locked by another app
            raise ClipboardError(f"Could not open clipboard: {e}") from e
        try:
            yield
        finally:
            win32clipboard.CloseClipboard()

    def _get(self, fmt):
        """Read one format, or None if it is not on the clipboard"""
        with self._opened():
            if not win32clipboard.IsClipboardFormatAvailable(fmt):
                return None
            try:
                return win32clipboard.GetClipboardData(fmt)
            except (pywintypes.error, TypeError) as e:
                raise ClipboardError(f"Could not read clipboard format {fmt}: {e}") from e

    def get_image_png(self) -> Optional[bytes]:
        # Try PNG first (best quality, supports transparency)
        data = self._get(self._cf_png)
        if data:
            return bytes(data)

        for fmt in (CF_DIBV5, CF_DIB):
            data = self._get(fmt)
            if data:
                img = _dib_to_image(data)
                output = io.BytesIO()
                img.save(output, 'PNG')
                return output.getvalue()
        return None

    def get_file_list(self) -> Optional[List[str]]:
        data = self._get(CF_HDROP)
        if not data:
            return None
        # data is a tuple of file paths
        return list(data)

    def get_html(self) -> Optional[str]:
        data = self._get(self._cf_html)
        if not data:
            return None
        if isinstance(data, bytes):
            return data.decode('utf-8', errors='replace')
        return data

    def get_text(self) -> Optional[str]:
        return self._get(win32con.CF_UNICODETEXT)

    def set_text(self, text: str) -> None:
        with self._opened():
            try:
                win32clipboard.EmptyClipboard()
                win32clipboard.SetClipboardText(text, win32con.CF_UNICODETEXT)
            except pywintypes.error as e:
                raise ClipboardError(f"Failed to set clipboard text: {e}") from e


def _dib_to_image(dib_data: bytes) -> Image.Image:
    """Convert DIB (Device Independent Bitmap) data to a PIL Image"""
    try:
        # BITMAPINFOHEADER: biSize (4), biWidth (4), biHeight (4), biPlanes (2),
        # biBitCount (2), biCompression (4), ...
        header_size = struct.unpack('<I', dib_data[0:4])[0]
        width = struct.unpack('<i', dib_data[4:8])[0]
        height = struct.unpack('<i', dib_data[8:12])[0]
        bit_count = struct.unpack('<H', dib_data[14:16])[0]
        compression = struct.unpack('<I', dib_data[16:20])[0]

        # Height can be negative (top-down DIB)
        flip = height > 0
        height = abs(height)

        if bit_count == 32 and compression in (0, 3):
            # BI_BITFIELDS carries three DWORD masks after a 40-byte header
            pixel_offset = header_size + (12 if compression == 3 and header_size == 40 else 0)
            pixel_data = dib_data[pixel_offset:]
            img = Image.frombytes('RGBA', (width, height), pixel_data, 'raw', 'BGRA')
            if flip:
                img = img.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
            return img

        # Everything else: wrap in a BMP file header and let PIL decode it
        if bit_count <= 8:
            colors = 1 << bit_count
            pixel_offset = header_size + colors * 4
        else:
            pixel_offset = header_size
        bmp_header = b'BM' + struct.pack('<IHHI', 14 + len(dib_data), 0, 0, 14 + pixel_offset)
        img = Image.open(io.BytesIO(bmp_header + dib_data))
        img.load()
        return img

    except (struct.error, ValueError, OSError) as e:
        raise ClipboardError(f"DIB conversion error: {e}") from e
