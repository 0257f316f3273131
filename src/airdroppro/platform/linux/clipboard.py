"""
Linux Clipboard Backend using GTK3

Works on both X11 and Wayland display servers
"""
import logging
from typing import Optional, List
from urllib.parse import urlparse, unquote

try:
    import gi
    gi.require_version('Gtk', '3.0')
    from gi.repository import Gtk, Gdk
    HAS_GTK = True
except (ImportError, ValueError) as e:
    HAS_GTK = False
    _GTK_ERROR = e

from airdroppro.common.errors import ClipboardError
from airdroppro.platform.base import ClipboardBackend

logger = logging.getLogger(__name__)

if not HAS_GTK:
    logger.warning(f"GTK3 not available: {_GTK_ERROR}. "
                   "Install: sudo apt install python3-gi gir1.2-gtk-3.0")


class LinuxClipboard(ClipboardBackend):
    """
    Linux clipboard via GTK3

    Supports:
    - Images (via GdkPixbuf)
    - Files (via text/uri-list)
    - HTML (text/html target)
    - Text
    """

    HTML_TARGET = 'text/html'

    def __init__(self):
        if not HAS_GTK:
            raise RuntimeError("GTK3 not available. Cannot access clipboard.")

        display = Gdk.Display.get_default()
        if not display:
            raise RuntimeError("No display found. Make sure DISPLAY is set.")

        self._clipboard = Gtk.Clipboard.get_default(display)

    def get_image_png(self) -> Optional[bytes]:
        pixbuf = self._clipboard.wait_for_image()
        if not pixbuf:
            return None

        success, png_bytes = pixbuf.save_to_bufferv('png', [], [])
        if not success:
            raise ClipboardError("Failed to convert image to PNG")
        return bytes(png_bytes)

    def get_file_list(self) -> Optional[List[str]]:
        uris = self._clipboard.wait_for_uris()
        if not uris:
            return None

        # Convert file:// URIs to paths
        paths = []
        for uri in uris:
            parsed = urlparse(uri)
            if parsed.scheme == 'file':
                paths.append(unquote(parsed.path))
        return paths or None

    def get_html(self) -> Optional[str]:
        target = Gdk.Atom.intern(self.HTML_TARGET, False)
        if not self._clipboard.wait_is_target_available(target):
            return None

        selection = self._clipboard.wait_for_contents(target)
        if selection is None:
            return None
        data = selection.get_data()
        if not data:
            return None
        return bytes(data).decode('utf-8', errors='replace')

    def get_text(self) -> Optional[str]:
        return self._clipboard.wait_for_text()

    def set_text(self, text: str) -> None:
        try:
            self._clipboard.set_text(text, -1)
            self._clipboard.store()
        except Exception as e:
            raise ClipboardError(f"Failed to set clipboard text: {e}") from e
