"""
Base classes for platform abstraction
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from dataclasses import dataclass


class LinkNormalizer(ABC):
    """Turns the path part of a file:/// link into a native path"""

    @abstractmethod
    def normalize(self, path: str) -> str:
        ...


class PosixLinkNormalizer(LinkNormalizer):
    """file:///home/me/a.png -> /home/me/a.png (root separator kept)"""

    def normalize(self, path: str) -> str:
        return path


class DriveLetterLinkNormalizer(LinkNormalizer):
    """file:///C:/Users/a.png -> C:/Users/a.png (one leading separator dropped)"""

    def normalize(self, path: str) -> str:
        if path.startswith('/'):
            return path[1:]
        return path


@dataclass
class PlatformInfo:
    """Information about a platform"""
    name: str
    display_name: str
    link_normalizer: LinkNormalizer


class ClipboardBackend(ABC):
    """
    Raw access to the OS clipboard.

    Every getter returns None when the clipboard does not hold that
    format. Access failures raise ClipboardError. Implementations are
    created per request and must not cache clipboard content.
    """

    @abstractmethod
    def get_image_png(self) -> Optional[bytes]:
        """Bitmap content encoded as PNG"""
        ...

    @abstractmethod
    def get_file_list(self) -> Optional[List[str]]:
        """Native file-reference list (e.g. files copied in a file manager)"""
        ...

    @abstractmethod
    def get_html(self) -> Optional[str]:
        """HTML markup"""
        ...

    @abstractmethod
    def get_text(self) -> Optional[str]:
        """Plain text"""
        ...

    @abstractmethod
    def set_text(self, text: str) -> None:
        """Replace the clipboard content with text"""
        ...


class AutoLaunch(ABC):
    """Registers the application to start on login"""

    APP_NAME = "AirDropPro"

    def __init__(self, app_args: List[str]):
        self.app_args = app_args

    @abstractmethod
    def enable(self) -> None:
        ...

    @abstractmethod
    def disable(self) -> None:
        ...

    @abstractmethod
    def is_enabled(self) -> bool:
        ...


__all__ = [
    'AutoLaunch',
    'ClipboardBackend',
    'DriveLetterLinkNormalizer',
    'LinkNormalizer',
    'PlatformInfo',
    'PosixLinkNormalizer',
]
