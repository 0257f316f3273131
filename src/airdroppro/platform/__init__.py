"""
Platform abstraction layer with auto-detection

Picks the clipboard backend, file-link normalizer and autostart manager
for the running OS. Native modules are imported on first use.
"""
import sys
from typing import List, Type

from .base import (
    AutoLaunch, ClipboardBackend, DriveLetterLinkNormalizer, PlatformInfo,
    PosixLinkNormalizer,
)

_PLATFORM = sys.platform

if _PLATFORM == "win32":
    _platform_info = PlatformInfo(
        name="windows",
        display_name="Windows",
        link_normalizer=DriveLetterLinkNormalizer(),
    )
elif _PLATFORM == "darwin":
    _platform_info = PlatformInfo(
        name="macos",
        display_name="macOS",
        link_normalizer=PosixLinkNormalizer(),
    )
elif _PLATFORM.startswith("linux"):
    _platform_info = PlatformInfo(
        name="linux",
        display_name="Linux",
        link_normalizer=PosixLinkNormalizer(),
    )
else:
    raise RuntimeError(f"Unsupported platform: {_PLATFORM}")


def get_platform_info() -> PlatformInfo:
    """Get information about the current platform"""
    return _platform_info


def get_clipboard_backend_class() -> Type[ClipboardBackend]:
    """Get the clipboard backend class for the current platform"""
    if _platform_info.name == "windows":
        from .windows.clipboard import WindowsClipboard
        return WindowsClipboard
    if _platform_info.name == "macos":
        from .macos.clipboard import MacClipboard
        return MacClipboard
    from .linux.clipboard import LinuxClipboard
    return LinuxClipboard


def get_autolaunch(app_args: List[str]) -> AutoLaunch:
    """Get the login-item manager for the current platform"""
    if _platform_info.name == "windows":
        from .windows.autostart import WindowsAutoLaunch
        return WindowsAutoLaunch(app_args)
    if _platform_info.name == "macos":
        from .macos.autostart import MacAutoLaunch
        return MacAutoLaunch(app_args)
    from .linux.autostart import LinuxAutoLaunch
    return LinuxAutoLaunch(app_args)


__all__ = [
    'AutoLaunch',
    'ClipboardBackend',
    'PlatformInfo',
    'get_autolaunch',
    'get_clipboard_backend_class',
    'get_platform_info',
]
