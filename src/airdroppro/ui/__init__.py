"""
AirDropPro tray UI package
"""

from .app import TrayApp

__all__ = ["TrayApp"]
