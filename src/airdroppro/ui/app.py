"""
TrayApp - Qt application lifecycle for the tray UI

The Qt event loop owns the main thread; the transfer server and the
mDNS advertiser keep running on their own threads.
"""

import logging
import sys
from typing import Callable, Optional

from PySide6.QtWidgets import QApplication

from airdroppro import config
from airdroppro.common.notifications import CallbackNotifier, NotificationSink

from .signals import ServerSignals
from .tray import SystemTray

logger = logging.getLogger(__name__)


class TrayApp:
    """
    Owns the QApplication, the signal hub and the tray icon.

    Create it before the server so the server can be given
    notification_sink().
    """

    def __init__(self):
        self._app = QApplication.instance() or QApplication(sys.argv)
        self._app.setApplicationName(config.APP_NAME)
        # Lets notification servers match the app to its .desktop entry
        self._app.setDesktopFileName(config.APP_ID)
        self._app.setQuitOnLastWindowClosed(False)  # Keep running in tray

        self.signals = ServerSignals()
        self._tray = SystemTray(self._app, self.signals)

    def notification_sink(self) -> NotificationSink:
        """Sink that is safe to call from request threads"""
        return CallbackNotifier(self.signals.notification.emit)

    def run(self, name: str, port: int, on_quit: Optional[Callable[[], None]] = None) -> int:
        """
        Show the tray icon and run the Qt event loop until Quit.

        Returns:
            Exit code from Qt application
        """
        if on_quit:
            self._app.aboutToQuit.connect(on_quit)

        self._tray.update_status(name, port)
        self._tray.show()
        logger.info("Tray started")

        return self._app.exec()
