"""
SystemTray - System tray icon with a minimal menu.
Transfer notifications are shown as tray balloon messages.
"""

import logging
import platform

from PySide6.QtCore import QPoint, Qt
from PySide6.QtGui import QAction, QColor, QIcon, QPainter, QPixmap, QPolygon
from PySide6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

from airdroppro import config
from .signals import ServerSignals

logger = logging.getLogger(__name__)

IS_MAC = platform.system() == "Darwin"


def create_tray_icon() -> QIcon:
    """
    Paint a paper-plane icon.
    """
    size = 32 if IS_MAC else 16
    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.transparent)

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing)
    painter.setPen(Qt.NoPen)

    s = size / 16.0

    # Wing
    painter.setBrush(QColor("#0a64ad"))
    painter.drawPolygon(QPolygon([
        QPoint(int(1 * s), int(7 * s)),
        QPoint(int(15 * s), int(1 * s)),
        QPoint(int(7 * s), int(10 * s)),
    ]))

    # Fold
    painter.setBrush(QColor("#4a9de0"))
    painter.drawPolygon(QPolygon([
        QPoint(int(7 * s), int(10 * s)),
        QPoint(int(15 * s), int(1 * s)),
        QPoint(int(10 * s), int(15 * s)),
    ]))

    painter.end()
    return QIcon(pixmap)


class SystemTray(QSystemTrayIcon):
    """
    System tray icon with status line and Quit action.
    """

    def __init__(self, app: QApplication, signals: ServerSignals, parent=None):
        super().__init__(parent)

        self.app = app
        self.signals = signals

        self.setIcon(create_tray_icon())
        self.setToolTip(config.APP_NAME)
        self._setup_menu()

        self.signals.notification.connect(self._on_notification)

    def _setup_menu(self):
        menu = QMenu()

        # Status (disabled, just for display)
        self.status_action = QAction("Starting...", menu)
        self.status_action.setEnabled(False)
        menu.addAction(self.status_action)

        menu.addSeparator()

        quit_action = QAction("Quit", menu)
        quit_action.triggered.connect(self.app.quit)
        menu.addAction(quit_action)

        self.setContextMenu(menu)

    def _on_notification(self, summary: str, body: str, success: bool):
        logger.debug(f"Showing notification: {summary}")
        icon = QSystemTrayIcon.Information if success else QSystemTrayIcon.Warning
        self.showMessage(summary, body, icon, config.NOTIFICATION_TIMEOUT_MS)

    def update_status(self, name: str, port: int):
        self.setToolTip(f"{config.APP_NAME} - {name}:{port}")
        self.status_action.setText(f"Serving as {name} on port {port}")
