"""
Qt Signals for thread-safe communication between the server and the UI.

Request handlers run on werkzeug worker threads, while the tray icon
lives in the main Qt thread. These signals bridge the two safely.
"""

from PySide6.QtCore import QObject, Signal


class ServerSignals(QObject):
    """
    Signal hub for server events.

    All signals are thread-safe and can be emitted from any thread.
    """

    # Transfer outcome to show as a desktop notification
    # Args: summary (str), body (str), success (bool)
    notification = Signal(str, str, bool)
