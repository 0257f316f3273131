"""
Desktop notifications for transfer outcomes

The host operator has no other way to learn that a remote device pulled
or pushed something, so every handler outcome is sent to a sink. Sinks
are fire-and-forget: a failing sink never changes an HTTP response.
"""
import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

SUCCESS_SUMMARY = "AirDropPro Success"
ERROR_SUMMARY = "AirDropPro Error"


class NotificationSink(ABC):
    """Something that can show a notification to the local user"""

    @abstractmethod
    def show(self, summary: str, body: str, success: bool) -> None:
        ...


class LogNotifier(NotificationSink):
    """Headless sink: notifications only go to the log"""

    def show(self, summary: str, body: str, success: bool) -> None:
        logger.debug(f"[{summary}] {body}")


class CallbackNotifier(NotificationSink):
    """Forwards notifications to a callable (e.g. a Qt signal's emit)"""

    def __init__(self, callback):
        self._callback = callback

    def show(self, summary: str, body: str, success: bool) -> None:
        self._callback(summary, body, success)


class Notifier:
    """Logs an outcome and forwards it to the sink"""

    def __init__(self, sink: NotificationSink = None, enabled: bool = True):
        self.sink = sink or LogNotifier()
        self.enabled = enabled

    def success(self, msg: str):
        logger.info(f"Response: {msg}.")
        self._send(SUCCESS_SUMMARY, msg, True)

    def failure(self, msg: str):
        self._send(ERROR_SUMMARY, msg, False)

    def _send(self, summary: str, body: str, success: bool):
        if not self.enabled:
            return
        try:
            self.sink.show(summary, body, success)
        except Exception as e:
            logger.warning(f"Could not show notification: {e}")
