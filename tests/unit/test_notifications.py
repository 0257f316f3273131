"""
Unit tests for notifications.py
"""
from airdroppro.common.notifications import (
    ERROR_SUMMARY,
    SUCCESS_SUMMARY,
    CallbackNotifier,
    NotificationSink,
    Notifier,
)


class ExplodingSink(NotificationSink):

    def show(self, summary, body, success):
        raise RuntimeError("notification daemon is gone")


class TestNotifier:

    def test_success(self, recording_sink):
        Notifier(recording_sink).success("Served a file")
        assert recording_sink.shown == [(SUCCESS_SUMMARY, "Served a file", True)]

    def test_failure(self, recording_sink):
        Notifier(recording_sink).failure("Bad token")
        assert recording_sink.shown == [(ERROR_SUMMARY, "Bad token", False)]

    def test_summaries(self):
        assert SUCCESS_SUMMARY == "AirDropPro Success"
        assert ERROR_SUMMARY == "AirDropPro Error"

    def test_disabled(self, recording_sink):
        notifier = Notifier(recording_sink, enabled=False)
        notifier.success("x")
        notifier.failure("y")
        assert recording_sink.shown == []

    def test_sink_failure_is_swallowed(self):
        notifier = Notifier(ExplodingSink())
        notifier.success("x")
        notifier.failure("y")

    def test_default_sink_logs_only(self):
        Notifier().success("x")


class TestCallbackNotifier:

    def test_forwards_arguments(self):
        calls = []
        CallbackNotifier(lambda *args: calls.append(args)).show("s", "b", False)
        assert calls == [("s", "b", False)]
