"""
Unit tests for main.py - Startup wiring and CLI
"""
import pytest

from airdroppro import main as app_main
from airdroppro.common.clipboard import ClipboardBridge
from airdroppro.common.errors import ConfigError
from airdroppro.common.notifications import Notifier
from airdroppro.common.user_config import ConfigManager, ServiceConfig


class FakeAdvertiser:

    def __init__(self):
        self.published = []
        self.closed = False

    def publish(self, host_name, port):
        self.published.append((host_name, port))

    def close(self):
        self.closed = True


class TestAirDropService:

    def test_advertises_configured_name_and_port(self, temp_dir, mock_clipboard):
        advertiser = FakeAdvertiser()
        service = app_main.AirDropService(
            ServiceConfig(name="Box", port=9000, root_directory=temp_dir),
            Notifier(),
            bridge=ClipboardBridge(lambda: mock_clipboard),
            advertiser=advertiser,
        )

        service.advertise()

        assert advertiser.published == [("Box", 9000)]

    def test_serve_and_stop(self, temp_dir, mock_clipboard):
        advertiser = FakeAdvertiser()
        service = app_main.AirDropService(
            ServiceConfig(name="Box", port=0, root_directory=temp_dir),
            Notifier(),
            bridge=ClipboardBridge(lambda: mock_clipboard),
            advertiser=advertiser,
        )

        service.server.start(host='127.0.0.1')
        service.stop()

        assert advertiser.closed


class TestLogAndExit:

    def test_exits_with_status_one(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            app_main.log_and_exit("Failed to load config", ConfigError("bad port"))

        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert "Failed to load config" in out
        assert "config --reset" in out


class TestConfigCommand:

    @pytest.fixture
    def manager(self, temp_dir, monkeypatch):
        path = temp_dir / "config.json"
        monkeypatch.setattr(app_main, "ConfigManager", lambda: ConfigManager(path))
        return ConfigManager(path)

    def run(self, monkeypatch, *argv):
        monkeypatch.setattr("sys.argv", ["airdroppro", *argv])
        app_main.main()

    def test_set_port(self, manager, monkeypatch, capsys):
        self.run(monkeypatch, "config", "--set", "port", "9100")

        assert manager.load().port == 9100
        assert "[OK] Set port = 9100" in capsys.readouterr().out

    def test_set_bool(self, manager, monkeypatch):
        self.run(monkeypatch, "config", "--set", "show_notifications", "off")
        assert manager.load().show_notifications is False

    def test_set_invalid(self, manager, monkeypatch):
        with pytest.raises(SystemExit):
            self.run(monkeypatch, "config", "--set", "port", "99999")
        assert manager.load().port == 8080

    def test_reset(self, manager, monkeypatch, capsys):
        self.run(monkeypatch, "config", "--set", "port", "9100")
        self.run(monkeypatch, "config", "--reset")
        assert manager.load().port == 8080
