"""
Unit tests for autostart - Start on login
"""
import sys
import plistlib

import pytest

from airdroppro import config
from airdroppro.common import autostart
from airdroppro.common.autostart import get_app_args, set_auto_startup
from airdroppro.platform.base import AutoLaunch
from airdroppro.platform.linux.autostart import LinuxAutoLaunch
from airdroppro.platform.macos.autostart import MacAutoLaunch


class FakeLauncher(AutoLaunch):

    def __init__(self, enabled=False):
        super().__init__(["airdroppro", "start"])
        self.enabled = enabled
        self.calls = []

    def enable(self):
        self.calls.append("enable")
        self.enabled = True

    def disable(self):
        self.calls.append("disable")
        self.enabled = False

    def is_enabled(self):
        return self.enabled


class TestSetAutoStartup:
    """The OS is only touched when the wanted state differs"""

    def test_enable_when_disabled(self):
        launcher = FakeLauncher(enabled=False)
        assert set_auto_startup(True, launcher) is True
        assert launcher.calls == ["enable"]

    def test_disable_when_enabled(self):
        launcher = FakeLauncher(enabled=True)
        assert set_auto_startup(False, launcher) is True
        assert launcher.calls == ["disable"]

    def test_enable_when_already_enabled(self):
        launcher = FakeLauncher(enabled=True)
        assert set_auto_startup(True, launcher) is False
        assert launcher.calls == []

    def test_disable_when_already_disabled(self):
        launcher = FakeLauncher(enabled=False)
        assert set_auto_startup(False, launcher) is False
        assert launcher.calls == []


class TestGetAppArgs:

    def test_installed_script(self, monkeypatch):
        monkeypatch.setattr(autostart.shutil, "which", lambda name: "/usr/bin/airdroppro")
        assert get_app_args() == ["/usr/bin/airdroppro", "start"]

    def test_module_fallback(self, monkeypatch):
        monkeypatch.setattr(autostart.shutil, "which", lambda name: None)
        assert get_app_args() == [sys.executable, "-m", "airdroppro", "start"]

    def test_frozen_executable(self, monkeypatch):
        monkeypatch.setattr(sys, "frozen", True, raising=False)
        assert get_app_args() == [sys.executable, "start"]


class TestLinuxAutoLaunch:
    """XDG autostart entry"""

    def test_enable_writes_desktop_entry(self, temp_dir, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir))
        launcher = LinuxAutoLaunch(["/opt/air drop/airdroppro", "start"])

        launcher.enable()

        entry = temp_dir / "autostart" / "AirDropPro.desktop"
        assert launcher.is_enabled()
        content = entry.read_text()
        assert "[Desktop Entry]" in content
        assert "Exec='/opt/air drop/airdroppro' start" in content

    def test_disable_removes_entry(self, temp_dir, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir))
        launcher = LinuxAutoLaunch(["airdroppro", "start"])
        launcher.enable()

        launcher.disable()

        assert not launcher.is_enabled()
        assert not (temp_dir / "autostart" / "AirDropPro.desktop").exists()

    def test_disable_when_missing(self, temp_dir, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir))
        LinuxAutoLaunch(["airdroppro"]).disable()


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX home directory layout")
class TestMacAutoLaunch:
    """LaunchAgent plist"""

    def test_enable_writes_launch_agent(self, temp_dir, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))
        launcher = MacAutoLaunch(["/usr/local/bin/airdroppro", "start"])

        launcher.enable()

        plist_path = temp_dir / "Library" / "LaunchAgents" / "app.airdroppro.desktop.plist"
        with open(plist_path, "rb") as f:
            plist = plistlib.load(f)
        assert plist == {
            "Label": config.APP_ID,
            "ProgramArguments": ["/usr/local/bin/airdroppro", "start"],
            "RunAtLoad": True,
        }
        assert launcher.is_enabled()

    def test_disable_removes_launch_agent(self, temp_dir, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))
        launcher = MacAutoLaunch(["airdroppro"])
        launcher.enable()

        launcher.disable()

        assert not launcher.is_enabled()
