"""
Windows login item via the HKCU Run key
"""
import logging
import subprocess

import winreg

from airdroppro.platform.base import AutoLaunch

logger = logging.getLogger(__name__)

RUN_KEY = r"Software\Microsoft\Windows\CurrentVersion\Run"


class WindowsAutoLaunch(AutoLaunch):

    def _command_line(self) -> str:
        return subprocess.list2cmdline(self.app_args)

    def enable(self) -> None:
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, RUN_KEY, 0, winreg.KEY_SET_VALUE) as key:
            winreg.SetValueEx(key, self.APP_NAME, 0, winreg.REG_SZ, self._command_line())
        logger.info("Registered autostart in HKCU Run key")

    def disable(self) -> None:
        try:
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, RUN_KEY, 0, winreg.KEY_SET_VALUE) as key:
                winreg.DeleteValue(key, self.APP_NAME)
            logger.info("Removed autostart from HKCU Run key")
        except FileNotFoundError:
            pass

    def is_enabled(self) -> bool:
        try:
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, RUN_KEY, 0, winreg.KEY_READ) as key:
                winreg.QueryValueEx(key, self.APP_NAME)
            return True
        except FileNotFoundError:
            return False
