"""
macOS login item via a LaunchAgent
"""
import plistlib
import logging
from pathlib import Path

from airdroppro import config
from airdroppro.platform.base import AutoLaunch

logger = logging.getLogger(__name__)


class MacAutoLaunch(AutoLaunch):

    LABEL = config.APP_ID

    def __init__(self, app_args):
        super().__init__(app_args)
        self._plist_path = Path.home() / "Library" / "LaunchAgents" / f"{self.LABEL}.plist"

    def enable(self) -> None:
        self._plist_path.parent.mkdir(parents=True, exist_ok=True)
        plist = {
            "Label": self.LABEL,
            "ProgramArguments": list(self.app_args),
            "RunAtLoad": True,
        }
        with open(self._plist_path, "wb") as f:
            plistlib.dump(plist, f)
        logger.info(f"Installed LaunchAgent {self._plist_path}")

    def disable(self) -> None:
        if self._plist_path.exists():
            self._plist_path.unlink()
            logger.info(f"Removed LaunchAgent {self._plist_path}")

    def is_enabled(self) -> bool:
        return self._plist_path.exists()
