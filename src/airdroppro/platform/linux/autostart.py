"""
Linux login item via an XDG autostart entry
"""
import os
import shlex
import logging
from pathlib import Path

from airdroppro.platform.base import AutoLaunch

logger = logging.getLogger(__name__)

DESKTOP_TEMPLATE = """\
[Desktop Entry]
Type=Application
Name={name}
Comment=LAN file and clipboard exchange
Exec={exec_line}
Terminal=false
X-GNOME-Autostart-enabled=true
"""


class LinuxAutoLaunch(AutoLaunch):

    def __init__(self, app_args):
        super().__init__(app_args)
        config_dir = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
        self._entry_path = config_dir / "autostart" / f"{self.APP_NAME}.desktop"

    def enable(self) -> None:
        self._entry_path.parent.mkdir(parents=True, exist_ok=True)
        content = DESKTOP_TEMPLATE.format(
            name=self.APP_NAME,
            exec_line=" ".join(shlex.quote(a) for a in self.app_args),
        )
        self._entry_path.write_text(content)
        logger.info(f"Installed autostart entry {self._entry_path}")

    def disable(self) -> None:
        if self._entry_path.exists():
            self._entry_path.unlink()
            logger.info(f"Removed autostart entry {self._entry_path}")

    def is_enabled(self) -> bool:
        return self._entry_path.exists()
