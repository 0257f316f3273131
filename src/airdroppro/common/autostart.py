"""
Start-on-login registration

The platform managers live in airdroppro.platform; this module decides
which command gets registered and only touches the OS when the wanted
state differs from the current one.
"""
import sys
import shutil
import logging
from typing import List

from airdroppro.platform import get_autolaunch
from airdroppro.platform.base import AutoLaunch

logger = logging.getLogger(__name__)


def get_app_args() -> List[str]:
    """Return the command line that starts AirDropPro.

    Priority:
    1. PyInstaller frozen exe
    2. shutil.which('airdroppro')
    3. sys.executable -m airdroppro (development)
    """
    if getattr(sys, 'frozen', False):
        return [sys.executable, 'start']

    which = shutil.which('airdroppro')
    if which:
        return [which, 'start']

    return [sys.executable, '-m', 'airdroppro', 'start']


def set_auto_startup(status: bool, launcher: AutoLaunch = None) -> bool:
    """
    Enable or disable start on login.

    Returns:
        True if the registration was changed, False if it already matched
    """
    launcher = launcher or get_autolaunch(get_app_args())

    current = launcher.is_enabled()
    if status == current:
        return False

    if status:
        launcher.enable()
    else:
        launcher.disable()
    logger.info(f"Autostart {'enabled' if status else 'disabled'}")
    return True
