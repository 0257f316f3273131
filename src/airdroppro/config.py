"""
Configuration constants for AirDropPro
"""
import os
import sys
import tempfile
from pathlib import Path

APP_NAME = "AirDropPro"

# Network Settings
DEFAULT_PORT = 8080
BIND_HOST = "0.0.0.0"
CHUNK_SIZE = 64 * 1024  # 64KB chunks when streaming files

# mDNS Advertisement
SERVICE_TYPE = "_http._tcp.local."
SERVICE_INSTANCE = APP_NAME
HOST_SUFFIX = ".local."
IP_RETRY_INTERVAL = 3.0  # seconds between local address lookups

# Clipboard
CLIPBOARD_SETTLE_DELAY = 0.2  # seconds to wait after a clipboard write

# Notifications
APP_ID = "app.airdroppro.desktop"  # LaunchAgent label, desktop file name
NOTIFICATION_TIMEOUT_MS = 5000

# Paths
TEMP_DIR = Path(tempfile.gettempdir())


def get_data_dir() -> Path:
    """Platform-specific directory for user data (config, log).

    Returns a persistent directory that works correctly even when the
    application is packaged with PyInstaller (where __file__ resolves
    to a temporary _MEI* directory).
    """
    if sys.platform == 'win32':
        base = Path(os.environ.get('LOCALAPPDATA', Path.home() / 'AppData' / 'Local'))
    elif sys.platform == 'darwin':
        base = Path.home() / 'Library' / 'Application Support'
    else:
        base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))
    d = base / APP_NAME
    d.mkdir(parents=True, exist_ok=True)
    return d


def get_config_file() -> Path:
    return get_data_dir() / "config.json"


def get_log_file() -> Path:
    return get_data_dir() / "airdroppro.log"
