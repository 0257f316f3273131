"""
User Configuration Management

Manages user-editable settings stored in a JSON file, and turns them into
the immutable ServiceConfig handed to the advertiser and the server.
"""
import json
import os
import socket
import logging
import subprocess
import sys
from pathlib import Path
from typing import Any, List, Optional
from dataclasses import dataclass, asdict

from airdroppro import config
from .errors import ConfigError

logger = logging.getLogger(__name__)

MAX_PORT = 65535

# download_path aliases -> (XDG user-dirs key, fallback folder under home)
STANDARD_DIRS = {
    "video": ("VIDEOS", "Videos"),
    "picture": ("PICTURES", "Pictures"),
    "desktop": ("DESKTOP", "Desktop"),
    "download": ("DOWNLOAD", "Downloads"),
    "document": ("DOCUMENTS", "Documents"),
}


@dataclass(frozen=True)
class ServiceConfig:
    """Settings the running service needs. Built once at startup."""
    name: str
    port: int
    root_directory: Path


@dataclass
class AppSettings:
    """User settings as stored in config.json"""

    name: str = ""  # empty means the machine host name
    port: int = config.DEFAULT_PORT
    download_path: str = "download"

    show_notifications: bool = True
    autostart: bool = False

    def __post_init__(self):
        if not self.name:
            self.name = socket.gethostname()

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the settings are usable"""
        errors = []

        if not isinstance(self.name, str) or not self.name.strip():
            errors.append("name must be a non-empty string")

        if isinstance(self.port, bool) or not isinstance(self.port, int):
            errors.append(f"port must be an integer, got {self.port!r}")
        elif not 0 <= self.port <= MAX_PORT:
            errors.append(f"port must be between 0 and {MAX_PORT}, got {self.port}")

        if not isinstance(self.download_path, str) or not self.download_path.strip():
            errors.append("download_path must be a non-empty string")

        for key in ("show_notifications", "autostart"):
            if not isinstance(getattr(self, key), bool):
                errors.append(f"{key} must be true or false")

        return errors

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'AppSettings':
        """Create settings from dict, using defaults for missing keys"""
        settings = cls()
        for key, value in data.items():
            if hasattr(settings, key):
                setattr(settings, key, value)
        return settings

    def to_service_config(self) -> ServiceConfig:
        """Resolve the download directory and freeze the settings."""
        root = resolve_base_directory(self.download_path)
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"Failed to create download path {root}") from e

        return ServiceConfig(name=self.name, port=self.port, root_directory=root)


def _xdg_user_dir(key: str) -> Optional[Path]:
    """Ask xdg-user-dir for a standard folder (Linux only)"""
    try:
        output = subprocess.check_output(
            ['xdg-user-dir', key], text=True, timeout=5, stderr=subprocess.DEVNULL
        ).strip()
    except (subprocess.SubprocessError, FileNotFoundError):
        return None
    # xdg-user-dir echoes $HOME when the key is not configured
    if output and Path(output) != Path.home():
        return Path(output)
    return None


def resolve_base_directory(dir_name: str) -> Path:
    """
    Map a download_path value to a directory.

    'video', 'picture', 'desktop', 'download' and 'document' name the
    user's standard folders; anything else is taken as a literal path.
    """
    alias = STANDARD_DIRS.get(dir_name)
    if alias is None:
        return Path(dir_name).expanduser()

    xdg_key, folder = alias
    if sys.platform.startswith('linux'):
        found = _xdg_user_dir(xdg_key)
        if found:
            return found

    if sys.platform == 'win32':
        home = Path(os.environ.get('USERPROFILE', Path.home()))
    else:
        home = Path.home()
    return home / folder


class ConfigManager:
    """Loads, saves and edits the settings file"""

    def __init__(self, config_path: Path = None):
        self.path = config_path or config.get_config_file()
        self._settings: Optional[AppSettings] = None

    def load(self) -> AppSettings:
        """
        Load settings from file, writing defaults when it does not exist.

        Raises:
            ConfigError: if the file cannot be read or holds invalid values
        """
        if not self.path.exists():
            logger.info(f"No config file found, writing defaults to {self.path}")
            self._settings = AppSettings()
            self.save()
            return self._settings

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Failed to load config file from {self.path}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {self.path} must contain a JSON object")

        settings = AppSettings.from_dict(data)
        errors = settings.validate()
        if errors:
            raise ConfigError(f"Invalid config in {self.path}: {'; '.join(errors)}")

        logger.info(f"Loaded config from {self.path}")
        self._settings = settings
        return settings

    def save(self) -> bool:
        """Save settings to file"""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(self._settings.to_dict(), f, indent=2)
            logger.info(f"Saved config to {self.path}")
            return True
        except OSError as e:
            logger.error(f"Failed to save config: {e}")
            return False

    def get(self) -> AppSettings:
        """Get current settings"""
        if self._settings is None:
            self.load()
        return self._settings

    def set(self, key: str, value: Any) -> bool:
        """Set a value; rejected when the key is unknown or the value invalid"""
        settings = self.get()
        if key not in settings.to_dict():
            logger.error(f"Unknown config key: {key}")
            return False

        updated = AppSettings.from_dict({**settings.to_dict(), key: value})
        errors = updated.validate()
        if errors:
            logger.error(f"Invalid value for {key}: {'; '.join(errors)}")
            return False

        self._settings = updated
        return self.save()

    def reset(self) -> AppSettings:
        """Reset to default settings"""
        self._settings = AppSettings()
        self.save()
        return self._settings


def print_config(manager: ConfigManager):
    """Print current configuration in a readable format"""
    settings = manager.get()

    print("\n" + "=" * 50)
    print("  AirDropPro - Configuration")
    print("=" * 50)

    print("\n  Server:")
    print(f"    Name:          {settings.name}")
    print(f"    Port:          {settings.port}")

    print("\n  Application:")
    print(f"    Download Path: {settings.download_path}")
    print(f"    Resolves To:   {resolve_base_directory(settings.download_path)}")
    print(f"    Notifications: {'ON' if settings.show_notifications else 'OFF'}")
    print(f"    Autostart:     {'ON' if settings.autostart else 'OFF'}")

    print(f"\n  Config File: {manager.path}")
    print("=" * 50 + "\n")
