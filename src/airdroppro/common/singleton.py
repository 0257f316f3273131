"""
Singleton lock to ensure only one AirDropPro runs per user session.

Uses an OS file lock (fcntl on Unix, msvcrt on Windows) on a lock file in
the temp directory; the holder's PID is written to a side .pid file so a
second instance can report who is running.
"""
import os
import logging
from pathlib import Path
from typing import Optional

from airdroppro import config

logger = logging.getLogger(__name__)


class SingletonLock:
    """
    Usage:
        lock = SingletonLock()
        if not lock.acquire():
            print(f"Already running (PID {lock.get_existing_pid()})")
            sys.exit(1)
        ...
        lock.release()
    """

    def __init__(self, app_name: str = config.APP_NAME, lock_dir: Path = None):
        lock_dir = lock_dir or config.TEMP_DIR
        self._lock_file = lock_dir / f"{app_name}.lock"
        self._pid_file = lock_dir / f"{app_name}.pid"
        self._lock_fd = None

    @property
    def acquired(self) -> bool:
        return self._lock_fd is not None

    def acquire(self) -> bool:
        """
        Try to acquire the lock.

        Returns:
            True if acquired, False if another instance holds it
        """
        if self.acquired:
            return True

        fd = open(self._lock_file, 'a+')
        try:
            if os.name == 'nt':
                import msvcrt
                fd.seek(0)
                msvcrt.locking(fd.fileno(), msvcrt.LK_NBLCK, 1)
            else:
                import fcntl
                fcntl.flock(fd.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError:
            fd.close()
            logger.warning(f"Another instance (PID {self.get_existing_pid()}) is already running")
            return False

        self._lock_fd = fd
        try:
            self._pid_file.write_text(str(os.getpid()))
        except OSError as e:
            logger.debug(f"Could not write .pid file: {e}")

        logger.debug(f"Acquired singleton lock (PID {os.getpid()})")
        return True

    def release(self):
        """Release the lock and remove the PID file."""
        if not self.acquired:
            return

        if os.name == 'nt':
            import msvcrt
            self._lock_fd.seek(0)
            try:
                msvcrt.locking(self._lock_fd.fileno(), msvcrt.LK_UNLCK, 1)
            except OSError:
                pass
        else:
            import fcntl
            fcntl.flock(self._lock_fd.fileno(), fcntl.LOCK_UN)

        self._lock_fd.close()
        self._lock_fd = None

        for path in (self._pid_file, self._lock_file):
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.debug(f"Could not remove {path}: {e}")

        logger.debug("Released singleton lock")

    def get_existing_pid(self) -> Optional[int]:
        """PID recorded by the running instance, if readable."""
        try:
            content = self._pid_file.read_text().strip()
            return int(content) if content else None
        except (OSError, ValueError):
            return None

    def __enter__(self):
        if not self.acquire():
            raise RuntimeError("Another instance is already running")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False
