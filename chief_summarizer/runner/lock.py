"""
Single-instance process lock.

Holds an exclusive, non-blocking lock on a file in the system temp
directory for the lifetime of a run. The owning PID is written into the
file so a second instance can say who holds it. The file itself is left in
place on release; deleting it would race with a concurrent acquirer.
"""
import os
import logging
import tempfile
from pathlib import Path
from typing import Optional

from ..config import LOCK_FILE_NAME
from ..errors import LockError

if os.name == "nt":
    import msvcrt
else:
    import fcntl

logger = logging.getLogger(__name__)


def default_lock_path() -> Path:
    return Path(tempfile.gettempdir()) / LOCK_FILE_NAME


def _pid_alive(pid: int) -> bool:
    if os.name == "nt":
        # No cheap liveness probe; assume the recorded owner is running
        return True
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


class ProcessLock:
    """
    Example:
        with ProcessLock():
            run_summarization(settings)
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else default_lock_path()
        self._file = None

    def acquire(self) -> None:
        """
        Raises:
            LockError: If the lock file cannot be opened or another instance holds it
        """
        try:
            handle = open(self.path, "a+")
        except OSError as e:
            raise LockError(f"failed to create lock file: {e}") from e

        try:
            if os.name == "nt":
                handle.seek(0)
                msvcrt.locking(handle.fileno(), msvcrt.LK_NBLCK, 1)
            else:
                fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError:
            handle.close()
            raise LockError(self._holder_message()) from None

        handle.seek(0)
        handle.truncate()
        handle.write(f"{os.getpid()}\n")
        handle.flush()
        self._file = handle
        logger.debug(f"[LOCK] acquired {self.path} | pid={os.getpid()}")

    def _holder_message(self) -> str:
        try:
            pid = int(self.path.read_text().strip())
        except (OSError, ValueError):
            return "another instance is already running"
        if _pid_alive(pid):
            return f"another instance is already running (PID: {pid})"
        return "another instance is already running"

    def release(self) -> None:
        if self._file is None:
            return
        try:
            if os.name == "nt":
                self._file.seek(0)
                msvcrt.locking(self._file.fileno(), msvcrt.LK_UNLCK, 1)
            else:
                fcntl.flock(self._file.fileno(), fcntl.LOCK_UN)
        finally:
            self._file.close()
            self._file = None
            logger.debug(f"[LOCK] released {self.path}")

    def __enter__(self) -> "ProcessLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False
