"""Exclusive lock on a deploy target"""

import fcntl
import logging
import os
import time
from pathlib import Path
from typing import Optional, Union

from ..api.exceptions import DeployLockedError
from ..constants import DEFAULT_LOCK_POLL_INTERVAL

logger = logging.getLogger(__name__)


class DeployLock:
    """``flock`` based lock held for the duration of one deployment run

    Usage::

        with DeployLock(deploy_to / ".deploy.lock"):
            ...
    """

    def __init__(self,
                 path: Union[str, Path],
                 timeout: float = 0.0,
                 poll_interval: float = DEFAULT_LOCK_POLL_INTERVAL):
        """
        Args:
            path: Lock file path
            timeout: Seconds to wait for a busy lock (0 fails immediately)
            poll_interval: Seconds between attempts while waiting
        """
        self.path = Path(path)
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._handle = None

    @property
    def locked(self) -> bool:
        return self._handle is not None

    def acquire(self) -> None:
        """
        Raises:
            DeployLockedError: If another run holds the lock past the timeout
        """
        if self._handle is not None:
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(self.path, "a+")
        deadline = time.monotonic() + max(self.timeout, 0.0)

        while True:
            try:
                fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except BlockingIOError:
                if time.monotonic() >= deadline:
                    handle.close()
                    raise DeployLockedError(str(self.path))
                time.sleep(self.poll_interval)

        handle.seek(0)
        handle.truncate()
        handle.write(str(os.getpid()))
        handle.flush()

        self._handle = handle
        logger.debug(f"Acquired deploy lock {self.path}")

    def release(self) -> None:
        if self._handle is None:
            return

        try:
            fcntl.flock(self._handle.fileno(), fcntl.LOCK_UN)
        finally:
            self._handle.close()
            self._handle = None
        logger.debug(f"Released deploy lock {self.path}")

    def __enter__(self) -> 'DeployLock':
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
