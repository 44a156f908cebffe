"""Sentinel file lock guarding manifest modification.

The lock lives in a fixed-name file beside the manifest, never on the
manifest itself, so readers that bypass the mutation pipeline are not
affected.  Acquisition is a single non-blocking attempt: a held lock fails
immediately and retrying is the caller's business.

The sentinel file is left behind after release and is safely reused.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

from filelock import FileLock, Timeout

from mtactl.domain.errors import LockHeldError, WriteFailedError

logger = logging.getLogger(__name__)

LOCK_FILENAME = "mta-lock.lock"


def lock_path_for(path: Path, lock_filename: str = LOCK_FILENAME) -> Path:
    """Return the sentinel lock path protecting the manifest at *path*."""
    return path.parent / lock_filename


class ManifestLock:
    """Exclusive, attempt-once lock for one manifest path.

    Usage::

        with ManifestLock(path):
            ...  # read, modify, and rewrite the manifest
    """

    def __init__(self, path: Path, *, lock_filename: str = LOCK_FILENAME) -> None:
        self.path = path
        self.lock_path = lock_path_for(path, lock_filename)
        self._lock = FileLock(str(self.lock_path))

    @property
    def is_held(self) -> bool:
        """Whether this instance currently holds the lock."""
        return self._lock.is_locked

    def acquire(self) -> None:
        """Take the lock or fail at once.

        Raises:
            LockHeldError: If any other holder owns the lock.
            WriteFailedError: If the sentinel file cannot be opened.
        """
        try:
            self._lock.acquire(blocking=False)
        except Timeout as exc:
            raise LockHeldError(self.path) from exc
        except OSError as exc:
            msg = f'could not open the "{self.lock_path}" lock file: {exc}'
            raise WriteFailedError(msg) from exc
        logger.debug("Acquired lock %s for %s", self.lock_path, self.path)

    def release(self) -> None:
        """Release the lock. Safe to call when not held."""
        if not self._lock.is_locked:
            return
        self._lock.release(force=True)
        logger.debug("Released lock %s for %s", self.lock_path, self.path)

    def __enter__(self) -> ManifestLock:
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
