"""Mutation pipeline — LOCK → VERIFY → EDIT → RELEASE.

The sentinel lock answers "is anyone else writing right now"; the content
fingerprint answers "has the file changed since I decided what to write".
Together they let independent CLI invocations detect lost updates without
versioning metadata inside the manifest itself.

INVARIANT: The edit closure only runs while the lock is held and, when
``enforce_check`` is set, only after the fingerprint has been re-verified.
The lock is released on every exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from mtactl.domain.errors import ConcurrentModificationError
from mtactl.infrastructure.fingerprint import fingerprint
from mtactl.infrastructure.lock import LOCK_FILENAME, ManifestLock

logger = logging.getLogger(__name__)


def modify_manifest(
    path: Path,
    edit: Callable[[], object],
    expected_token: int,
    *,
    enforce_check: bool,
    lock_filename: str = LOCK_FILENAME,
) -> None:
    """Run *edit* against the manifest at *path* under the sentinel lock.

    Args:
        path: Manifest being modified.
        edit: Self-contained closure that reads, modifies, and rewrites
            *path*. Its return value is ignored; its exceptions propagate.
        expected_token: Fingerprint token the caller observed earlier.
        enforce_check: Reject the edit when the current fingerprint no
            longer matches *expected_token*.
        lock_filename: Name of the sentinel file beside *path*.

    Raises:
        LockHeldError: Another holder owns the lock; *edit* did not run.
        ConcurrentModificationError: The file changed since *expected_token*
            was taken; *edit* did not run.
    """
    with ManifestLock(path, lock_filename=lock_filename):
        if enforce_check:
            current = fingerprint(path)
            if current.token != expected_token:
                logger.debug(
                    "Fingerprint mismatch for %s: expected %d, found %d",
                    path,
                    expected_token,
                    current.token,
                )
                raise ConcurrentModificationError(
                    path, expected=expected_token, actual=current.token
                )
        edit()
