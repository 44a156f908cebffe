"""Filesystem primitives for manifest files.

INVARIANT: A manifest is only ever replaced whole.  Writes go to a sibling
temporary file that is renamed over the target, so readers observe either
the old bytes or the new bytes and never a partial write.

The directory-maker and file-creator are plain callables so that callers
higher up can accept substitutes (tests inject failing variants).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from mtactl.domain.errors import ManifestNotFoundError, ReadFailedError, WriteFailedError

logger = logging.getLogger(__name__)

MakeDirs = Callable[[Path], None]
CreateFile = Callable[[Path], BinaryIO]


def make_dirs(path: Path) -> None:
    """Create *path* and any missing parents."""
    path.mkdir(parents=True, exist_ok=True)


def create_file(path: Path) -> BinaryIO:
    """Open *path* for binary writing, truncating any existing content."""
    return path.open("wb")


def read_file(path: Path) -> bytes:
    """Return the full byte content of *path*.

    Raises:
        ManifestNotFoundError: If *path* does not exist.
        ReadFailedError: On any other I/O failure.
    """
    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        raise ManifestNotFoundError(path) from exc
    except OSError as exc:
        msg = f'could not read the "{path}" file: {exc}'
        raise ReadFailedError(msg) from exc


def atomic_write(path: Path, content: bytes, *, create: CreateFile = create_file) -> None:
    """Replace *path* with *content* via a temporary sibling file.

    On failure the temporary file is removed and *path* is left untouched.

    Raises:
        WriteFailedError: If the temporary file cannot be created, written,
            or renamed over *path*.
    """
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        with create(tmp) as fh:
            fh.write(content)
        os.replace(tmp, path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        msg = f'could not write the "{path}" file: {exc}'
        raise WriteFailedError(msg) from exc
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d bytes to %s", len(content), path)


def ensure_parent(path: Path, *, mkdirs: MakeDirs = make_dirs) -> None:
    """Make sure the directory that will hold *path* exists.

    Raises:
        WriteFailedError: If the directory cannot be created.
    """
    try:
        mkdirs(path.parent)
    except OSError as exc:
        msg = f'could not create the "{path.parent}" folder: {exc}'
        raise WriteFailedError(msg) from exc


def remove_file(path: Path) -> None:
    """Delete *path*.

    Raises:
        ManifestNotFoundError: If *path* does not exist.
        WriteFailedError: If the file exists but cannot be removed.
    """
    try:
        path.unlink()
    except FileNotFoundError as exc:
        raise ManifestNotFoundError(path) from exc
    except OSError as exc:
        msg = f'could not delete the "{path}" file: {exc}'
        raise WriteFailedError(msg) from exc
    logger.debug("Deleted %s", path)
