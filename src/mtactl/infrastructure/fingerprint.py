"""Content fingerprints used as optimistic-concurrency tokens.

A fingerprint is a CRC-32 of the file's full byte content.  It detects
concurrent writes on a best-effort basis and is not a security boundary.
"""

from __future__ import annotations

import zlib
from dataclasses import dataclass
from pathlib import Path

from mtactl.domain.errors import ReadFailedError

# Token reported for a file that does not exist.
ABSENT_TOKEN = 0

# Seeded so an existing empty file never shares the absent token.
_CRC_SEED = 0xFFFFFFFF


@dataclass(frozen=True)
class Fingerprint:
    """Checksum of a file's content at the moment it was observed."""

    token: int
    exists: bool


def checksum(content: bytes) -> int:
    """Return the token for *content*."""
    return zlib.crc32(content, _CRC_SEED)


def fingerprint(path: Path) -> Fingerprint:
    """Fingerprint the current content of *path*.

    A missing file is a normal state: returns ``Fingerprint(0, False)``.

    Raises:
        ReadFailedError: If the file exists but cannot be read.
    """
    try:
        content = path.read_bytes()
    except FileNotFoundError:
        return Fingerprint(token=ABSENT_TOKEN, exists=False)
    except OSError as exc:
        msg = f'could not read the "{path}" file: {exc}'
        raise ReadFailedError(msg) from exc
    return Fingerprint(token=checksum(content), exists=True)
