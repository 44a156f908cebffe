"""Error taxonomy for manifest operations.

Every failure raised by the domain, infrastructure, and service layers is an
:class:`MtaError`. The ``code`` class attribute is the stable identifier the
service layer copies into :class:`~mtactl.services.result.ServiceError`.

Validation issues are *not* errors — see :mod:`mtactl.domain.uniqueness`.
"""

from __future__ import annotations

from pathlib import Path


class MtaError(Exception):
    """Base class for all manifest operation failures."""

    code: str = "MTA_ERROR"


class ManifestNotFoundError(MtaError):
    """The file an operation reads from does not exist."""

    code = "NOT_FOUND"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f'the "{path}" file does not exist')


class MalformedInputError(MtaError):
    """A caller-supplied JSON fragment is invalid or has the wrong shape."""

    code = "MALFORMED_INPUT"


class MalformedDocumentError(MtaError):
    """The manifest body cannot be parsed into a manifest."""

    code = "MALFORMED_DOCUMENT"


class LockHeldError(MtaError):
    """The sentinel lock for a manifest is held by another holder."""

    code = "LOCK_HELD"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f'failed to lock the "{path}" file for modification')


class ConcurrentModificationError(MtaError):
    """The manifest changed since the caller took its fingerprint."""

    code = "CONCURRENT_MODIFICATION"

    def __init__(self, path: Path, *, expected: int, actual: int) -> None:
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'the "{path}" file was modified by another process '
            f"(expected hashcode {expected}, found {actual})"
        )


class SerializationError(MtaError):
    """A manifest or entity list could not be encoded."""

    code = "SERIALIZATION_FAILED"


class WriteFailedError(MtaError):
    """Creating a directory, writing, or removing a file failed."""

    code = "WRITE_FAILED"


class ReadFailedError(MtaError):
    """An existing file could not be read."""

    code = "READ_FAILED"
