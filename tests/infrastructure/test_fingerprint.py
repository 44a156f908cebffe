"""Tests for content fingerprints."""

from __future__ import annotations

from pathlib import Path

import pytest

from mtactl.domain.errors import ReadFailedError
from mtactl.infrastructure.fingerprint import ABSENT_TOKEN, Fingerprint, checksum, fingerprint


class TestFingerprint:
    def test_missing_file(self, tmp_path: Path) -> None:
        assert fingerprint(tmp_path / "nope.yaml") == Fingerprint(token=0, exists=False)

    def test_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "mta.yaml"
        path.write_bytes(b"id: a\n")
        fp = fingerprint(path)
        assert fp.exists is True
        assert fp.token == checksum(b"id: a\n")

    def test_identical_content_same_token(self, tmp_path: Path) -> None:
        a = tmp_path / "a.yaml"
        b = tmp_path / "b.yaml"
        a.write_bytes(b"id: x\nversion: '1'\n")
        b.write_bytes(b"id: x\nversion: '1'\n")
        assert fingerprint(a).token == fingerprint(b).token
        assert fingerprint(a) == fingerprint(a)

    def test_single_byte_change(self, tmp_path: Path) -> None:
        path = tmp_path / "mta.yaml"
        path.write_bytes(b"id: x\n")
        before = fingerprint(path).token
        path.write_bytes(b"id: y\n")
        assert fingerprint(path).token != before

    def test_empty_file_differs_from_absent(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_bytes(b"")
        fp = fingerprint(path)
        assert fp.exists is True
        assert fp.token != ABSENT_TOKEN

    def test_unreadable_path(self, tmp_path: Path) -> None:
        with pytest.raises(ReadFailedError):
            fingerprint(tmp_path)
