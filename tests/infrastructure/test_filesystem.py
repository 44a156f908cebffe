"""Tests for filesystem primitives — atomic writes, reads, removal."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import BinaryIO

import pytest

from mtactl.domain.errors import ManifestNotFoundError, ReadFailedError, WriteFailedError
from mtactl.infrastructure.filesystem import (
    atomic_write,
    ensure_parent,
    read_file,
    remove_file,
)


def _create_fails(path: Path) -> BinaryIO:
    raise OSError("disk full")


def _mkdirs_fails(path: Path) -> None:
    raise PermissionError("read-only")


class _RejectingHandle(BytesIO):
    def write(self, data: object) -> int:  # type: ignore[override]
        raise TypeError("unsupported payload")


def _create_rejecting(path: Path) -> BinaryIO:
    path.write_bytes(b"")
    return _RejectingHandle()


class TestReadFile:
    def test_reads_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "f"
        path.write_bytes(b"abc")
        assert read_file(path) == b"abc"

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestNotFoundError) as exc_info:
            read_file(tmp_path / "nope")
        assert exc_info.value.code == "NOT_FOUND"

    def test_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ReadFailedError):
            read_file(tmp_path)


class TestAtomicWrite:
    def test_creates_file(self, tmp_path: Path) -> None:
        path = tmp_path / "mta.yaml"
        atomic_write(path, b"id: a\n")
        assert path.read_bytes() == b"id: a\n"

    def test_replaces_whole_content(self, tmp_path: Path) -> None:
        path = tmp_path / "mta.yaml"
        path.write_bytes(b"a much longer original content\n")
        atomic_write(path, b"short\n")
        assert path.read_bytes() == b"short\n"

    def test_no_temp_file_left(self, tmp_path: Path) -> None:
        atomic_write(tmp_path / "mta.yaml", b"x")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["mta.yaml"]

    def test_failure_leaves_target_untouched(self, tmp_path: Path) -> None:
        path = tmp_path / "mta.yaml"
        path.write_bytes(b"original")
        with pytest.raises(WriteFailedError):
            atomic_write(path, b"new", create=_create_fails)
        assert path.read_bytes() == b"original"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["mta.yaml"]

    def test_unexpected_error_removes_temp_file(self, tmp_path: Path) -> None:
        path = tmp_path / "mta.yaml"
        path.write_bytes(b"original")
        with pytest.raises(TypeError):
            atomic_write(path, b"new", create=_create_rejecting)
        assert path.read_bytes() == b"original"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["mta.yaml"]

    def test_missing_parent(self, tmp_path: Path) -> None:
        path = tmp_path / "missing" / "mta.yaml"
        with pytest.raises(WriteFailedError):
            atomic_write(path, b"x")
        assert not path.exists()


class TestEnsureParent:
    def test_creates_nested(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b" / "mta.yaml"
        ensure_parent(path)
        assert path.parent.is_dir()

    def test_failure(self, tmp_path: Path) -> None:
        with pytest.raises(WriteFailedError, match="folder"):
            ensure_parent(tmp_path / "a" / "mta.yaml", mkdirs=_mkdirs_fails)


class TestRemoveFile:
    def test_removes(self, tmp_path: Path) -> None:
        path = tmp_path / "f"
        path.write_bytes(b"x")
        remove_file(path)
        assert not path.exists()

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestNotFoundError):
            remove_file(tmp_path / "nope")

    def test_directory(self, tmp_path: Path) -> None:
        with pytest.raises(WriteFailedError):
            remove_file(tmp_path)
