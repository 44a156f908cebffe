"""Manifest entity operations — create, append, read, copy, delete.

Every mutating operation is a full cycle: READ → PARSE → APPEND → SERIALIZE
→ REPLACE.  The in-memory manifest is frozen, so edits build a new copy and
the stored file is only ever rewritten whole.

These functions are the edit closures handed to
:func:`mtactl.services.mutation.modify_manifest`; on their own they take no
lock.  I/O capabilities (``mkdirs``, ``create``, ``serializer``) default to
the production implementations and can be substituted by callers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from mtactl.domain.manifest import (
    Manifest,
    deserialize_manifest,
    manifest_from_json,
    module_from_json,
    resource_from_json,
    serialize_entities,
    serialize_manifest,
)
from mtactl.infrastructure.filesystem import (
    CreateFile,
    MakeDirs,
    atomic_write,
    create_file,
    ensure_parent,
    make_dirs,
    read_file,
    remove_file,
)

logger = logging.getLogger(__name__)

Serializer = Callable[[Manifest], bytes]


def load_manifest(path: Path) -> Manifest:
    """Read and parse the manifest at *path*.

    Raises:
        ManifestNotFoundError: If *path* does not exist.
        MalformedDocumentError: If the content is not a valid manifest.
    """
    return deserialize_manifest(read_file(path))


def write_manifest(
    path: Path,
    manifest: Manifest,
    *,
    serializer: Serializer = serialize_manifest,
) -> None:
    """Serialize *manifest* and replace the file at *path* with it."""
    atomic_write(path, serializer(manifest))


def create_manifest(
    path: Path,
    descriptor_json: str | bytes,
    *,
    mkdirs: MakeDirs = make_dirs,
    serializer: Serializer = serialize_manifest,
) -> Manifest:
    """Create a new manifest file at *path* from a JSON descriptor.

    The parent directory is created when missing.

    Raises:
        MalformedInputError: If *descriptor_json* is not a valid manifest.
        WriteFailedError: If the directory or file cannot be created.
        SerializationError: If the manifest cannot be encoded.
    """
    manifest = manifest_from_json(descriptor_json)
    ensure_parent(path, mkdirs=mkdirs)
    write_manifest(path, manifest, serializer=serializer)
    logger.debug("Created manifest %s (id=%s)", path, manifest.id)
    return manifest


def add_module(
    path: Path,
    module_json: str | bytes,
    *,
    serializer: Serializer = serialize_manifest,
) -> Manifest:
    """Append the module described by *module_json* to the manifest at *path*."""
    manifest = load_manifest(path)
    module = module_from_json(module_json)
    updated = manifest.model_copy(update={"modules": [*manifest.modules, module]})
    write_manifest(path, updated, serializer=serializer)
    logger.debug("Added module %r to %s", module.name, path)
    return updated


def add_resource(
    path: Path,
    resource_json: str | bytes,
    *,
    serializer: Serializer = serialize_manifest,
) -> Manifest:
    """Append the resource described by *resource_json* to the manifest at *path*."""
    manifest = load_manifest(path)
    resource = resource_from_json(resource_json)
    updated = manifest.model_copy(update={"resources": [*manifest.resources, resource]})
    write_manifest(path, updated, serializer=serializer)
    logger.debug("Added resource %r to %s", resource.name, path)
    return updated


def get_modules(path: Path) -> bytes:
    """Return the manifest's modules as a JSON array."""
    return serialize_entities(load_manifest(path).modules)


def get_resources(path: Path) -> bytes:
    """Return the manifest's resources as a JSON array."""
    return serialize_entities(load_manifest(path).resources)


def copy_file(src: Path, dst: Path, *, create: CreateFile = create_file) -> None:
    """Copy the bytes of *src* into *dst*.

    No partial file is left at *dst* if the copy fails.

    Raises:
        ManifestNotFoundError: If *src* does not exist.
        ReadFailedError: If *src* cannot be read.
        WriteFailedError: If *dst* cannot be created or written.
    """
    atomic_write(dst, read_file(src), create=create)
    logger.debug("Copied %s to %s", src, dst)


def delete_file(path: Path) -> None:
    """Remove the file at *path*.

    Raises:
        ManifestNotFoundError: If *path* does not exist.
        WriteFailedError: If the file cannot be removed.
    """
    remove_file(path)
