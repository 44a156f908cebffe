"""ManifestService — ServiceResult facade over manifest operations.

Pipeline for mutating commands: LOCK → VERIFY → EDIT → RESPOND
(see :mod:`mtactl.services.mutation`).  Read-only commands skip the lock.

Errors raised by the core are converted to failed results here and nowhere
else; nothing is retried.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING

from mtactl.domain.errors import MtaError
from mtactl.domain.uniqueness import validate_name_uniqueness
from mtactl.infrastructure.fingerprint import fingerprint
from mtactl.services import operations
from mtactl.services.mutation import modify_manifest
from mtactl.services.result import ServiceError, ServiceResult, error_result

if TYPE_CHECKING:
    from mtactl.config.models import MutationConfig

logger = logging.getLogger(__name__)


class ManifestService:
    """Create, extend, inspect, and validate MTA manifests.

    Args:
        mutation: Lock file name and the default fingerprint policy.
    """

    def __init__(self, mutation: MutationConfig) -> None:
        self._mutation = mutation

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, path: Path, descriptor_json: str) -> ServiceResult:
        """Create a manifest file from a JSON descriptor."""
        op = "create"
        try:
            manifest = operations.create_manifest(path, descriptor_json)
        except MtaError as exc:
            return error_result(op, exc, path=str(path))
        return ServiceResult(ok=True, op=op, data={"path": str(path), "id": manifest.id})

    def add_module(
        self,
        path: Path,
        module_json: str,
        *,
        hashcode: int,
        enforce_check: bool | None = None,
    ) -> ServiceResult:
        """Append a module under the lock, verifying *hashcode* first."""
        edit = partial(operations.add_module, path, module_json)
        return self._mutate("add_module", path, edit, hashcode, enforce_check)

    def add_resource(
        self,
        path: Path,
        resource_json: str,
        *,
        hashcode: int,
        enforce_check: bool | None = None,
    ) -> ServiceResult:
        """Append a resource under the lock, verifying *hashcode* first."""
        edit = partial(operations.add_resource, path, resource_json)
        return self._mutate("add_resource", path, edit, hashcode, enforce_check)

    def copy(self, src: Path, dst: Path) -> ServiceResult:
        """Copy a manifest file byte for byte."""
        op = "copy"
        try:
            operations.copy_file(src, dst)
        except MtaError as exc:
            return error_result(op, exc, source=str(src), target=str(dst))
        return ServiceResult(ok=True, op=op, data={"source": str(src), "target": str(dst)})

    def delete(self, path: Path) -> ServiceResult:
        """Delete a manifest file."""
        op = "delete"
        try:
            operations.delete_file(path)
        except MtaError as exc:
            return error_result(op, exc, path=str(path))
        return ServiceResult(ok=True, op=op, data={"path": str(path)})

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_modules(self, path: Path) -> ServiceResult:
        """List the manifest's modules."""
        return self._read_entities("get_modules", "modules", path, operations.get_modules)

    def get_resources(self, path: Path) -> ServiceResult:
        """List the manifest's resources."""
        return self._read_entities("get_resources", "resources", path, operations.get_resources)

    def hash(self, path: Path) -> ServiceResult:
        """Report the fingerprint token to pass back on the next mutation."""
        op = "hash"
        try:
            current = fingerprint(path)
        except MtaError as exc:
            return error_result(op, exc, path=str(path))
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(path), "hashcode": current.token, "exists": current.exists},
        )

    def validate(self, path: Path, *, strict: bool = False) -> ServiceResult:
        """Check global name uniqueness.

        Issues are reported as warnings; with *strict* any issue fails the
        result.
        """
        op = "validate"
        try:
            manifest = operations.load_manifest(path)
        except MtaError as exc:
            return error_result(op, exc, path=str(path))

        issues = validate_name_uniqueness(manifest)
        messages = [issue.message for issue in issues]
        data = {
            "path": str(path),
            "issues": [issue.model_dump() for issue in issues],
            "count": len(issues),
        }
        if strict and issues:
            return ServiceResult(
                ok=False,
                op=op,
                data=data,
                error=ServiceError(
                    code="VALIDATION_FAILED",
                    message=f"{len(issues)} validation issue(s): " + "; ".join(messages),
                    detail={"path": str(path)},
                ),
            )
        return ServiceResult(ok=True, op=op, data=data, warnings=messages)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _mutate(
        self,
        op: str,
        path: Path,
        edit: Callable[[], object],
        hashcode: int,
        enforce_check: bool | None,
    ) -> ServiceResult:
        if enforce_check is None:
            enforce_check = self._mutation.enforce_check
        try:
            modify_manifest(
                path,
                edit,
                hashcode,
                enforce_check=enforce_check,
                lock_filename=self._mutation.lock_filename,
            )
            current = fingerprint(path)
        except MtaError as exc:
            logger.debug("%s failed for %s: %s", op, path, exc)
            return error_result(op, exc, path=str(path))
        return ServiceResult(ok=True, op=op, data={"path": str(path), "hashcode": current.token})

    def _read_entities(
        self,
        op: str,
        key: str,
        path: Path,
        reader: Callable[[Path], bytes],
    ) -> ServiceResult:
        try:
            raw = reader(path)
        except MtaError as exc:
            return error_result(op, exc, path=str(path))
        entities = json.loads(raw)
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(path), "count": len(entities), key: entities},
        )
