"""Global name-uniqueness rule for manifests.

Module names, provided-service names, and resource names share a single
namespace.  The validator walks modules (each followed by its provided
services) and then resources, in document order, and reports every name
that was already claimed.

INVARIANT: The first occurrence of a name owns it.  Collisions are reported
against the first claimant's kind and never overwrite it.
"""

from __future__ import annotations

from pydantic import BaseModel

from mtactl.domain.manifest import Manifest

MODULE = "module"
PROVIDED_SERVICE = "provided service"
RESOURCE = "resource"


class ValidationIssue(BaseModel):
    """A non-fatal finding reported by a validator."""

    model_config = {"frozen": True}

    name: str
    kind: str
    previous_kind: str
    message: str


def validate_name_uniqueness(manifest: Manifest) -> list[ValidationIssue]:
    """Return one issue per name that repeats across the shared namespace.

    Pure: *manifest* is never modified and all collisions are returned.
    """
    issues: list[ValidationIssue] = []
    # name -> kind of the entity that first claimed it
    names: dict[str, str] = {}
    for module in manifest.modules:
        _claim(names, module.name, MODULE, issues)
        for provide in module.provides:
            _claim(names, provide.name, PROVIDED_SERVICE, issues)
    for resource in manifest.resources:
        _claim(names, resource.name, RESOURCE, issues)
    return issues


def _claim(names: dict[str, str], name: str, kind: str, issues: list[ValidationIssue]) -> None:
    previous_kind = names.get(name)
    if previous_kind is None:
        names[name] = kind
        return
    issues.append(
        ValidationIssue(
            name=name,
            kind=kind,
            previous_kind=previous_kind,
            message=(
                f'the "{name}" {kind} name is not unique; '
                f"a {previous_kind} was found with the same name"
            ),
        )
    )
