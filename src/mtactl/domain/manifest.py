"""Manifest document model — typed MTA descriptor + YAML/JSON codecs.

Model attributes map 1:1 to manifest keys.  Keys whose YAML spelling is not a
valid identifier (``schema-version``) use an alias.  Only JSON fragments
accept the alternative spellings (``ID``, ``schemaVersion``,
``schema_version``); a manifest file is read with its own keys only.

INVARIANT: ``deserialize_manifest(serialize_manifest(m)) == m`` for every
valid manifest ``m``.  Optional ``schema_version`` distinguishes absent
(``None``) from present-but-empty (``""``); both survive the round trip.

Unknown keys are preserved at every level (``extra="allow"``) so a
read-modify-write cycle never drops data written by a newer tool.  A null
collection or text field (``parameters:`` with nothing after it) reads as
empty.

The text of ``id``, ``version`` and ``schema-version`` is kept exactly as
written, so ``version: 1.10`` stays ``"1.10"`` instead of passing through a
float.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from io import StringIO
from typing import Annotated, Any, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    Field,
    ValidationError,
    ValidationInfo,
    model_validator,
)
from pydantic_core import PydanticSerializationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from ruamel.yaml.nodes import MappingNode, ScalarNode

from mtactl.domain.errors import MalformedDocumentError, MalformedInputError, SerializationError

# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


def _null_as_empty_dict(value: Any) -> Any:
    return {} if value is None else value


def _null_as_empty_list(value: Any) -> Any:
    return [] if value is None else value


def _null_as_empty_str(value: Any) -> Any:
    return "" if value is None else value


# A bare ``key:`` in YAML loads as null; these fields read it as empty.
PropertyBag = Annotated[dict[str, Any], BeforeValidator(_null_as_empty_dict)]
Text = Annotated[str, BeforeValidator(_null_as_empty_str)]


class ProvidedService(BaseModel):
    """A named capability exposed by a module (a ``provides`` entry)."""

    model_config = {"frozen": True, "extra": "allow"}

    name: str
    properties: PropertyBag = Field(default_factory=dict)


class RequiredDependency(BaseModel):
    """A module's dependency on a provided service or resource."""

    model_config = {"frozen": True, "extra": "allow"}

    name: str
    properties: PropertyBag = Field(default_factory=dict)
    parameters: PropertyBag = Field(default_factory=dict)


class Module(BaseModel):
    """A deployable unit declared in the manifest."""

    model_config = {"frozen": True, "extra": "allow"}

    name: str
    type: Text = ""
    path: Text = ""
    description: Text = ""
    properties: PropertyBag = Field(default_factory=dict)
    parameters: PropertyBag = Field(default_factory=dict)
    requires: Annotated[list[RequiredDependency], BeforeValidator(_null_as_empty_list)] = Field(
        default_factory=list
    )
    provides: Annotated[list[ProvidedService], BeforeValidator(_null_as_empty_list)] = Field(
        default_factory=list
    )


class Resource(BaseModel):
    """An external dependency declared in the manifest."""

    model_config = {"frozen": True, "extra": "allow"}

    name: str
    type: Text = ""
    description: Text = ""
    properties: PropertyBag = Field(default_factory=dict)
    parameters: PropertyBag = Field(default_factory=dict)


# Extra root-key spellings accepted from JSON fragments only.
_FRAGMENT_SPELLINGS = {
    "ID": "id",
    "schemaVersion": "schema-version",
    "schema_version": "schema-version",
}


class Manifest(BaseModel):
    """Root of an MTA deployment descriptor.

    Attributes:
        schema_version: ``schema-version`` key; ``None`` when absent.
        id: Application identifier, stable across edits.
        version: Application version.
        description: Free-form description.
        parameters: Global key/value parameters.
        modules: Modules in insertion order.
        resources: Resources in insertion order.
    """

    model_config = {
        "frozen": True,
        "extra": "allow",
        "populate_by_name": True,
        "coerce_numbers_to_str": True,
    }

    schema_version: str | None = Field(default=None, alias="schema-version")
    id: str
    version: str
    description: Text = ""
    parameters: PropertyBag = Field(default_factory=dict)
    modules: Annotated[list[Module], BeforeValidator(_null_as_empty_list)] = Field(
        default_factory=list
    )
    resources: Annotated[list[Resource], BeforeValidator(_null_as_empty_list)] = Field(
        default_factory=list
    )

    @model_validator(mode="before")
    @classmethod
    def _fragment_spellings(cls, data: Any, info: ValidationInfo) -> Any:
        """Rename alternative root keys when parsing a JSON fragment."""
        if not (info.context or {}).get("fragment") or not isinstance(data, dict):
            return data
        renamed = dict(data)
        for spelling, key in _FRAGMENT_SPELLINGS.items():
            if spelling in renamed and key not in renamed:
                renamed[key] = renamed.pop(spelling)
        return renamed


# ---------------------------------------------------------------------------
# YAML codec
# ---------------------------------------------------------------------------


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML emitter.

    A new instance per call keeps a failed dump from leaving shared emitter
    state broken for the next operation.
    """
    y = YAML()
    y.default_flow_style = False
    y.indent(mapping=2, sequence=4, offset=2)
    return y


def manifest_to_data(manifest: Manifest) -> dict[str, Any]:
    """Return the plain-data form of *manifest* with YAML key spellings.

    Fields equal to their defaults are omitted; required fields and unknown
    keys are always kept.
    """
    return manifest.model_dump(by_alias=True, exclude_defaults=True)


def serialize_manifest(manifest: Manifest) -> bytes:
    """Encode *manifest* as UTF-8 YAML.

    Raises:
        SerializationError: If the emitter cannot represent a value.
    """
    buf = StringIO()
    try:
        _new_yaml().dump(manifest_to_data(manifest), buf)
    except YAMLError as exc:
        msg = f"could not serialize the manifest: {exc}"
        raise SerializationError(msg) from exc
    return buf.getvalue().encode("utf-8")


# Root keys whose plain scalar text is kept as written, never read as a number.
_VERBATIM_KEYS = ("id", "version", "schema-version")


def _verbatim_texts(content: str) -> dict[str, str]:
    """Return the source text of plain scalars under :data:`_VERBATIM_KEYS`."""
    root = YAML(typ="safe", pure=True).compose(content)
    if not isinstance(root, MappingNode):
        return {}
    texts: dict[str, str] = {}
    for key_node, value_node in root.value:
        if (
            isinstance(key_node, ScalarNode)
            and key_node.value in _VERBATIM_KEYS
            and isinstance(value_node, ScalarNode)
            and value_node.style is None
        ):
            texts[key_node.value] = value_node.value
    return texts


def deserialize_manifest(content: bytes | str) -> Manifest:
    """Parse YAML *content* into a :class:`Manifest`.

    Raises:
        MalformedDocumentError: On invalid YAML, a non-mapping root, or
            missing/ill-typed required fields.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"the manifest is not valid UTF-8: {exc}"
            raise MalformedDocumentError(msg) from exc

    try:
        data = YAML(typ="safe").load(content)
        texts = _verbatim_texts(content)
    except YAMLError as exc:
        msg = f"the manifest is not valid YAML: {exc}"
        raise MalformedDocumentError(msg) from exc

    if not isinstance(data, dict):
        msg = "the manifest root must be a mapping"
        raise MalformedDocumentError(msg)

    for key, text in texts.items():
        value = data.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            data[key] = text

    try:
        return Manifest.model_validate(data)
    except ValidationError as exc:
        msg = f"the manifest content is invalid: {_describe(exc)}"
        raise MalformedDocumentError(msg) from exc


# ---------------------------------------------------------------------------
# JSON fragments
# ---------------------------------------------------------------------------

_M = TypeVar("_M", bound=BaseModel)


def parse_fragment(model_cls: type[_M], payload: str | bytes) -> _M:
    """Parse a caller-supplied JSON *payload* into *model_cls*.

    The whole payload becomes one entity; there is no merge with existing
    content.

    Raises:
        MalformedInputError: On invalid JSON or a payload of the wrong shape.
    """
    try:
        return model_cls.model_validate_json(payload, context={"fragment": True})
    except ValidationError as exc:
        kind = model_cls.__name__.lower()
        msg = f"invalid {kind} JSON: {_describe(exc)}"
        raise MalformedInputError(msg) from exc


def manifest_from_json(payload: str | bytes) -> Manifest:
    """Parse a full manifest descriptor from JSON."""
    return parse_fragment(Manifest, payload)


def module_from_json(payload: str | bytes) -> Module:
    """Parse a single module from JSON."""
    return parse_fragment(Module, payload)


def resource_from_json(payload: str | bytes) -> Resource:
    """Parse a single resource from JSON."""
    return parse_fragment(Resource, payload)


def serialize_entities(entities: Sequence[Module] | Sequence[Resource]) -> bytes:
    """Encode a module or resource sequence as a JSON array."""
    try:
        data = [e.model_dump(mode="json", by_alias=True, exclude_defaults=True) for e in entities]
        return json.dumps(data, indent=2).encode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        msg = f"could not serialize the entity list: {exc}"
        raise SerializationError(msg) from exc


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)
