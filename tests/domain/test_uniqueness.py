"""Tests for the global name-uniqueness validator."""

from __future__ import annotations

from mtactl.domain.manifest import Manifest, Module, ProvidedService, Resource
from mtactl.domain.uniqueness import validate_name_uniqueness


def _manifest(modules: list[Module] | None = None, resources: list[Resource] | None = None) -> Manifest:
    return Manifest(id="app", version="1", modules=modules or [], resources=resources or [])


class TestValidateNameUniqueness:
    def test_unique_names(self) -> None:
        m = _manifest(
            [Module(name="a", provides=[ProvidedService(name="a-api")]), Module(name="b")],
            [Resource(name="c")],
        )
        assert validate_name_uniqueness(m) == []

    def test_empty_manifest(self) -> None:
        assert validate_name_uniqueness(_manifest()) == []

    def test_duplicate_modules(self) -> None:
        issues = validate_name_uniqueness(_manifest([Module(name="svcA"), Module(name="svcA")]))
        assert len(issues) == 1
        issue = issues[0]
        assert issue.name == "svcA"
        assert issue.kind == "module"
        assert issue.previous_kind == "module"
        assert issue.message == (
            'the "svcA" module name is not unique; a module was found with the same name'
        )

    def test_module_and_resource(self) -> None:
        issues = validate_name_uniqueness(_manifest([Module(name="x")], [Resource(name="x")]))
        assert len(issues) == 1
        assert issues[0].kind == "resource"
        assert issues[0].previous_kind == "module"

    def test_provided_service_collides_with_module(self) -> None:
        m = _manifest([Module(name="a"), Module(name="b", provides=[ProvidedService(name="a")])])
        issues = validate_name_uniqueness(m)
        assert [(i.name, i.kind, i.previous_kind) for i in issues] == [
            ("a", "provided service", "module")
        ]

    def test_provides_walked_before_next_module(self) -> None:
        m = _manifest([Module(name="a", provides=[ProvidedService(name="b")]), Module(name="b")])
        issues = validate_name_uniqueness(m)
        assert [(i.kind, i.previous_kind) for i in issues] == [("module", "provided service")]

    def test_first_claimant_kind_is_kept(self) -> None:
        m = _manifest(
            [Module(name="x"), Module(name="m", provides=[ProvidedService(name="x")])],
            [Resource(name="x")],
        )
        issues = validate_name_uniqueness(m)
        assert [(i.kind, i.previous_kind) for i in issues] == [
            ("provided service", "module"),
            ("resource", "module"),
        ]

    def test_reports_every_collision(self) -> None:
        m = _manifest(
            [Module(name="a"), Module(name="a"), Module(name="b")],
            [Resource(name="b"), Resource(name="c"), Resource(name="c")],
        )
        issues = validate_name_uniqueness(m)
        assert [i.name for i in issues] == ["a", "b", "c"]

    def test_does_not_mutate(self) -> None:
        m = _manifest([Module(name="a"), Module(name="a")])
        before = m.model_dump()
        validate_name_uniqueness(m)
        assert m.model_dump() == before
