"""Shared pytest fixtures for mtactl tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

SAMPLE_MANIFEST = """\
schema-version: '3.2'
id: shop
version: 1.0.0
description: Sample shop application
build-parameters:
  before-all:
    - builder: custom
modules:
  - name: srv
    type: nodejs
    path: srv
    requires:
      - name: db
    provides:
      - name: srv-api
        properties:
          url: '${default-url}'
  - name: ui
    type: html5
    path: app
resources:
  - name: db
    type: com.sap.xs.hdi-container
    parameters:
      service: hana
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def descriptor() -> dict[str, Any]:
    """JSON descriptor for a fresh manifest."""
    return {
        "id": "test",
        "version": "1.2",
        "schemaVersion": "1.1",
        "description": "test mta creation",
    }


@pytest.fixture
def descriptor_json(descriptor: dict[str, Any]) -> str:
    return json.dumps(descriptor)


@pytest.fixture
def manifest_path(tmp_path: Path) -> Path:
    """A sample manifest with two modules and one resource."""
    path = tmp_path / "mta.yaml"
    path.write_text(SAMPLE_MANIFEST, encoding="utf-8")
    return path


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from a temp directory with no config overrides.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")`` on command test
    classes; ``tmp_path`` is the same directory.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MTACTL_CONFIG", raising=False)
    monkeypatch.delenv("MTACTL_MUTATION__ENFORCE_CHECK", raising=False)
