"""Command: create a new manifest."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mtactl.commands._base import MtaCommand, path_option

if TYPE_CHECKING:
    from mtactl.commands._context import AppContext


@click.command(
    cls=MtaCommand,
    examples="""\
  mtactl create -p mta.yaml -d '{"id": "shop", "version": "1.0.0"}'
  mtactl create -p app/mta.yaml -d '{"id": "shop", "version": "1.0.0", "schema-version": "3.2"}'""",
)
@path_option()
@click.option("-d", "--data", required=True, help="Manifest descriptor in JSON format.")
@click.pass_obj
def create(app: AppContext, path: str | None, data: str) -> None:
    """Create a new manifest file, creating its folder if needed."""
    app.emit(app.service.create(app.manifest_path(path), data))
