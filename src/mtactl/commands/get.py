"""Command group: read entity lists from a manifest."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mtactl.commands._base import MtaGroup, path_option

if TYPE_CHECKING:
    from mtactl.commands._context import AppContext


@click.group(
    cls=MtaGroup,
    examples="""\
  mtactl get modules -p mta.yaml
  mtactl --json get resources -p mta.yaml
  mtactl -q get modules""",
)
def get() -> None:
    """Read modules or resources."""


@get.command()
@path_option()
@click.pass_obj
def modules(app: AppContext, path: str | None) -> None:
    """List the manifest's modules."""
    app.emit(app.service.get_modules(app.manifest_path(path)))


@get.command()
@path_option()
@click.pass_obj
def resources(app: AppContext, path: str | None) -> None:
    """List the manifest's resources."""
    app.emit(app.service.get_resources(app.manifest_path(path)))
