"""Command: print the manifest's current hashcode."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mtactl.commands._base import MtaCommand, path_option

if TYPE_CHECKING:
    from mtactl.commands._context import AppContext


@click.command(
    "hash",
    cls=MtaCommand,
    examples="""\
  mtactl hash -p mta.yaml
  mtactl -q hash -p mta.yaml""",
)
@path_option()
@click.pass_obj
def hash_cmd(app: AppContext, path: str | None) -> None:
    """Print the hashcode to pass to 'add --hashcode'.

    A missing file reports hashcode 0.
    """
    app.emit(app.service.hash(app.manifest_path(path)))
