"""Commands: copy and delete manifest files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from mtactl.commands._base import MtaCommand, path_option

if TYPE_CHECKING:
    from mtactl.commands._context import AppContext


@click.command(cls=MtaCommand, examples="  mtactl copy -s mta.yaml -t backup/mta.yaml")
@click.option("-s", "--source", required=True, help="File to copy.")
@click.option("-t", "--target", required=True, help="File to create.")
@click.pass_obj
def copy(app: AppContext, source: str, target: str) -> None:
    """Copy a file byte for byte."""
    app.emit(app.service.copy(Path(source), Path(target)))


@click.command(cls=MtaCommand, examples="  mtactl delete -p backup/mta.yaml")
@path_option()
@click.pass_obj
def delete(app: AppContext, path: str | None) -> None:
    """Delete a file."""
    app.emit(app.service.delete(app.manifest_path(path)))
