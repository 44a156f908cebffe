"""Command: validate global name uniqueness."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mtactl.commands._base import MtaCommand, path_option

if TYPE_CHECKING:
    from mtactl.commands._context import AppContext


@click.command(
    cls=MtaCommand,
    examples="""\
  mtactl validate -p mta.yaml
  mtactl validate -p mta.yaml --strict""",
)
@path_option()
@click.option("--strict", is_flag=True, help="Fail when any issue is found.")
@click.pass_obj
def validate(app: AppContext, path: str | None, strict: bool) -> None:
    """Report module, provided service, and resource names that are not unique."""
    app.emit(app.service.validate(app.manifest_path(path), strict=strict))
