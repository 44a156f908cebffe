"""Command group: append modules and resources to a manifest.

Both subcommands run inside the mutation pipeline: the sentinel lock is
taken, the ``--hashcode`` from an earlier ``mtactl hash`` is re-verified,
and only then is the manifest rewritten.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mtactl.commands._base import FC, MtaGroup, path_option

if TYPE_CHECKING:
    from mtactl.commands._context import AppContext


def _mutation_options(fn: FC) -> FC:
    """Shared options of the mutating subcommands."""
    fn = click.option(
        "--check/--no-check",
        "enforce_check",
        default=None,
        help="Reject the change if the file no longer matches --hashcode "
        "(default from [mutation] enforce_check).",
    )(fn)
    fn = click.option(
        "-h",
        "--hashcode",
        type=int,
        default=0,
        show_default=True,
        help="Hashcode of the file as last read (see 'mtactl hash').",
    )(fn)
    fn = click.option("-d", "--data", required=True, help="Entity in JSON format.")(fn)
    return path_option()(fn)


@click.group(
    cls=MtaGroup,
    examples="""\
  mtactl add module -p mta.yaml -d '{"name": "srv", "type": "nodejs", "path": "srv"}' -h 123
  mtactl add resource -p mta.yaml -d '{"name": "db", "type": "hana"}' -h 456
  mtactl add resource -p mta.yaml -d '{"name": "db", "type": "hana"}' --no-check""",
)
def add() -> None:
    """Append an entity to a manifest."""


@add.command()
@_mutation_options
@click.pass_obj
def module(
    app: AppContext,
    path: str | None,
    data: str,
    hashcode: int,
    enforce_check: bool | None,
) -> None:
    """Append a module."""
    app.emit(
        app.service.add_module(
            app.manifest_path(path), data, hashcode=hashcode, enforce_check=enforce_check
        )
    )


@add.command()
@_mutation_options
@click.pass_obj
def resource(
    app: AppContext,
    path: str | None,
    data: str,
    hashcode: int,
    enforce_check: bool | None,
) -> None:
    """Append a resource."""
    app.emit(
        app.service.add_resource(
            app.manifest_path(path), data, hashcode=hashcode, enforce_check=enforce_check
        )
    )
