"""Click base classes with ``--examples`` support.

When ``--examples`` is passed, the command prints usage examples and exits,
keeping ``--help`` short while examples stay one flag away.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

FC = TypeVar("FC", bound=Callable[..., Any])


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class MtaCommand(click.Command):
    """Click Command that accepts an ``examples`` string."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class MtaGroup(click.Group):
    """Click Group whose subcommands default to :class:`MtaCommand`."""

    command_class = MtaCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def path_option() -> Callable[[FC], FC]:
    """Shared ``-p/--path`` option; omitted means the configured default."""
    return click.option(
        "-p",
        "--path",
        "path",
        default=None,
        help="Path to the manifest file (default from [manifest] default_path).",
    )
