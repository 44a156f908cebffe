"""Subcommand modules for mtactl.

Provides register_commands(), which uses deferred imports to keep
``mtactl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root group."""
    # --- Groups ---
    from mtactl.commands.add import add
    from mtactl.commands.get import get

    cli.add_command(add)
    cli.add_command(get)

    # --- Standalone commands ---
    from mtactl.commands.create import create
    from mtactl.commands.files import copy, delete
    from mtactl.commands.hash_cmd import hash_cmd
    from mtactl.commands.validate import validate

    cli.add_command(create)
    cli.add_command(hash_cmd)
    cli.add_command(copy)
    cli.add_command(delete)
    cli.add_command(validate)
