"""Rich Console factory and theme for mtactl output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract.  In non-TTY environments (tests, pipes) Rich
automatically drops color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

MTA_THEME = Theme(
    {
        "mta.ok": "bold green",
        "mta.error": "bold red",
        "mta.warning": "bold yellow",
        "mta.op": "bold cyan",
        "mta.key": "dim",
        "mta.name": "bold blue",
        "mta.path": "dim",
        "mta.hash": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=MTA_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
