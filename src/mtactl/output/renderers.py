"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from mtactl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from mtactl.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if "hashcode" in result.data:
        return str(result.data["hashcode"])
    for key in ("modules", "resources"):
        if key in result.data:
            return "\n".join(str(item.get("name", "")) for item in result.data[key])
    return ""


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="mta.ok"), Text(f"  {result.op}", style="mta.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="mta.key")
    if key == "name":
        v = Text(str(value), style="mta.name")
    elif key in ("path", "source", "target"):
        v = Text(str(value), style="mta.path")
    elif key == "hashcode":
        v = Text(str(value), style="mta.hash")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="mta.error"),
        Text(f"  {result.op}", style="mta.op"),
        Text(" — "),
        msg,
    )
    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"  {k}: {v}", style="dim"))


def _render_entities(result: ServiceResult, console: Console) -> None:
    """Table of modules or resources."""
    key = "modules" if "modules" in result.data else "resources"
    entities: list[dict[str, Any]] = result.data.get(key, [])
    _status_line(console, result)
    _field(console, "path", result.data.get("path", ""))
    if not entities:
        console.print(Text(f"  no {key}", style="dim"))
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="mta.name", no_wrap=True)
    table.add_column("Type")
    if key == "modules":
        table.add_column("Path", style="mta.path")
        table.add_column("Provides")
    for entity in entities:
        row = [str(entity.get("name", "")), str(entity.get("type", ""))]
        if key == "modules":
            provides = [p.get("name", "") for p in entity.get("provides", [])]
            row.extend([str(entity.get("path", "")), ", ".join(provides)])
        table.add_row(*row)
    console.print(table)


def _render_validate(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "path", result.data.get("path", ""))
    count = result.data.get("count", 0)
    if count == 0:
        console.print(Text("  all names are unique", style="mta.ok"))
        return
    console.print(Text(f"  {count} issue(s)", style="mta.warning"))


def _render_generic(result: ServiceResult, console: Console) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "get_modules": _render_entities,
    "get_resources": _render_entities,
    "validate": _render_validate,
}
