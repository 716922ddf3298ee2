"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from stylectl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from stylectl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("id", "")) for item in items if isinstance(item, dict))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="style.ok")
    op = Text(f"  {result.op}", style="style.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="style.key")
    if isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    elif key.endswith("path") or key.endswith("root") or key.endswith("map"):
        v = Text(str(value), style="style.path")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="style.error")
    op = Text(f"  {result.op}", style="style.op")
    console.print(label, op, Text(" — "), msg, sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_compile_css(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Source", style="style.id", no_wrap=True)
    table.add_column("Module", style="style.path")
    table.add_column("Stylesheet", style="style.path")
    root = data.get("output_root", "")
    for entry in data.get("entry_points", []):
        table.add_row(entry["source"], f"{root}{entry['module']}", f"{root}css/{entry['style']}")
    console.print(table)

    extensions = data.get("extensions", [])
    _field(console, "extensions", len(extensions))
    if verbose and extensions:
        for key in extensions:
            console.print(f"    {key}")
    _field(console, "extensions_map", data.get("extensions_map", ""))
    elapsed = data.get("elapsed_ms", 0.0)
    console.print(
        Text(f"  {data.get('message', '')}", style="style.ok"),
        Text(f" ({elapsed:.0f} ms)", style="style.timing"),
        sep="",
        end="",
    )
    console.print()
    if verbose:
        _render_meta(console, result)


def _render_list_extensions(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    items = result.data.get("items", [])
    if not items:
        console.print(Text("  No extensions registered.", style="dim"))
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="style.id", no_wrap=True)
    table.add_column("Name")
    table.add_column("Version")
    table.add_column("Stylesheets")
    for item in items:
        table.add_row(
            item["id"],
            item["name"],
            item["version"],
            ", ".join(item.get("stylesheets", [])) or "-",
        )
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "compile_css": _render_compile_css,
    "list_extensions": _render_list_extensions,
}
