"""Colorized console output for ambari-shell.

Thin wrapper around :mod:`rich` that degrades gracefully when stdout
is not a TTY (e.g. piped, CI, scripted sessions).  All user-facing status
messages should flow through this module; ``logger.*`` calls are kept for
diagnostics.
"""

from __future__ import annotations

import io
from typing import Mapping, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# Shared console, auto-detects TTY; force_terminal=None lets Rich decide.
console = Console(stderr=False, force_terminal=None)

# ── Symbols ────────────────────────────────────────────────────────────────

_DOT = "[dim]·[/]"

#: Width used when rendering tables to plain text.
TABLE_WIDTH = 100


# ── Status lines ───────────────────────────────────────────────────────────


def info(msg: str) -> None:
    """Dim dot + informational message."""
    console.print(f"  {_DOT} [dim]{msg}[/]")


def error_msg(msg: str) -> None:
    """Bold red error message (not indented)."""
    console.print(f"[bold red]ERROR:[/] {msg}")


def plain(text: str) -> None:
    """Print command output verbatim (no markup, no highlighting)."""
    console.print(text, markup=False, highlight=False)


def read_line(prompt: str) -> str:
    """Prompt on the shared console and return the entered line."""
    return console.input(f"[bold cyan]{prompt}[/] ")


# ── Banners / panels ──────────────────────────────────────────────────────


def banner(title: str, body: str) -> None:
    """Blue-bordered session banner."""
    console.print(
        Panel(
            body,
            title=f"[bold blue]{title}[/]",
            border_style="blue",
            padding=(0, 2),
        )
    )


# ── Tables ────────────────────────────────────────────────────────────────


def render_multi_value_map(
    mapping: Mapping[str, Sequence[str]],
    key_header: str,
    value_header: str,
) -> str:
    """Render ``{key: [values]}`` as a two-column plain-text table.

    Each value gets its own row; the key is only printed on the first row
    of its group.  Keys without values still get one (empty) row.
    """
    table = Table(key_header, value_header, box=box.SIMPLE_HEAD, show_edge=False)
    for key in sorted(mapping):
        values = list(mapping[key])
        if not values:
            table.add_row(Text(key), Text(""))
            continue
        for idx, value in enumerate(values):
            table.add_row(Text(key if idx == 0 else ""), Text(value))

    buf = Console(
        file=io.StringIO(),
        width=TABLE_WIDTH,
        color_system=None,
        force_terminal=False,
    )
    buf.print(table)
    return buf.file.getvalue().rstrip()
