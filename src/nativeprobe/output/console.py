"""Rich console and theme used by the renderers.

Consoles write into a StringIO so rendering stays a pure ``-> str``
step; Click decides which stream the text lands on. Colour is dropped
automatically when the output is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PROBE_THEME = Theme(
    {
        "probe.error": "bold red",
        "probe.op": "bold cyan",
        "probe.key": "dim",
        "probe.name": "bold blue",
        "probe.path": "dim",
        "probe.trace": "dim",
        "probe.status.loaded": "bold green",
        "probe.status.unavailable": "bold yellow",
    }
)

RENDER_WIDTH = 120


def create_console(*, no_color: bool = False) -> Console:
    return Console(
        file=StringIO(),
        theme=PROBE_THEME,
        no_color=no_color,
        highlight=False,
        width=RENDER_WIDTH,
    )


def get_output(console: Console) -> str:
    """Text written to *console* so far."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Theme style for a ``loaded``/``unavailable`` status, else no style."""
    return f"probe.status.{status}" if status in ("loaded", "unavailable") else ""
