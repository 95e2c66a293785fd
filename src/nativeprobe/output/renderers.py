"""Human-readable renderers for ServiceResult, one per operation.

Each renderer prints into a StringIO-backed Rich console; the text is
collected with :func:`get_output`. Failures share :func:`render_error`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from nativeprobe.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from nativeprobe.services.result import ServiceResult

SUCCESS_LINE = "loaded!"
UNAVAILABLE_LINE = "not loaded"

# Payload keys shown under a probe outcome, in this order.
_PROBE_FIELDS = ("capability", "instance", "version", "path")


def os_line(result: ServiceResult) -> str | None:
    """The ``os.name: ...`` line for a probe result, else None."""
    if result.op != "probe":
        return None
    name = result.data.get("os_name")
    if name is None and result.error is not None:
        name = result.error.detail.get("os_name")
    return f"os.name: {name or ''}"


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a successful result. Plain text when not on a terminal."""
    console = create_console()
    _RENDERERS[result.op](result, console)
    if verbose:
        _render_timings(console, result)
    return get_output(console).rstrip("\n")


def render_error(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a failed result: headline, code, detail fields, then the traceback."""
    console = create_console()
    err = result.error
    message = err.message if err else "Unknown error"
    headline = Text.assemble(
        ("ERROR", "probe.error"), (f"  {result.op}", "probe.op"), f": {message}"
    )
    console.print(headline)

    if err is not None:
        console.print(Text(f"  code: {err.code}", style="probe.key"))
        detail = dict(err.detail)
        trace = detail.pop("traceback", None)
        for key, value in detail.items():
            _field(console, key, value)
        if trace:
            console.print()
            # Tracebacks keep their own line breaks regardless of console width.
            console.print(Text(str(trace).rstrip("\n"), style="probe.trace"), soft_wrap=True)

    if verbose:
        _render_timings(console, result)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One-line (or one-name-per-line) output for ``--quiet``."""
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {message}"
    if result.op == "probe":
        return SUCCESS_LINE if result.data.get("loaded") else UNAVAILABLE_LINE
    return "\n".join(str(item["name"]) for item in result.data.get("items", []))


def _field(console: Console, key: str, value: Any) -> None:
    style = {"capability": "probe.name", "path": "probe.path"}.get(key, "")
    console.print(Text.assemble((f"  {key}: ", "probe.key"), (str(value), style)))


def _render_timings(console: Console, result: ServiceResult) -> None:
    """List per-step timings collected under ``--verbose``."""
    telemetry = (result.meta or {}).get("telemetry")
    if not telemetry:
        return
    console.print()
    console.print(Text(f"  timings ({telemetry['total_ms']:.2f}ms total):", style="dim"))
    for row in telemetry.get("steps", []):
        line = Text(f"    {row['duration_ms']:>8.2f}ms  {row['step']}")
        notes = row.get("notes")
        if notes:
            line.append("  " + " ".join(f"{k}={v}" for k, v in notes.items()), style="dim")
        console.print(line)


def _render_probe(result: ServiceResult, console: Console) -> None:
    data = result.data
    console.print(Text(os_line(result) or ""))
    line = SUCCESS_LINE if data.get("loaded") else UNAVAILABLE_LINE
    console.print(Text(line, style=style_for_status(str(data.get("status", "")))))
    for key in _PROBE_FIELDS:
        if key in data:
            _field(console, key, data[key])


def _render_capabilities(result: ServiceResult, console: Console) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(Text("No capabilities registered.", style="dim"))
        return
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Name", style="probe.name", no_wrap=True)
    table.add_column("Source")
    for item in items:
        table.add_row(str(item["name"]), str(item["source"]))
    console.print(table)


_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "probe": _render_probe,
    "list_capabilities": _render_capabilities,
}
