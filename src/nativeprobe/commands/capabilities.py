"""Command: list resolvable capabilities."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nativeprobe.commands._base import ProbeCommand

if TYPE_CHECKING:
    from nativeprobe.commands._context import AppContext


@click.command(
    cls=ProbeCommand,
    examples="""\
  nativeprobe capabilities
  nativeprobe --json capabilities""",
)
@click.pass_obj
def capabilities(app: AppContext) -> None:
    """List capability names and where they were registered from."""
    from nativeprobe.services.capabilities import CapabilityService

    app.emit(CapabilityService(app.registry).list_capabilities())
