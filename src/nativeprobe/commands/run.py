"""Command: probe a native capability."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nativeprobe.commands._base import ProbeCommand

if TYPE_CHECKING:
    from nativeprobe.commands._context import AppContext


@click.command(
    cls=ProbeCommand,
    examples="""\
  nativeprobe
  nativeprobe run
  nativeprobe run sqlite
  nativeprobe run lib:z
  nativeprobe --json run lib:ssl""",
)
@click.argument("capability", required=False)
@click.pass_obj
def run(app: AppContext, capability: str | None) -> None:
    """Load CAPABILITY's native library and report whether it initialized.

    Defaults to the capability configured in ``[probe]`` (``sqlite``).
    """
    from nativeprobe.services.probe import ProbeService

    svc = ProbeService(app.registry, plugins=app.plugins)
    app.emit(svc.probe(capability or app.settings.probe.capability))
