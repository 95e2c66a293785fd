"""CLI subcommands, imported only when the root group is built."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    from nativeprobe.commands.capabilities import capabilities
    from nativeprobe.commands.run import run

    for command in (run, capabilities):
        cli.add_command(command)
