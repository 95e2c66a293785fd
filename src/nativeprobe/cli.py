"""The ``nativeprobe`` command line."""

from __future__ import annotations

import click

from nativeprobe import __version__
from nativeprobe.commands import register_commands
from nativeprobe.commands._context import AppContext
from nativeprobe.config.settings import ProbeSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="nativeprobe")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the outcome line.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and per-step timings.")
@click.option("--log-json", is_flag=True, help="Write stderr logs as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    metavar="PATH",
    help="Read this nativeprobe.toml instead of searching for one.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """Check that a native library loads and initializes on this host.

    Without a subcommand, runs the capability configured in ``[probe]``.
    """
    ctx.obj = AppContext(ProbeSettings.from_invocation(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        from nativeprobe.commands.run import run

        ctx.invoke(run)


register_commands(cli)
