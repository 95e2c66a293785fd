"""Command class that adds an ``--examples`` flag."""

from __future__ import annotations

import textwrap
from typing import Any

import click


class ProbeCommand(click.Command):
    """A Click command that can print usage examples.

    Pass ``examples=`` (one command line per line) to get an eager
    ``--examples`` flag that prints them and exits without running.
    """

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = textwrap.dedent(examples).strip() if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Print example invocations and exit.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for {ctx.command_path}:")
        for line in self.examples.splitlines():  # type: ignore[union-attr]
            click.echo(f"  {line}")
        ctx.exit(0)
