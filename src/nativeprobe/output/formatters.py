"""Split a ServiceResult into the text destined for stdout and stderr.

``--json`` emits the whole result as one document; ``--quiet`` reduces
it to a single line. Human output always puts a probe's ``os.name`` line
on stdout, even when the probe failed and the error goes to stderr.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from nativeprobe.output.renderers import os_line, render_error, render_quiet, render_result

if TYPE_CHECKING:
    from nativeprobe.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Display flags relevant to formatting, frozen after construction."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


class FormattedOutput(BaseModel):
    """Rendered text per stream; an empty string means nothing is written."""

    model_config = {"frozen": True}

    stdout: str = ""
    stderr: str = ""


def format_result(result: ServiceResult, settings: OutputSettings) -> FormattedOutput:
    if settings.json_output:
        document = result.model_dump_json(indent=2)
        return FormattedOutput(stdout=document) if result.ok else FormattedOutput(stderr=document)

    if settings.quiet:
        line = render_quiet(result)
        return FormattedOutput(stdout=line) if result.ok else FormattedOutput(stderr=line)

    if result.ok:
        return FormattedOutput(stdout=render_result(result, verbose=settings.verbose))
    return FormattedOutput(
        stdout=os_line(result) or "",
        stderr=render_error(result, verbose=settings.verbose),
    )
