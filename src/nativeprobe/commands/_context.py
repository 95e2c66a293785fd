"""AppContext: the object every command receives through ``@click.pass_obj``."""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from nativeprobe.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from nativeprobe.config.settings import ProbeSettings
    from nativeprobe.domain.registry import CapabilityRegistry
    from nativeprobe.plugins.manager import PluginManager
    from nativeprobe.services.result import ServiceResult


class AppContext:
    """Settings for this invocation plus lazily built plugins and registry.

    Nothing native is imported and no plugin is loaded until a command
    asks for :attr:`registry`, so ``--help`` stays cheap.
    """

    def __init__(self, settings: ProbeSettings) -> None:
        from nativeprobe.config.logging import configure_logging
        from nativeprobe.services.telemetry import enable_telemetry

        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @cached_property
    def plugins(self) -> PluginManager | None:
        if not self.settings.plugins.enabled:
            return None
        from nativeprobe.plugins.manager import PluginManager

        manager = PluginManager()
        manager.discover_and_load(local_dir=self.settings.plugin_dir)
        return manager

    @cached_property
    def registry(self) -> CapabilityRegistry:
        from nativeprobe.infrastructure.native.sqlite import parse_version
        from nativeprobe.services.capabilities import build_registry

        registry = build_registry(
            min_sqlite_version=parse_version(self.settings.probe.min_sqlite_version)
        )
        if self.plugins is not None:
            self.plugins.register_capabilities(registry)
        return registry

    def emit(self, result: ServiceResult) -> None:
        """Write *result* to stdout/stderr and exit 1 if it failed.

        The stdout part is written first, so a failed probe's ``os.name``
        line precedes its error report.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        rendered = format_result(result, settings)
        if rendered.stdout:
            click.echo(rendered.stdout)
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if rendered.stderr:
            click.echo(rendered.stderr, err=True)
        if not result.ok:
            raise SystemExit(1)
