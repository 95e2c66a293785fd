"""ProbeSettings: what to probe and how to report it.

Sources, strongest first: command-line flags, ``NATIVEPROBE_*``
environment variables (``__`` separates sections), the discovered
``nativeprobe.toml``, then the defaults in :mod:`nativeprobe.config.models`.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, TomlConfigSettingsSource

from nativeprobe.config.discovery import find_config
from nativeprobe.config.models import PluginsConfig, ProbeConfig

# Config file chosen for the settings object currently being built.
_active_config: ContextVar[Path | None] = ContextVar("_active_config", default=None)


class ProbeSettings(BaseSettings):
    """Settings for one CLI invocation, frozen once built.

    Attributes:
        project_root: Directory of the config file in use, else the CWD.
            Relative plugin directories are resolved against it.
        config_path: The ``nativeprobe.toml`` that was read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "NATIVEPROBE_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    probe: ProbeConfig = Field(default_factory=ProbeConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        config = _active_config.get()
        if config is None:
            return (init_settings, env_settings)
        return (init_settings, env_settings, TomlConfigSettingsSource(settings_cls, config))

    @property
    def plugin_dir(self) -> Path:
        """``[plugins] local_dir`` made absolute."""
        return self.project_root / self.plugins.local_dir

    @classmethod
    def from_invocation(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **flags: Any,
    ) -> ProbeSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist is ignored, as is
        a missing ``nativeprobe.toml``; both leave the defaults in place.

        Raises:
            click.ClickException: The config file is not valid TOML.
        """
        if config_path:
            named = Path(config_path)
            config = named if named.is_file() else None
        else:
            config = find_config(project_root)

        root = project_root or (config.parent if config else Path.cwd())
        token = _active_config.set(config)
        try:
            return cls(project_root=root, config_path=config, **flags)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {config}: {exc}") from exc
        finally:
            _active_config.reset(token)
