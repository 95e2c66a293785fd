"""Sections of nativeprobe.toml.

Every field has a default, so a config file only lists what it changes.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class ProbeConfig(BaseModel):
    """[probe] section."""

    model_config = {"frozen": True}

    capability: str = "sqlite"
    min_sqlite_version: str = "3.7.0"

    @field_validator("capability")
    @classmethod
    def _strip_capability(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "capability must not be empty"
            raise ValueError(msg)
        return value

    @field_validator("min_sqlite_version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        from nativeprobe.infrastructure.native.sqlite import parse_version

        parse_version(value)
        return value


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str = ".nativeprobe/plugins"
