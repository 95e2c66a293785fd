"""Locate ``nativeprobe.toml``.

``NATIVEPROBE_CONFIG`` names the file explicitly; otherwise the working
directory and each of its parents are searched in turn.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "nativeprobe.toml"
CONFIG_ENV_VAR = "NATIVEPROBE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), if any.

    A ``NATIVEPROBE_CONFIG`` that points at a missing file disables the
    search rather than falling back to it.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        named = Path(override)
        return named if named.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
