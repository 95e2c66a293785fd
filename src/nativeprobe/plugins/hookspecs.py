"""Pluggy hook specifications for nativeprobe.

One setup-time hook lets plugins contribute capabilities; one lifecycle
hook fires after every probe run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from collections.abc import Callable

    from nativeprobe.domain.capability import NativeCapability

PROJECT_NAME = "nativeprobe"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class NativeProbeHookSpec:
    """Hook specifications for the nativeprobe plugin system."""

    @hookspec
    def register_capabilities(self) -> dict[str, Callable[..., NativeCapability]] | None:
        """Return capability name -> factory mappings.

        Names ending in ``:`` register a prefix family; the factory then
        receives the text after the prefix.
        """

    @hookspec
    def post_probe(self, capability: str, status: str, error_code: str | None) -> None:
        """Called after a probe run completes (successfully or not)."""
