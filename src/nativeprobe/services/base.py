"""Shared constructor and plugin notification for the services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from nativeprobe.domain.registry import CapabilityRegistry
    from nativeprobe.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Holds the registry names resolve against and the optional plugin manager."""

    def __init__(
        self,
        registry: CapabilityRegistry,
        *,
        plugins: PluginManager | None = None,
    ) -> None:
        self._registry = registry
        self._plugins = plugins

    def _dispatch_event(self, hook_name: str, payload: dict[str, Any], warnings: list[str]) -> None:
        """Fire *hook_name* on every plugin.

        A raising plugin adds to *warnings*; it never changes the outcome.
        """
        if self._plugins is None:
            return
        try:
            getattr(self._plugins.hook, hook_name)(**payload)
        except Exception as exc:
            logger.debug("Plugin hook %s raised", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed: {type(exc).__name__}: {exc}")
