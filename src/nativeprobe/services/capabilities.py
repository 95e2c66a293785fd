"""Built-in capability wiring and the capability listing operation."""

from __future__ import annotations

from nativeprobe.domain.registry import CapabilityRegistry
from nativeprobe.infrastructure.native.library import SharedLibraryCapability
from nativeprobe.infrastructure.native.sqlite import MIN_SQLITE_VERSION, SqliteNative
from nativeprobe.services.base import BaseService
from nativeprobe.services.result import ServiceResult


def build_registry(
    *,
    min_sqlite_version: tuple[int, int, int] = MIN_SQLITE_VERSION,
) -> CapabilityRegistry:
    """Return a registry holding the built-in capabilities.

    ``sqlite`` is the SQLite library behind :mod:`sqlite3`; ``lib:<name>``
    is any shared library :mod:`ctypes` can find by that name.
    """
    registry = CapabilityRegistry()
    registry.register("sqlite", lambda: SqliteNative(min_version=min_sqlite_version))
    registry.register_prefix("lib:", SharedLibraryCapability)
    return registry


class CapabilityService(BaseService):
    """Read-only view of the capability registry."""

    def list_capabilities(self) -> ServiceResult:
        items = self._registry.entries()
        return ServiceResult.success("list_capabilities", {"items": items, "count": len(items)})
