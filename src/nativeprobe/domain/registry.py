"""Name-to-factory registry for native capabilities.

Exact names map to zero-argument factories. Prefixed names (``lib:z``)
map to a factory that receives the text after the prefix. Built-in
names are reserved and cannot be overridden by later registrations.
"""

from __future__ import annotations

from collections.abc import Callable

from nativeprobe.domain.capability import CapabilityFactory, NativeCapability
from nativeprobe.domain.errors import CapabilityNotFoundError

PrefixFactory = Callable[[str], NativeCapability]


class CapabilityRegistry:
    """Resolve capability names to fresh capability instances."""

    def __init__(self) -> None:
        self._factories: dict[str, CapabilityFactory] = {}
        self._prefixes: dict[str, PrefixFactory] = {}
        self._sources: dict[str, str] = {}

    def register(self, name: str, factory: CapabilityFactory, *, source: str = "builtin") -> None:
        """Register *factory* under *name*.

        Raises:
            ValueError: If *name* is empty or already registered as builtin.
            TypeError: If *factory* is not callable.
        """
        normalized = name.strip()
        if not normalized:
            msg = "Capability name must not be empty"
            raise ValueError(msg)
        if not callable(factory):
            msg = f"Capability {normalized!r} factory must be callable"
            raise TypeError(msg)
        self._reject_builtin_overlap(normalized, source)
        self._factories[normalized] = factory
        self._sources[normalized] = source

    def register_prefix(
        self, prefix: str, factory: PrefixFactory, *, source: str = "builtin"
    ) -> None:
        """Register a parametrised family such as ``lib:`` -> ``lib:<name>``."""
        if not prefix.endswith(":"):
            msg = f"Capability prefix {prefix!r} must end with ':'"
            raise ValueError(msg)
        self._reject_builtin_overlap(prefix, source)
        self._prefixes[prefix] = factory
        self._sources[prefix] = source

    def resolve(self, name: str) -> NativeCapability:
        """Return a new capability for *name*.

        Raises:
            CapabilityNotFoundError: No exact or prefix registration matches.
        """
        factory = self._factories.get(name)
        if factory is not None:
            return factory()
        for prefix, prefix_factory in self._prefixes.items():
            if name.startswith(prefix) and len(name) > len(prefix):
                return prefix_factory(name[len(prefix) :])
        raise CapabilityNotFoundError(f"No capability registered as {name!r}", capability=name)

    def _reject_builtin_overlap(self, name: str, source: str) -> None:
        """Built-in names and everything under a built-in prefix are reserved."""
        if source == "builtin":
            return
        if self._sources.get(name) == "builtin":
            msg = f"Capability {name!r} conflicts with a built-in registration"
            raise ValueError(msg)
        for prefix in self._prefixes:
            if self._sources[prefix] == "builtin" and name.startswith(prefix):
                msg = f"Capability {name!r} falls under the built-in {prefix!r} family"
                raise ValueError(msg)

    def entries(self) -> list[dict[str, str]]:
        """List registrations as ``{"name", "source"}`` rows, sorted by name."""
        rows = [{"name": n, "source": self._sources[n]} for n in self._factories]
        rows.extend({"name": f"{p}<name>", "source": self._sources[p]} for p in self._prefixes)
        return sorted(rows, key=lambda r: r["name"])
