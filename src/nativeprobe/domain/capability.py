"""The native capability contract.

A capability is the unit the probe depends on: it knows how to load one
native library and how to build an instance on top of it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class NativeCapability(Protocol):
    """Typed interface every probe target implements.

    Attributes:
        name: Registry name the capability was resolved under.
    """

    name: str

    def load(self) -> bool:
        """Load the native library. Return True when it is usable."""
        ...

    def construct(self) -> object:
        """Build an instance backed by the loaded library."""
        ...


CapabilityFactory = Callable[[], NativeCapability]
