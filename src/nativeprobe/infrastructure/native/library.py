"""Generic shared-library capability backed by :mod:`ctypes`.

``lib:z`` probes ``libz``; ``lib:/opt/x/libfoo.so`` probes an explicit path.
A library that cannot be located makes ``load()`` return False. A library
that is located but fails to load raises ``OSError``.
"""

from __future__ import annotations

import ctypes
import ctypes.util
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def locate_library(library: str) -> str | None:
    """Return a loadable path or soname for *library*, or None if not found.

    Paths that exist on disk are returned as-is; bare names go through
    ``ctypes.util.find_library``.
    """
    candidate = Path(library)
    if candidate.is_absolute() or len(candidate.parts) > 1:
        return str(candidate) if candidate.is_file() else None
    return ctypes.util.find_library(library)


class NativeLibrary:
    """A loaded shared library.

    Attributes:
        path: Path or soname the library was loaded from.
        handle: The ``ctypes.CDLL`` handle.
    """

    def __init__(self, path: str, handle: ctypes.CDLL) -> None:
        self.path = path
        self.handle = handle

    def __repr__(self) -> str:
        return f"NativeLibrary(path={self.path!r})"


class SharedLibraryCapability:
    """Capability for an arbitrary shared library."""

    def __init__(self, library: str) -> None:
        self.library = library
        self.name = f"lib:{library}"
        self.path: str | None = None
        self._handle: ctypes.CDLL | None = None

    def load(self) -> bool:
        path = locate_library(self.library)
        if path is None:
            logger.debug("Shared library %r not found", self.library)
            return False
        self._handle = ctypes.CDLL(path)
        self.path = path
        logger.debug("Loaded shared library %r from %s", self.library, path)
        return True

    def construct(self) -> NativeLibrary:
        if self._handle is None or self.path is None:
            msg = f"Shared library {self.library!r} must be loaded before construction"
            raise RuntimeError(msg)
        return NativeLibrary(self.path, self._handle)
