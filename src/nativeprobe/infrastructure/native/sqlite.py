"""SQLite native capability.

``sqlite3`` is the DB-API module compiled against the host's native SQLite
library. Loading it and checking the version the library reports confirms
the native code is present; constructing a :class:`SqliteNativeDB` confirms
it initializes by opening an in-memory database through SQLAlchemy Core.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

MIN_SQLITE_VERSION: tuple[int, int, int] = (3, 7, 0)


def parse_version(value: str) -> tuple[int, int, int]:
    """Parse ``"3.45.1"`` into ``(3, 45, 1)``; missing parts default to 0.

    Raises:
        ValueError: If any component is not an integer.
    """
    parts = [int(p) for p in value.strip().split(".") if p]
    if not parts or len(parts) > 3:
        msg = f"Invalid SQLite version string: {value!r}"
        raise ValueError(msg)
    while len(parts) < 3:
        parts.append(0)
    return (parts[0], parts[1], parts[2])


class SqliteNativeDB:
    """An initialized handle on the native SQLite library.

    Attributes:
        engine: In-memory SQLAlchemy engine.
        version: Version string reported by ``select sqlite_version()``.
    """

    def __init__(self, engine: Engine, version: str) -> None:
        self.engine = engine
        self.version = version

    @classmethod
    def open(cls) -> SqliteNativeDB:
        """Open an in-memory database and query the library version."""
        engine = create_engine("sqlite://", echo=False)
        try:
            with engine.connect() as conn:
                version = conn.execute(text("select sqlite_version()")).scalar_one()
        except Exception:
            engine.dispose()
            raise
        logger.debug("Opened in-memory SQLite %s", version)
        return cls(engine, str(version))

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self.engine.dispose()


class SqliteNative:
    """Capability for the SQLite library linked into ``sqlite3``."""

    name = "sqlite"

    def __init__(self, min_version: tuple[int, int, int] = MIN_SQLITE_VERSION) -> None:
        self.min_version = min_version
        self.library_version: str | None = None

    def load(self) -> bool:
        """Import ``sqlite3`` and compare the native version to the minimum.

        Raises:
            ImportError: If the interpreter was built without ``_sqlite3``.
        """
        import sqlite3

        self.library_version = sqlite3.sqlite_version
        loaded = parse_version(sqlite3.sqlite_version) >= self.min_version
        logger.debug(
            "SQLite library %s (minimum %s): %s",
            sqlite3.sqlite_version,
            ".".join(str(p) for p in self.min_version),
            "ok" if loaded else "too old",
        )
        return loaded

    def construct(self) -> SqliteNativeDB:
        return SqliteNativeDB.open()
