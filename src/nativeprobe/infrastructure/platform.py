"""Host platform queries."""

from __future__ import annotations

import platform


def host_os_name() -> str:
    """Return the host operating system name (``Linux``, ``Darwin``, ``Windows``).

    ``platform.system()`` yields an empty string when the name cannot be
    determined; that value is passed through unchanged.
    """
    return platform.system() or ""
