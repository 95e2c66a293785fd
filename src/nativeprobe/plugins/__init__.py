"""pluggy-based plugins: extra capabilities and a post-probe hook.

A failing plugin only ever produces log lines or result warnings.
"""

from nativeprobe.plugins.hookspecs import hookimpl
from nativeprobe.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
