"""Load nativeprobe plugins and collect the capabilities they contribute.

Plugins come from two places: distributions advertising the
``nativeprobe.plugins`` entry-point group, and single ``*.py`` files in
the project's local plugin directory. A plugin that fails to import,
instantiate or register is logged and skipped.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from types import ModuleType
from typing import TYPE_CHECKING, Any

import pluggy

from nativeprobe.plugins.hookspecs import PROJECT_NAME, NativeProbeHookSpec

if TYPE_CHECKING:
    from pathlib import Path

    from nativeprobe.domain.registry import CapabilityRegistry

ENTRY_POINT_GROUP = "nativeprobe.plugins"
LOCAL_MODULE_PREFIX = "nativeprobe_local_plugin_"

logger = logging.getLogger(__name__)


def _is_plugin_class(obj: Any) -> bool:
    """True for a class with at least one ``@hookimpl`` method."""
    if not inspect.isclass(obj):
        return False
    marker = f"{PROJECT_NAME}_impl"
    return any(
        hasattr(member, marker)
        for attr, member in inspect.getmembers(obj, callable)
        if not attr.startswith("_")
    )


def _import_file(path: Path, module_name: str) -> ModuleType | None:
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        logger.warning("Cannot import plugin file %s", path)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        logger.warning("Plugin file %s failed to import", path, exc_info=True)
        return None
    return module


class PluginManager:
    """A pluggy manager bound to the nativeprobe hook specifications."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(NativeProbeHookSpec)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [name for name, _plugin in self._pm.list_name_plugin()]

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register an already-built plugin object (default name: its class name)."""
        plugin_name = name or type(plugin).__name__
        self._pm.register(plugin, name=plugin_name)
        logger.debug("Registered plugin %s", plugin_name)

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point plugins, then any local plugin files.

        Returns the names of every plugin now registered.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_entry_point_classes()
        if local_dir is not None and local_dir.is_dir():
            for path in sorted(local_dir.glob("*.py")):
                if not path.name.startswith("_"):
                    self._load_local_file(path)
        names = self.list_plugin_names()
        logger.debug("Plugins loaded: %s", ", ".join(names) or "none")
        return names

    def register_capabilities(self, registry: CapabilityRegistry) -> list[str]:
        """Add each plugin's ``register_capabilities`` mapping to *registry*.

        Entries are recorded with source ``plugin:<plugin name>``. Keys
        ending in ``:`` register a prefix family. A registration the
        registry refuses (a reserved built-in name, or one under a
        built-in prefix) is skipped with a warning.

        Returns the names actually registered, in hook order.
        """
        registered: list[str] = []
        for impl in self._pm.hook.register_capabilities.get_hookimpls():
            try:
                factories = impl.function()
            except Exception:
                logger.warning(
                    "Plugin %s failed to list capabilities", impl.plugin_name, exc_info=True
                )
                continue
            if factories is None:
                continue
            if not isinstance(factories, dict):
                logger.warning(
                    "Plugin %s returned %s instead of a dict of capabilities",
                    impl.plugin_name,
                    type(factories).__name__,
                )
                continue
            registered.extend(self._add_factories(registry, impl.plugin_name, factories))
        return registered

    @staticmethod
    def _add_factories(
        registry: CapabilityRegistry, plugin_name: str, factories: dict[Any, Any]
    ) -> list[str]:
        source = f"plugin:{plugin_name}"
        added: list[str] = []
        for name, factory in factories.items():
            add = registry.register_prefix if str(name).endswith(":") else registry.register
            try:
                add(name, factory, source=source)
            except (TypeError, ValueError, AttributeError) as exc:
                logger.warning("Ignoring capability %r from plugin %s: %s", name, plugin_name, exc)
                continue
            added.append(name)
        return added

    def _load_local_file(self, path: Path) -> None:
        module_name = f"{LOCAL_MODULE_PREFIX}{path.stem}"
        module = _import_file(path, module_name)
        if module is None:
            return
        classes = [
            obj
            for _name, obj in inspect.getmembers(module, _is_plugin_class)
            if obj.__module__ == module_name
        ]
        for cls in classes:
            # Later classes in the same file need distinct names.
            name = module_name if cls is classes[0] else f"{module_name}.{cls.__name__}"
            try:
                self.register_plugin(cls(), name=name)
            except Exception:
                logger.warning(
                    "Plugin class %s in %s failed to register", cls.__name__, path, exc_info=True
                )

    def _instantiate_entry_point_classes(self) -> None:
        """Entry points may name a class; hooks need an instance to bind ``self``."""
        for name, plugin in list(self._pm.list_name_plugin()):
            if not _is_plugin_class(plugin):
                continue
            self._pm.unregister(plugin)
            try:
                self._pm.register(plugin(), name=name)
            except Exception:
                logger.warning(
                    "Entry-point plugin %s could not be instantiated", name, exc_info=True
                )
