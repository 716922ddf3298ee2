"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus local directory discovery from ``.stylectl/plugins/``.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path

import pluggy
from pydantic import ValidationError

from stylectl.domain.extensions import ExtensionSpec
from stylectl.plugins.hookspecs import PROJECT_NAME, StylectlHookSpec

ENTRY_POINT_GROUP = "stylectl.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(StylectlHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def collect_extensions(self) -> list[ExtensionSpec]:
        """Gather extensions contributed through ``register_extensions``.

        Plugins are asked one at a time so a broken plugin only loses its
        own contributions. Invalid entries are skipped with a warning.
        """
        specs: list[ExtensionSpec] = []
        for plugin in self._pm.get_plugins():
            hook = getattr(plugin, "register_extensions", None)
            if hook is None:
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            try:
                contributed = hook()
            except Exception:
                logger.warning(
                    "Failed to collect extensions from plugin %s", plugin_name, exc_info=True
                )
                continue
            if contributed is None:
                continue
            if not isinstance(contributed, (list, tuple)):
                logger.warning("Plugin %s returned non-list extension registrations", plugin_name)
                continue
            for item in contributed:
                try:
                    spec = (
                        item
                        if isinstance(item, ExtensionSpec)
                        else ExtensionSpec.model_validate(item)
                    )
                except ValidationError:
                    logger.warning(
                        "Skipping invalid extension %r from plugin %s",
                        item,
                        plugin_name,
                        exc_info=True,
                    )
                    continue
                specs.append(spec)
        return specs

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module. Classes inside the module that carry pluggy hookimpl-decorated
        methods are instantiated and registered. Errors are logged as
        warnings but never raised.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"stylectl_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue  # imported classes
                if not self._has_hook_impls(obj):
                    continue
                try:
                    self.register_plugin(obj(), name=f"{module_name}.{obj.__name__}")
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly, which
        leaves ``self`` unbound at dispatch time.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin) or not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s", plugin_name, exc_info=True
                )
                continue
            self._pm.register(instance, name=plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("stylectl")`` sets a ``stylectl_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "stylectl_impl", None):
                return True
        return False
