"""Workspace — the single dependency injected into every service.

Resolves project paths from settings, owns the stylesheet compiler and
the plugin manager, and snapshots the extension registry. Compiler and
plugins are created lazily so ``--help`` never loads libsass or plugins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from stylectl.domain.extensions import ExtensionSpec, ExtensionStyleMap, build_extension_map
from stylectl.infrastructure.compiler import create_compiler

if TYPE_CHECKING:
    from pathlib import Path

    from stylectl.config.settings import StyleSettings
    from stylectl.domain.entry_points import EntryPointDescriptor
    from stylectl.infrastructure.compiler import StylesheetCompiler
    from stylectl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

LOCAL_PLUGIN_DIR = ".stylectl/plugins"


class Workspace:
    """Paths, compiler, and extension registry for one project."""

    def __init__(
        self,
        settings: StyleSettings,
        *,
        compiler: StylesheetCompiler | None = None,
        plugin_manager: PluginManager | None = None,
    ) -> None:
        self.settings = settings
        self._compiler = compiler
        self._plugin_manager = plugin_manager

    @property
    def root(self) -> Path:
        return self.settings.project_root

    @property
    def source_dir(self) -> Path:
        return self.settings.source_dir

    @property
    def output_root(self) -> Path:
        return self.settings.output_root

    @property
    def extensions_dir(self) -> Path:
        return self.settings.extensions_dir

    @property
    def extensions_map_path(self) -> Path:
        return self.settings.extensions_map_path

    @property
    def entry_points(self) -> tuple[EntryPointDescriptor, ...]:
        return self.settings.entry_points

    @property
    def compiler(self) -> StylesheetCompiler:
        """The stylesheet compiler (created lazily on first access)."""
        if self._compiler is None:
            cfg = self.settings.compiler
            self._compiler = create_compiler(
                cfg.backend,
                output_style=cfg.output_style,
                include_paths=[self.settings.resolve(p) for p in cfg.include_paths],
            )
        return self._compiler

    @property
    def plugin_manager(self) -> PluginManager:
        """The plugin manager, with plugins discovered on first access."""
        if self._plugin_manager is None:
            from stylectl.plugins.manager import PluginManager

            pm = PluginManager()
            if self.settings.plugins.enabled:
                names = pm.discover_and_load(local_dir=self.root / LOCAL_PLUGIN_DIR)
                logger.debug("Loaded plugins: %s", names)
            self._plugin_manager = pm
        return self._plugin_manager

    def extension_specs(self) -> list[ExtensionSpec]:
        """Configured extensions followed by plugin-contributed ones."""
        return [*self.settings.extensions, *self.plugin_manager.collect_extensions()]

    def extension_map(self) -> ExtensionStyleMap:
        """Snapshot of the extension registry as the extension map."""
        return build_extension_map(self.extension_specs())
