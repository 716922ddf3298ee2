"""CssService — the stylesheet entry-point pipeline.

One run:
  1. publish the extension map (side file read by test tooling)
  2. compile each entry point, in registry order, one at a time
  3. run the bulk extension pass (CSS only)
  4. report the build step

INVARIANT: Each entry point's module and stylesheet artifacts come from a
single compiler call. Any failure aborts the run and propagates unchanged.
Runs hold ``_run_lock``, so a watch-triggered run never interleaves its
writes with another run.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from stylectl.domain.entry_points import EntryPointDescriptor, build_registry
from stylectl.domain.extensions import ExtensionSpec, ExtensionStyleMap, build_extension_map
from stylectl.infrastructure.artifacts import ArtifactPaths, write_artifacts, write_extensions_map
from stylectl.services._helpers import display_path, end_build_step
from stylectl.services.base import BaseService
from stylectl.services.extensions import BuildExtensionsOptions, ExtensionService
from stylectl.services.result import ServiceResult
from stylectl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from stylectl.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)

STEP_LABEL = "Recompiled all CSS files into"

MapSink = Callable[[Path, ExtensionStyleMap], None]
ExtensionBuilder = Callable[[BuildExtensionsOptions, Sequence[ExtensionSpec]], list[str]]


class Watcher(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...

    def wait(self, timeout: float | None = None) -> bool: ...


WatcherFactory = Callable[["CssService"], Watcher]


class CssService(BaseService):
    """Compile the stylesheet entry points and extension styles.

    Parameters:
        workspace: Paths, compiler, and extension registry.
        entry_points: Registry override; defaults to the workspace's.
        extension_builder: The bulk extension pass; defaults to
            :meth:`ExtensionService.build_extensions`.
        map_sink: Receives ``(path, extension_map)`` once per run; defaults
            to writing the side file.
        watcher_factory: Builds the watcher for ``watch=True``.
        on_watch_result / on_watch_error: Reporting for watch-triggered runs.
    """

    def __init__(
        self,
        workspace: Workspace,
        *,
        entry_points: Iterable[EntryPointDescriptor] | None = None,
        extension_builder: ExtensionBuilder | None = None,
        map_sink: MapSink = write_extensions_map,
        watcher_factory: WatcherFactory | None = None,
        on_watch_result: Callable[[ServiceResult], None] | None = None,
        on_watch_error: Callable[[Exception], None] | None = None,
    ) -> None:
        super().__init__(workspace)
        self._entry_points = (
            build_registry(entry_points) if entry_points is not None else workspace.entry_points
        )
        self._extension_builder = (
            extension_builder or ExtensionService(workspace).build_extensions
        )
        self._map_sink = map_sink
        self._watcher_factory = watcher_factory or _default_watcher
        self._on_watch_result = on_watch_result
        self._on_watch_error = on_watch_error
        self._run_lock = threading.Lock()
        self.watcher: Watcher | None = None

    @property
    def entry_points(self) -> tuple[EntryPointDescriptor, ...]:
        return self._entry_points

    # ------------------------------------------------------------------
    # Entry-point compiler
    # ------------------------------------------------------------------

    def compile_entry_point(self, entry: EntryPointDescriptor) -> ArtifactPaths:
        """Compile one entry point and write both of its artifacts."""
        source = self._workspace.source_dir / entry.source_path
        with trace_span(entry.source_path) as span:
            css = self._workspace.compiler.compile(source)
            paths = write_artifacts(
                self._workspace.output_root,
                css,
                module_name=entry.module_output_name,
                style_name=entry.style_output_name,
            )
            if span is not None:
                span.annotate("chars", len(css))
        logger.debug("Compiled %s -> %s", entry.source_path, paths.style_path)
        return paths

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    @traced
    def compile_all_styles(
        self,
        *,
        watch: bool = False,
        compile_all: bool | None = None,
    ) -> ServiceResult:
        """Recompile every entry point and then the extension styles.

        With *watch*, a watcher is started first (once per service) and the
        initial compile proceeds regardless.
        """
        if watch:
            self.start_watch()
        with self._run_lock:
            return self._run(compile_all)

    def recompile(self) -> ServiceResult:
        """Run triggered by a source change: no new watch, no forced full pass."""
        return self.compile_all_styles()

    def start_watch(self) -> Watcher:
        """Start the watcher if it is not running yet."""
        if self.watcher is None:
            watcher = self._watcher_factory(self)
            watcher.start()
            self.watcher = watcher
        return self.watcher

    def stop_watch(self) -> None:
        if self.watcher is not None:
            self.watcher.stop()
            self.watcher = None

    def _run(self, compile_all: bool | None) -> ServiceResult:
        ws = self._workspace
        start_time = time.perf_counter()

        # The map and the bulk pass share one registry snapshot.
        specs = ws.extension_specs()
        self._map_sink(ws.extensions_map_path, build_extension_map(specs))

        for entry in self._entry_points:
            self.compile_entry_point(entry)

        built = self._extension_builder(
            BuildExtensionsOptions(
                bundle_only_if_listed_in_files=False,
                compile_only_css=True,
                compile_all=compile_all,
            ),
            specs,
        )

        target = display_path(ws.output_root, ws.root) + "/"
        step = end_build_step(STEP_LABEL, target, start_time)

        warnings: list[str] = []
        self._dispatch_hook(
            "post_css_build",
            {
                "output_root": str(ws.output_root),
                "entry_points": [e.source_path for e in self._entry_points],
                "extensions": list(built),
            },
            warnings,
        )

        data: dict[str, Any] = {
            "output_root": target,
            "entry_points": [e.to_summary() for e in self._entry_points],
            "extensions": list(built),
            "extensions_map": display_path(ws.extensions_map_path, ws.root),
            **step,
        }
        return ServiceResult(ok=True, op="compile_css", data=data, warnings=warnings)

    # Watcher callbacks

    def _report_watch_result(self, result: ServiceResult) -> None:
        if self._on_watch_result is not None:
            self._on_watch_result(result)

    def _report_watch_error(self, exc: Exception) -> None:
        if self._on_watch_error is not None:
            self._on_watch_error(exc)


def _default_watcher(service: CssService) -> Watcher:
    from stylectl.infrastructure.watcher import StyleWatcher

    ws = service.workspace
    return StyleWatcher(
        ws.source_dir,
        service.recompile,
        pattern=ws.settings.watch.pattern,
        on_complete=service._report_watch_result,
        on_error=service._report_watch_error,
    )
