"""File watcher that recompiles stylesheets on change.

Architecture:
- StyleWatcher: start/stop lifecycle around a watchdog Observer
- _StylesheetEventHandler: filters events down to stylesheet sources
- _RecompileLoop: single-flight worker; at most one recompile runs at a
  time, and triggers that arrive during a run collapse into one follow-up

A failing recompile is logged and reported to ``on_error``; the watcher
keeps running.
"""

from __future__ import annotations

import enum
import fnmatch
import threading
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

if TYPE_CHECKING:
    from watchdog.observers.api import BaseObserver

logger = structlog.get_logger(__name__)

_WATCHED_EVENTS = frozenset({"created", "modified", "moved", "deleted"})


class WatcherState(enum.Enum):
    """State of a StyleWatcher."""

    STOPPED = "stopped"
    RUNNING = "running"


class WatcherError(Exception):
    """Watcher started twice, or the watched directory does not exist."""


def matches_pattern(relative_path: str, pattern: str) -> bool:
    """Glob-match a POSIX relative path; a leading ``**/`` also matches the top level."""
    if fnmatch.fnmatch(relative_path, pattern):
        return True
    return pattern.startswith("**/") and fnmatch.fnmatch(relative_path, pattern[3:])


class _StylesheetEventHandler(FileSystemEventHandler):
    """Forward stylesheet changes under *root* to *on_change*."""

    def __init__(self, root: Path, pattern: str, on_change: Callable[[], None]) -> None:
        super().__init__()
        self._root = root.resolve()
        self._pattern = pattern
        self._on_change = on_change

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in _WATCHED_EVENTS:
            return
        paths = [event.src_path]
        dest = getattr(event, "dest_path", "")
        if dest:
            paths.append(dest)
        if any(self._matches(p) for p in paths):
            logger.debug("stylesheet_event", event_type=event.event_type, path=str(paths[0]))
            self._on_change()

    def _matches(self, raw: str | bytes) -> bool:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            relative = Path(raw).resolve().relative_to(self._root)
        except ValueError:
            return False
        return matches_pattern(relative.as_posix(), self._pattern)


class _RecompileLoop:
    """Run *job* on a worker thread, coalescing requests made while it runs."""

    def __init__(self, job: Callable[[], None]) -> None:
        self._job = job
        self._cond = threading.Condition()
        self._pending = False
        self._stopped = False
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        self._stopped = False
        self._thread = threading.Thread(target=self._loop, name="stylectl-recompile", daemon=True)
        self._thread.start()

    def request(self) -> None:
        with self._cond:
            self._pending = True
            self._cond.notify()

    def stop(self, timeout: float = 5.0) -> None:
        with self._cond:
            self._stopped = True
            self._pending = False
            self._cond.notify()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def _loop(self) -> None:
        while True:
            with self._cond:
                while not self._pending and not self._stopped:
                    self._cond.wait()
                if self._stopped:
                    return
                self._pending = False
            self._job()


class StyleWatcher:
    """Watches a stylesheet source tree and recompiles on change.

    Example:
        >>> with StyleWatcher(Path("css"), recompile=svc.recompile):
        ...     time.sleep(3600)
    """

    def __init__(
        self,
        source_dir: Path,
        recompile: Callable[[], Any],
        *,
        pattern: str = "**/*.css",
        on_complete: Callable[[Any], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
        observer_factory: Callable[[], BaseObserver] = Observer,
    ) -> None:
        if not source_dir.is_dir():
            msg = f"Stylesheet directory does not exist: {source_dir}"
            raise WatcherError(msg)

        self._source_dir = source_dir
        self._recompile = recompile
        self._pattern = pattern
        self._on_complete = on_complete
        self._on_error = on_error
        self._observer_factory = observer_factory

        self._state = WatcherState.STOPPED
        self._observer: BaseObserver | None = None
        self._loop = _RecompileLoop(self._run_once)
        self._stopped = threading.Event()
        self._lock = threading.Lock()
        self._log = logger.bind(source_dir=str(source_dir), pattern=pattern)

    @property
    def source_dir(self) -> Path:
        return self._source_dir

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def state(self) -> WatcherState:
        with self._lock:
            return self._state

    def start(self) -> None:
        """Start watching.

        Raises:
            WatcherError: If the watcher is already running.
        """
        with self._lock:
            if self._state == WatcherState.RUNNING:
                raise WatcherError("Watcher is already running")

            handler = _StylesheetEventHandler(self._source_dir, self._pattern, self.trigger)
            self._loop.start()
            try:
                observer = self._observer_factory()
                observer.schedule(handler, str(self._source_dir), recursive=True)
                observer.start()
            except Exception:
                self._loop.stop()
                raise
            self._observer = observer

            self._stopped.clear()
            self._state = WatcherState.RUNNING
            self._log.info("watcher_started")

    def stop(self) -> None:
        """Stop watching. Safe to call when not running."""
        with self._lock:
            if self._state == WatcherState.STOPPED:
                return

            if self._observer is not None:
                self._observer.stop()
                self._observer.join(timeout=5.0)
                self._observer = None
            self._loop.stop()

            self._state = WatcherState.STOPPED
            self._stopped.set()
            self._log.info("watcher_stopped")

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the watcher is stopped; return False on timeout."""
        return self._stopped.wait(timeout)

    def trigger(self) -> None:
        """Request a recompile (coalesced with any run in progress)."""
        self._loop.request()

    def __enter__(self) -> StyleWatcher:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.stop()

    def _run_once(self) -> None:
        self._log.info("stylesheet_change_detected")
        try:
            result = self._recompile()
        except Exception as exc:
            self._log.error("recompile_failed", error=str(exc), exc_info=True)
            if self._on_error is not None:
                self._on_error(exc)
            return
        if self._on_complete is not None:
            self._on_complete(result)
