"""Shared service-layer helper functions."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

import structlog

log = structlog.get_logger("stylectl.build")


def elapsed_ms(start_time: float) -> float:
    """Milliseconds since *start_time* (a ``time.perf_counter()`` reading)."""
    return round((time.perf_counter() - start_time) * 1000, 2)


def format_duration(ms: float) -> str:
    """Human duration: ``850 ms`` or ``2.3 s``."""
    if ms < 1000:
        return f"{ms:.0f} ms"
    return f"{ms / 1000:.1f} s"


def display_path(path: Path, root: Path) -> str:
    """*path* relative to *root* when inside it, else absolute (POSIX separators)."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def end_build_step(label: str, target: str, start_time: float) -> dict[str, Any]:
    """Log completion of a build step and return its report.

    Examples:
        >>> end_build_step("Recompiled all CSS files into", "build/", start)
        {'message': 'Recompiled all CSS files into build/', 'elapsed_ms': 412.5}
    """
    ms = elapsed_ms(start_time)
    message = f"{label} {target}"
    log.info("build_step.complete", step=message, elapsed=format_duration(ms))
    return {"message": message, "elapsed_ms": ms}
