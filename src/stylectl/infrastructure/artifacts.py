"""Build artifact I/O.

INVARIANT: An entry point's module artifact and stylesheet artifact are
both derived from the single ``text`` passed to :func:`write_artifacts`.

Every file is written to a temporary sibling and moved into place with
``os.replace``, so readers (and overlapping watch runs) never observe a
half-written artifact.
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from stylectl.domain.jsify import render_css_module

CSS_SUBDIR = "css"


@dataclass(frozen=True)
class ArtifactPaths:
    """Where one compiled stylesheet was written."""

    module_path: Path
    style_path: Path


def ensure_output_tree(output_root: Path) -> Path:
    """Create ``<output_root>/`` and ``<output_root>/css/``; return the css dir.

    Idempotent: existing directories are not an error.
    """
    css_dir = output_root / CSS_SUBDIR
    css_dir.mkdir(parents=True, exist_ok=True)
    return css_dir


def atomic_write_text(path: Path, content: str) -> None:
    """Write *content* to *path* as UTF-8 without newline translation."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_artifacts(
    output_root: Path,
    text: str,
    *,
    module_name: str,
    style_name: str,
) -> ArtifactPaths:
    """Write the module artifact and the raw stylesheet artifact for *text*.

    - ``<output_root>/<module_name>``: ``export const cssText = "<text>"``
    - ``<output_root>/css/<style_name>``: *text*, byte-for-byte
    """
    css_dir = ensure_output_tree(output_root)
    module_path = output_root / module_name
    style_path = css_dir / style_name
    module_path.parent.mkdir(parents=True, exist_ok=True)
    style_path.parent.mkdir(parents=True, exist_ok=True)

    atomic_write_text(module_path, render_css_module(text))
    atomic_write_text(style_path, text)
    return ArtifactPaths(module_path=module_path, style_path=style_path)


def write_extensions_map(path: Path, mapping: dict[str, Any]) -> None:
    """Replace the extension map side file with *mapping* as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    atomic_write_text(path, json.dumps(mapping, separators=(",", ":")))
