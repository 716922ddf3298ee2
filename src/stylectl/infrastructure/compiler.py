"""Stylesheet compilation backends.

A compiler turns one stylesheet source file into final CSS text. The
pipeline calls ``compile`` exactly once per entry point and treats any
exception it raises as fatal for the run.
"""

from __future__ import annotations

import errno
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StylesheetCompileError(Exception):
    """A stylesheet could not be compiled (syntax error, unresolved import)."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class StylesheetCompiler(Protocol):
    """Compile a stylesheet source file into CSS text."""

    def compile(self, path: Path) -> str: ...


class SassCompiler:
    """libsass-backed compiler.

    Plain CSS is valid input. ``@import`` targets resolve against the source
    file's directory plus any configured *include_paths*.
    """

    def __init__(
        self,
        *,
        output_style: str = "compressed",
        include_paths: Sequence[Path] = (),
    ) -> None:
        self._output_style = output_style
        self._include_paths = [str(p) for p in include_paths]

    def compile(self, path: Path) -> str:
        import sass

        if not path.is_file():
            raise FileNotFoundError(errno.ENOENT, "Missing stylesheet", str(path))

        logger.debug("Compiling %s with libsass (%s)", path, self._output_style)
        try:
            return sass.compile(
                filename=str(path),
                output_style=self._output_style,
                include_paths=[str(path.parent), *self._include_paths],
            )
        except sass.CompileError as exc:
            raise StylesheetCompileError(path, str(exc).strip()) from exc


class PlainCssCompiler:
    """Pass-through compiler: the source text is the compiled text."""

    def compile(self, path: Path) -> str:
        logger.debug("Reading %s verbatim", path)
        try:
            with path.open(encoding="utf-8", newline="") as fh:
                return fh.read()
        except UnicodeDecodeError as exc:
            raise StylesheetCompileError(path, f"Not valid UTF-8: {exc.reason}") from exc


def create_compiler(
    backend: str,
    *,
    output_style: str = "compressed",
    include_paths: Sequence[Path] = (),
) -> StylesheetCompiler:
    """Build the compiler named by the ``[compiler] backend`` setting."""
    if backend == "sass":
        return SassCompiler(output_style=output_style, include_paths=include_paths)
    if backend == "plain":
        return PlainCssCompiler()
    msg = f"Unknown compiler backend: {backend!r}"
    raise ValueError(msg)
