"""Stylesheet entry points and the default registry.

Each entry point compiles to two artifacts in the build output tree:
an importable module embedding the CSS text, and the raw stylesheet.
Registry order is compilation order.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel


class EntryPointDescriptor(BaseModel):
    """One declared stylesheet entry point.

    Attributes:
        source_path: Path of the stylesheet, relative to the source directory.
        module_output_name: File name of the generated module under the output root.
        style_output_name: File name of the raw stylesheet under ``<output_root>/css``.
    """

    model_config = {"frozen": True}

    source_path: str
    module_output_name: str
    style_output_name: str

    def to_summary(self) -> dict[str, str]:
        return {
            "source": self.source_path,
            "module": self.module_output_name,
            "style": self.style_output_name,
        }


CSS_ENTRY_POINTS: tuple[EntryPointDescriptor, ...] = (
    EntryPointDescriptor(
        source_path="amp.css",
        module_output_name="css.js",
        style_output_name="v0.css",
    ),
    EntryPointDescriptor(
        source_path="video-autoplay.css",
        module_output_name="video-autoplay.css.js",
        style_output_name="video-autoplay.css",
    ),
)


def build_registry(entries: Iterable[EntryPointDescriptor]) -> tuple[EntryPointDescriptor, ...]:
    """Freeze *entries* into an ordered registry.

    Raises ValueError when two entries share a source path, since the source
    path is the entry point's identity.
    """
    registry = tuple(entries)
    seen: set[str] = set()
    for entry in registry:
        if entry.source_path in seen:
            msg = f"Duplicate stylesheet entry point: {entry.source_path!r}"
            raise ValueError(msg)
        seen.add(entry.source_path)
    return registry
