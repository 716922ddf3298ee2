"""Extension declarations and the extension-to-stylesheet map.

The map is keyed by ``<name>-<version>`` and serialized verbatim to a side
file that test tooling reads to map changed CSS files to extensions.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field


class ExtensionSpec(BaseModel):
    """A registered extension and its stylesheet metadata."""

    model_config = {"frozen": True}

    name: str
    version: str
    has_css: bool = False
    css_binaries: list[str] = Field(default_factory=list)
    latest_version: str | None = None

    @property
    def key(self) -> str:
        return f"{self.name}-{self.version}"

    @property
    def stylesheets(self) -> list[str]:
        """CSS binary names to compile; defaults to the extension name."""
        if not self.has_css:
            return []
        return list(self.css_binaries) or [self.name]


ExtensionStyleMap = dict[str, dict[str, Any]]


def build_extension_map(specs: Iterable[ExtensionSpec]) -> ExtensionStyleMap:
    """Build the extension map from *specs*.

    Later declarations replace earlier ones with the same key, so a plugin
    can override a config-declared extension.
    """
    mapping: ExtensionStyleMap = {}
    for spec in specs:
        mapping[spec.key] = spec.model_dump(mode="json")
    return mapping
