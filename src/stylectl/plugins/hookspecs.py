"""Pluggy hook specifications for stylectl.

``register_extensions`` contributes extensions to the registry snapshot
(and so to the extension map and the bulk CSS pass). ``post_css_build``
fires after a successful pipeline run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from stylectl.domain.extensions import ExtensionSpec

PROJECT_NAME = "stylectl"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class StylectlHookSpec:
    """Hook specifications for the stylectl plugin system."""

    @hookspec
    def register_extensions(self) -> list[ExtensionSpec | dict[str, Any]] | None:
        """Return extensions to add to the registry."""

    @hookspec
    def post_css_build(
        self,
        output_root: str,
        entry_points: list[str],
        extensions: list[str],
    ) -> None:
        """Called after all entry points and extension styles were rebuilt."""
