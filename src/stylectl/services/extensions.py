"""ExtensionService — the bulk extension stylesheet pass.

Extensions are built one at a time in key order. They share the output
tree with the entry points, so no two writes ever target it concurrently.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel

from stylectl.domain.extensions import ExtensionSpec
from stylectl.infrastructure.artifacts import ArtifactPaths, write_artifacts
from stylectl.services._helpers import display_path
from stylectl.services.base import BaseService
from stylectl.services.result import ServiceResult
from stylectl.services.telemetry import trace_span

logger = logging.getLogger(__name__)


class ExtensionBuildError(Exception):
    """The extension selection cannot be built (e.g. an unknown name)."""


class BuildExtensionsOptions(BaseModel):
    """Options for :meth:`ExtensionService.build_extensions`.

    Attributes:
        bundle_only_if_listed_in_files: Only build extensions whose stylesheet
            source appears in ``[build] files`` (when that list is non-empty).
        compile_only_css: Restrict the pass to extensions that carry CSS.
        compile_all: Build every extension, ignoring ``[build] extensions``.
    """

    model_config = {"frozen": True}

    bundle_only_if_listed_in_files: bool = False
    compile_only_css: bool = False
    compile_all: bool | None = None


class ExtensionService(BaseService):
    """Registry listing and per-extension stylesheet compilation."""

    def list_extensions(self) -> ServiceResult:
        mapping = self._workspace.extension_map()
        items = [
            {
                "id": key,
                "name": meta["name"],
                "version": meta["version"],
                "stylesheets": ExtensionSpec.model_validate(meta).stylesheets,
            }
            for key, meta in sorted(mapping.items())
        ]
        return ServiceResult(
            ok=True,
            op="list_extensions",
            data={"count": len(items), "items": items},
        )

    def source_paths(self, spec: ExtensionSpec) -> list[tuple[str, Path]]:
        """``(binary, source path)`` pairs for each stylesheet of *spec*."""
        base = self._workspace.extensions_dir / spec.name / spec.version
        return [(binary, base / f"{binary}.css") for binary in spec.stylesheets]

    def select_extensions(
        self,
        options: BuildExtensionsOptions,
        specs: Sequence[ExtensionSpec] | None = None,
    ) -> list[ExtensionSpec]:
        """Resolve which extensions a pass with *options* builds, in key order.

        *specs* is a registry snapshot already taken by the caller; when
        omitted the workspace registry is read.
        """
        if specs is None:
            specs = self._workspace.extension_specs()
        by_key = {spec.key: spec for spec in specs}
        selected = [by_key[key] for key in sorted(by_key)]

        wanted = [] if options.compile_all else list(self._workspace.settings.build.extensions)
        if wanted:
            known = {spec.name for spec in selected}
            unknown = sorted(set(wanted) - known)
            if unknown:
                msg = f"Unknown extension(s): {', '.join(unknown)}"
                raise ExtensionBuildError(msg)
            selected = [spec for spec in selected if spec.name in wanted]

        if options.compile_only_css:
            selected = [spec for spec in selected if spec.has_css]

        files = self._workspace.settings.build.files
        if options.bundle_only_if_listed_in_files and files:
            listed = {f.replace("\\", "/") for f in files}
            root = self._workspace.root
            selected = [
                spec
                for spec in selected
                if any(display_path(p, root) in listed for _, p in self.source_paths(spec))
            ]
        return selected

    def build_extension_css(self, spec: ExtensionSpec) -> list[ArtifactPaths]:
        """Compile every stylesheet of *spec* into the output tree."""
        written: list[ArtifactPaths] = []
        for binary, source in self.source_paths(spec):
            with trace_span(f"{spec.key}:{binary}"):
                css = self._workspace.compiler.compile(source)
                written.append(
                    write_artifacts(
                        self._workspace.output_root,
                        css,
                        module_name=f"{binary}-{spec.version}.css.js",
                        style_name=f"{binary}-{spec.version}.css",
                    )
                )
        return written

    def build_extensions(
        self,
        options: BuildExtensionsOptions,
        specs: Sequence[ExtensionSpec] | None = None,
    ) -> list[str]:
        """Run the bulk pass; return the keys of the extensions built.

        Failures propagate; artifacts already written stay in place.
        """
        built: list[str] = []
        for spec in self.select_extensions(options, specs):
            if not spec.has_css:
                continue
            self.build_extension_css(spec)
            logger.debug("Built extension styles for %s", spec.key)
            built.append(spec.key)
        return built
