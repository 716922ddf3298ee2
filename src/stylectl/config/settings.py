"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``STYLECTL_*`` prefix
  3. TOML file    — ``stylectl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`stylectl.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from stylectl.config.discovery import find_config
from stylectl.config.models import BuildConfig, CompilerConfig, PluginsConfig, WatchConfig
from stylectl.domain.entry_points import CSS_ENTRY_POINTS, EntryPointDescriptor, build_registry
from stylectl.domain.extensions import ExtensionSpec


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``stylectl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class StyleSettings(BaseSettings):
    """Unified settings for the stylectl CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.

    Attributes:
        project_root: Directory that relative paths resolve against (parent
            of ``stylectl.toml``, or CWD if no config found).
        config_path: The TOML file in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "STYLECTL_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    build: BuildConfig = Field(default_factory=BuildConfig)
    compiler: CompilerConfig = Field(default_factory=CompilerConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    entry_points: tuple[EntryPointDescriptor, ...] = CSS_ENTRY_POINTS
    extensions: list[ExtensionSpec] = Field(default_factory=list)

    @field_validator("entry_points")
    @classmethod
    def _unique_entry_points(
        cls, value: tuple[EntryPointDescriptor, ...]
    ) -> tuple[EntryPointDescriptor, ...]:
        return build_registry(value)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> StyleSettings:
        """Construct settings from CLI invocation.

        Discovers ``stylectl.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    # ------------------------------------------------------------------
    # Resolved paths
    # ------------------------------------------------------------------

    def resolve(self, value: str) -> Path:
        """Resolve a configured path against the project root."""
        path = Path(value)
        return path if path.is_absolute() else self.project_root / path

    @property
    def source_dir(self) -> Path:
        return self.resolve(self.build.source_dir)

    @property
    def output_root(self) -> Path:
        return self.resolve(self.build.output_root)

    @property
    def extensions_dir(self) -> Path:
        return self.resolve(self.build.extensions_dir)

    @property
    def extensions_map_path(self) -> Path:
        return self.resolve(self.build.extensions_map)
