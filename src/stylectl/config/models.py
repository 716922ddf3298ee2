"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, stylectl.toml only contains
overrides. A project laid out as ``css/`` + ``build/`` needs no config file.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class BuildConfig(BaseModel):
    """[build] section.

    Relative paths resolve against the project root.
    """

    model_config = {"frozen": True}

    source_dir: str = "css"
    output_root: str = "build"
    extensions_dir: str = "extensions"
    extensions_map: str = "EXTENSIONS_CSS_MAP"
    # Extension names to build when not compiling all; empty means every one.
    extensions: list[str] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)


class CompilerConfig(BaseModel):
    """[compiler] section."""

    model_config = {"frozen": True}

    backend: Literal["sass", "plain"] = "sass"
    output_style: Literal["nested", "expanded", "compact", "compressed"] = "compressed"
    include_paths: list[str] = Field(default_factory=list)


class WatchConfig(BaseModel):
    """[watch] section."""

    model_config = {"frozen": True}

    pattern: str = "**/*.css"


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True

