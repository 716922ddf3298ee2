"""Shared pytest fixtures and test helpers for stylectl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from stylectl.config.settings import StyleSettings
from stylectl.infrastructure.compiler import StylesheetCompileError
from stylectl.infrastructure.workspace import Workspace
from stylectl.plugins.manager import PluginManager
from stylectl.services.telemetry import disable_telemetry

AMP_CSS = "body{color:red}"
VIDEO_CSS = ".i-amphtml-video-mask{display:block}"

PLAIN_CONFIG = '[compiler]\nbackend = "plain"\n'


class RecordingCompiler:
    """Compiler double: returns the source text verbatim and records each call.

    Sources named in *fail_on* raise StylesheetCompileError instead.
    """

    def __init__(self, fail_on: tuple[str, ...] = ()) -> None:
        self.calls: list[str] = []
        self.fail_on = set(fail_on)

    def compile(self, path: Path) -> str:
        self.calls.append(path.name)
        if path.name in self.fail_on:
            raise StylesheetCompileError(path, "Unclosed block")
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore logger state changed by configure_logging()."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    style = logging.getLogger("stylectl")
    style_level = style.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    style.setLevel(style_level)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    yield
    disable_telemetry()


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STYLECTL_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project with the two default entry-point stylesheets."""
    css_dir = tmp_path / "css"
    css_dir.mkdir()
    (css_dir / "amp.css").write_text(AMP_CSS, encoding="utf-8")
    (css_dir / "video-autoplay.css").write_text(VIDEO_CSS, encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> StyleSettings:
    return StyleSettings.from_cli(project_root=project_root)


@pytest.fixture
def compiler() -> RecordingCompiler:
    return RecordingCompiler()


@pytest.fixture
def plugin_manager() -> PluginManager:
    """A plugin manager with no discovery (nothing installed leaks in)."""
    return PluginManager()


@pytest.fixture
def workspace(
    settings: StyleSettings,
    compiler: RecordingCompiler,
    plugin_manager: PluginManager,
) -> Workspace:
    return Workspace(settings, compiler=compiler, plugin_manager=plugin_manager)


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp project using the pass-through compiler.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    (project_root / "stylectl.toml").write_text(PLAIN_CONFIG, encoding="utf-8")
    monkeypatch.chdir(project_root)


def add_extension(root: Path, name: str, version: str, css: str, binary: str | None = None) -> Path:
    """Create ``extensions/<name>/<version>/<binary>.css`` under *root*."""
    path = root / "extensions" / name / version / f"{binary or name}.css"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(css, encoding="utf-8")
    return path
