"""Tests for StyleSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from stylectl.config.settings import StyleSettings
from stylectl.domain.entry_points import CSS_ENTRY_POINTS


class TestStyleSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = StyleSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.build.source_dir == "css"
        assert settings.build.output_root == "build"
        assert settings.build.extensions_map == "EXTENSIONS_CSS_MAP"
        assert settings.compiler.backend == "sass"
        assert settings.compiler.output_style == "compressed"
        assert settings.watch.pattern == "**/*.css"
        assert settings.plugins.enabled is True
        assert settings.entry_points == CSS_ENTRY_POINTS
        assert settings.extensions == []

    def test_resolved_paths(self, tmp_path: Path) -> None:
        settings = StyleSettings.from_cli(project_root=tmp_path)
        assert settings.source_dir == tmp_path / "css"
        assert settings.output_root == tmp_path / "build"
        assert settings.extensions_dir == tmp_path / "extensions"
        assert settings.extensions_map_path == tmp_path / "EXTENSIONS_CSS_MAP"

    def test_absolute_paths_kept(self, tmp_path: Path) -> None:
        elsewhere = tmp_path / "out"
        assert StyleSettings.from_cli(project_root=tmp_path).resolve(str(elsewhere)) == elsewhere

    def test_frozen(self, tmp_path: Path) -> None:
        settings = StyleSettings.from_cli(project_root=tmp_path)
        with pytest.raises(ValidationError):
            settings.quiet = True  # type: ignore[misc]

    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = StyleSettings.from_cli(project_root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "stylectl.toml").write_text(
            '[build]\noutput_root = "dist"\n[compiler]\nbackend = "plain"\n', encoding="utf-8"
        )
        settings = StyleSettings.from_cli(project_root=tmp_path)
        assert settings.output_root == tmp_path / "dist"
        assert settings.compiler.backend == "plain"
        assert settings.build.source_dir == "css"  # default preserved

    def test_config_discovered_by_walk_up(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "stylectl.toml").write_text('[watch]\npattern = "*.scss"\n', encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = StyleSettings.from_cli()
        assert settings.project_root == tmp_path.resolve()
        assert settings.watch.pattern == "*.scss"

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "stylectl.toml").write_text("", encoding="utf-8")
        settings = StyleSettings.from_cli(project_root=tmp_path)
        assert settings.build.output_root == "build"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "styles.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[build]\nsource_dir = "styles"\n', encoding="utf-8")
        settings = StyleSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.source_dir == tmp_path / "styles"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "stylectl.toml").write_text("[build\n", encoding="utf-8")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            StyleSettings.from_cli(project_root=tmp_path)

    def test_entry_points_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "stylectl.toml").write_text(
            "[[entry_points]]\n"
            'source_path = "main.css"\n'
            'module_output_name = "main.css.js"\n'
            'style_output_name = "main.css"\n',
            encoding="utf-8",
        )
        settings = StyleSettings.from_cli(project_root=tmp_path)
        assert [e.source_path for e in settings.entry_points] == ["main.css"]

    def test_duplicate_entry_points_rejected(self, tmp_path: Path) -> None:
        entry = (
            "[[entry_points]]\n"
            'source_path = "main.css"\n'
            'module_output_name = "main.css.js"\n'
            'style_output_name = "main.css"\n'
        )
        (tmp_path / "stylectl.toml").write_text(entry * 2, encoding="utf-8")
        with pytest.raises(ValidationError, match="Duplicate stylesheet entry point"):
            StyleSettings.from_cli(project_root=tmp_path)

    def test_extensions_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "stylectl.toml").write_text(
            '[[extensions]]\nname = "amp-carousel"\nversion = "0.1"\nhas_css = true\n',
            encoding="utf-8",
        )
        settings = StyleSettings.from_cli(project_root=tmp_path)
        assert [e.key for e in settings.extensions] == ["amp-carousel-0.1"]

    def test_unknown_backend_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "stylectl.toml").write_text('[compiler]\nbackend = "less"\n', encoding="utf-8")
        with pytest.raises(ValidationError):
            StyleSettings.from_cli(project_root=tmp_path)


class TestEnvOverrides:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "stylectl.toml").write_text('[build]\noutput_root = "dist"\n', encoding="utf-8")
        monkeypatch.setenv("STYLECTL_BUILD__OUTPUT_ROOT", "out")
        settings = StyleSettings.from_cli(project_root=tmp_path)
        assert settings.output_root == tmp_path / "out"

    def test_cli_flag_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STYLECTL_QUIET", "true")
        settings = StyleSettings.from_cli(project_root=tmp_path, quiet=False)
        assert settings.quiet is False
