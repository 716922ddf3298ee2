"""Tests for stylectl.toml walk-up discovery."""

from pathlib import Path

import pytest

from stylectl.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME, find_config


class TestFindConfig:
    def test_finds_in_start_dir(self, tmp_path: Path) -> None:
        cfg = tmp_path / CONFIG_FILENAME
        cfg.write_text("", encoding="utf-8")
        assert find_config(tmp_path) == cfg.resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        cfg = tmp_path / CONFIG_FILENAME
        cfg.write_text("", encoding="utf-8")
        nested = tmp_path / "css" / "themes"
        nested.mkdir(parents=True)
        assert find_config(nested) == cfg.resolve()

    def test_not_found(self, tmp_path: Path) -> None:
        assert find_config(tmp_path) is None

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("", encoding="utf-8")
        other = tmp_path / "other.toml"
        other.write_text("", encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(other))
        assert find_config(tmp_path) == other

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None
