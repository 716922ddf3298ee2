"""Tests for artifact writing — module/stylesheet pairs and the extension map."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from stylectl.domain.jsify import parse_css_module
from stylectl.infrastructure.artifacts import (
    atomic_write_text,
    ensure_output_tree,
    write_artifacts,
    write_extensions_map,
)


class TestEnsureOutputTree:
    def test_creates_tree(self, tmp_path: Path) -> None:
        css_dir = ensure_output_tree(tmp_path / "build")
        assert css_dir == tmp_path / "build" / "css"
        assert css_dir.is_dir()

    def test_idempotent(self, tmp_path: Path) -> None:
        ensure_output_tree(tmp_path / "build")
        ensure_output_tree(tmp_path / "build")
        assert (tmp_path / "build" / "css").is_dir()


class TestWriteArtifacts:
    def test_scenario_layout(self, tmp_path: Path) -> None:
        out = tmp_path / "build"
        paths = write_artifacts(out, "body{color:red}", module_name="css.js", style_name="v0.css")
        assert paths.module_path == out / "css.js"
        assert paths.style_path == out / "css" / "v0.css"
        assert paths.module_path.read_text(encoding="utf-8") == (
            'export const cssText = "body{color:red}"'
        )
        assert paths.style_path.read_text(encoding="utf-8") == "body{color:red}"

    def test_outputs_agree(self, tmp_path: Path) -> None:
        text = 'a::before{content:"\\201C"}\n.x{background:url("a b.png")}\n'
        paths = write_artifacts(tmp_path, text, module_name="m.js", style_name="m.css")
        module_text = parse_css_module(paths.module_path.read_text(encoding="utf-8"))
        style_text = paths.style_path.read_bytes().decode("utf-8")
        assert module_text == style_text == text

    def test_stylesheet_is_byte_exact(self, tmp_path: Path) -> None:
        text = "a{}\r\nb{content:'ü'}\n"
        paths = write_artifacts(tmp_path, text, module_name="m.js", style_name="m.css")
        assert paths.style_path.read_bytes() == text.encode("utf-8")

    def test_overwrites_previous_output(self, tmp_path: Path) -> None:
        write_artifacts(tmp_path, "old{}" * 50, module_name="m.js", style_name="m.css")
        paths = write_artifacts(tmp_path, "new{}", module_name="m.js", style_name="m.css")
        assert paths.style_path.read_text(encoding="utf-8") == "new{}"

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        write_artifacts(tmp_path, "a{}", module_name="m.js", style_name="m.css")
        leftovers = [p.name for p in tmp_path.rglob("*.tmp")]
        assert leftovers == []


class TestAtomicWrite:
    def test_failed_write_keeps_original(self, tmp_path: Path) -> None:
        target = tmp_path / "v0.css"
        target.write_text("original", encoding="utf-8")
        with pytest.raises(UnicodeEncodeError):
            atomic_write_text(target, "\ud800")  # lone surrogate
        assert target.read_text(encoding="utf-8") == "original"
        assert list(tmp_path.glob("*.tmp")) == []


class TestWriteExtensionsMap:
    def test_writes_json(self, tmp_path: Path) -> None:
        path = tmp_path / "EXTENSIONS_CSS_MAP"
        mapping = {"amp-accordion-0.1": {"name": "amp-accordion", "has_css": True}}
        write_extensions_map(path, mapping)
        assert json.loads(path.read_text(encoding="utf-8")) == mapping

    def test_replaces_prior_content(self, tmp_path: Path) -> None:
        path = tmp_path / "EXTENSIONS_CSS_MAP"
        path.write_text('{"stale": {}, "padding": "' + "x" * 500 + '"}', encoding="utf-8")
        write_extensions_map(path, {})
        assert json.loads(path.read_text(encoding="utf-8")) == {}
