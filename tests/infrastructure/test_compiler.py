"""Tests for stylesheet compiler backends."""

from __future__ import annotations

from pathlib import Path

import pytest

from stylectl.infrastructure.compiler import (
    PlainCssCompiler,
    SassCompiler,
    StylesheetCompileError,
    create_compiler,
)


class TestPlainCssCompiler:
    def test_returns_source_verbatim(self, tmp_path: Path) -> None:
        src = tmp_path / "amp.css"
        src.write_bytes(b"a{}\r\nb{}\n")
        assert PlainCssCompiler().compile(src) == "a{}\r\nb{}\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            PlainCssCompiler().compile(tmp_path / "nope.css")

    def test_undecodable_source(self, tmp_path: Path) -> None:
        src = tmp_path / "amp.css"
        src.write_bytes(b"body{content:'\xff'}")
        with pytest.raises(StylesheetCompileError, match="Not valid UTF-8") as exc_info:
            PlainCssCompiler().compile(src)
        assert exc_info.value.path == src
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


class TestSassCompiler:
    def test_compiles_compressed(self, tmp_path: Path) -> None:
        src = tmp_path / "amp.scss"
        src.write_text("body {\n  color: red;\n}\n", encoding="utf-8")
        assert SassCompiler().compile(src).strip() == "body{color:red}"

    def test_resolves_imports_next_to_source(self, tmp_path: Path) -> None:
        (tmp_path / "_base.scss").write_text("$accent: blue;\n", encoding="utf-8")
        src = tmp_path / "amp.scss"
        src.write_text('@import "base";\na { color: $accent; }\n', encoding="utf-8")
        assert SassCompiler().compile(src).strip() == "a{color:blue}"

    def test_syntax_error(self, tmp_path: Path) -> None:
        src = tmp_path / "broken.scss"
        src.write_text("body { color: red;\n", encoding="utf-8")
        with pytest.raises(StylesheetCompileError) as exc_info:
            SassCompiler().compile(src)
        assert exc_info.value.path == src

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            SassCompiler().compile(tmp_path / "nope.scss")


class TestCreateCompiler:
    def test_sass(self) -> None:
        assert isinstance(create_compiler("sass"), SassCompiler)

    def test_plain(self) -> None:
        assert isinstance(create_compiler("plain"), PlainCssCompiler)

    def test_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown compiler backend"):
            create_compiler("postcss")
