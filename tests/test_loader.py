"""Tests for cssdts.loader."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from cssdts.loader import FileSystemLoader, SourceReadError, extract_tokens
from cssdts.stores import TokenCache


def test_extract_tokens_lists_class_selectors_in_order() -> None:
    text = ".foo { color: red } .bar-baz:hover, .foo .qux { margin: 0 }"

    assert list(extract_tokens(text)) == ["foo", "bar-baz", "qux"]


def test_extract_tokens_ignores_comments_and_strings() -> None:
    text = """
    /* .hidden { display: none } */
    .shown { background: url("img/sprite.png"); }
    .after { content: ".not-a-class { }"; }
    """

    assert list(extract_tokens(text)) == ["shown", "after"]


def test_extract_tokens_skips_global_selectors() -> None:
    text = ":global(.g) .local { } :global .g2 { } .plain :global(.g3) { }"

    assert list(extract_tokens(text)) == ["local", "plain"]


def test_extract_tokens_reads_nested_rules_and_exports() -> None:
    text = """
    @media (min-width: 10.5px) {
      .inner { color: blue; }
    }
    :export {
      primaryColor: #fff;
      gutter: 8px;
    }
    """

    assert extract_tokens(text) == {"inner": "inner", "primaryColor": "#fff", "gutter": "8px"}


def test_fetch_reads_file_and_populates_cache(tmp_path: Path) -> None:
    source = tmp_path / "button.css"
    source.write_text(".root {} .label {}", encoding="utf-8")
    cache = TokenCache()
    loader = FileSystemLoader(tmp_path, cache)

    tokens = asyncio.run(loader.fetch("button.css"))

    assert tokens == {"root": "root", "label": "label"}
    assert source in cache


def test_fetch_serves_cached_tokens_until_cleared(tmp_path: Path) -> None:
    source = tmp_path / "button.css"
    source.write_text(".old {}", encoding="utf-8")
    loader = FileSystemLoader(tmp_path)

    assert asyncio.run(loader.fetch(source)) == {"old": "old"}
    source.write_text(".new {}", encoding="utf-8")
    assert asyncio.run(loader.fetch(source)) == {"old": "old"}

    loader.cache.clear()
    assert asyncio.run(loader.fetch(source)) == {"new": "new"}


def test_fetch_prefers_initial_contents(tmp_path: Path) -> None:
    loader = FileSystemLoader(tmp_path)

    tokens = asyncio.run(loader.fetch(tmp_path / "unsaved.css", initial_contents=".draft {}"))

    assert tokens == {"draft": "draft"}
    assert loader.cache.get(tmp_path / "unsaved.css") == {"draft": "draft"}


def test_fetch_missing_file_raises_source_read_error(tmp_path: Path) -> None:
    loader = FileSystemLoader(tmp_path)

    with pytest.raises(SourceReadError) as excinfo:
        asyncio.run(loader.fetch("missing.css"))

    assert isinstance(excinfo.value.cause, FileNotFoundError)
    assert excinfo.value.path == (tmp_path / "missing.css").resolve()


def test_fetch_undecodable_file_raises_source_read_error(tmp_path: Path) -> None:
    source = tmp_path / "binary.css"
    source.write_bytes(b"\xff\xfe\x00.a {}")
    loader = FileSystemLoader(tmp_path)

    with pytest.raises(SourceReadError):
        asyncio.run(loader.fetch(source))
