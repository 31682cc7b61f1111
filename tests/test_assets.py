"""Tests for frontend asset writing."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

from docdata.assets import STATIC_ASSETS, AssetWriter


def test_asset_writer_renders_index_with_crate_name(tmp_path: Path) -> None:
    written = AssetWriter().write(tmp_path / "doc", crate_name="demo")

    index = (tmp_path / "doc" / "index.html").read_text(encoding="utf-8")
    assert "<title>demo documentation</title>" in index
    assert 'data-source="data.json"' in index
    assert tmp_path / "doc" / "index.html" in written


def test_asset_writer_escapes_crate_name(tmp_path: Path) -> None:
    AssetWriter().write(tmp_path, crate_name="<demo>")

    index = (tmp_path / "index.html").read_text(encoding="utf-8")
    assert "&lt;demo&gt;" in index


def test_asset_writer_copies_static_files_verbatim(tmp_path: Path) -> None:
    written = AssetWriter().write(tmp_path, crate_name="demo")

    frontend = resources.files("docdata").joinpath("frontend")
    for name in STATIC_ASSETS:
        expected = frontend
        for part in name.split("/"):
            expected = expected.joinpath(part)
        assert (tmp_path / name).read_bytes() == expected.read_bytes()
        assert tmp_path / name in written
    assert (tmp_path / "assets").is_dir()
