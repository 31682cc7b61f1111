"""Tests for the save-analysis backed source."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docdata.analysis import SaveAnalysisSource
from docdata.analysis.save_analysis import parse_kind
from docdata.errors import AnalysisLoadError, CrateNotFound, DefinitionUnavailable
from docdata.extractor import SymbolExtractor
from docdata.models import AnalysisId, DefKind
from tests._fixtures.analysis_builder import CrateBuilder


def test_loads_root_with_prefixed_qualname(crate_builder: CrateBuilder) -> None:
    crate_builder.set_docs(0, "Demo crate")
    crate_builder.write()

    source = SaveAnalysisSource.from_directory(crate_builder.analysis_dir)
    root_id = source.resolve_root("demo")
    root = source.get_definition(root_id)

    assert source.roots() == [(AnalysisId(krate="demo", index=0), "demo")]
    assert root.kind is DefKind.MOD
    assert root.qualname == "demo::"
    assert root.docs == "Demo crate"


def test_enumerates_direct_children_in_file_order(crate_builder: CrateBuilder) -> None:
    module = crate_builder.add("Mod", "a", docs="mod a")
    crate_builder.add("Function", "f")
    crate_builder.add("Struct", "Inner", parent=module)
    crate_builder.write()

    source = SaveAnalysisSource.from_directory(crate_builder.analysis_dir)
    children = list(source.for_each_child(source.resolve_root("demo")))

    assert [(child.kind, child.name, child.qualname, child.docs) for child in children] == [
        (DefKind.MOD, "a", "demo::a", "mod a"),
        (DefKind.FUNCTION, "f", "demo::f", ""),
    ]


def test_unknown_crate_is_not_found(crate_builder: CrateBuilder) -> None:
    crate_builder.write()
    source = SaveAnalysisSource.from_directory(crate_builder.analysis_dir)

    with pytest.raises(CrateNotFound):
        source.resolve_root("other")


def test_missing_directory_raises_load_error(tmp_path: Path) -> None:
    with pytest.raises(AnalysisLoadError):
        SaveAnalysisSource.from_directory(tmp_path / "missing")


def test_malformed_json_raises_load_error(tmp_path: Path) -> None:
    path = tmp_path / "libbroken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(AnalysisLoadError):
        SaveAnalysisSource.from_files([path])


def test_missing_prelude_raises_load_error(tmp_path: Path) -> None:
    path = tmp_path / "libbroken.json"
    path.write_text(json.dumps({"defs": []}), encoding="utf-8")

    with pytest.raises(AnalysisLoadError):
        SaveAnalysisSource.from_files([path])


def test_unknown_kind_raises_load_error(crate_builder: CrateBuilder) -> None:
    crate_builder.add("Gadget", "g")
    crate_builder.write()

    with pytest.raises(AnalysisLoadError):
        SaveAnalysisSource.from_directory(crate_builder.analysis_dir)


@pytest.mark.parametrize(
    ("raw", "kind"),
    [
        ("Mod", DefKind.MOD),
        ("TupleVariant", DefKind.TUPLE),
        ("StructVariant", DefKind.STRUCT),
        ("ForeignFunction", DefKind.FUNCTION),
        ("ForeignStatic", DefKind.STATIC),
        ("ExternType", DefKind.TYPE),
    ],
)
def test_parse_kind_maps_save_analysis_kinds(raw: str, kind: DefKind) -> None:
    assert parse_kind(raw) is kind


def test_dangling_child_raises_definition_unavailable(crate_builder: CrateBuilder) -> None:
    crate_builder.add_raw_child({"krate": 0, "index": 99})
    crate_builder.write()
    source = SaveAnalysisSource.from_directory(crate_builder.analysis_dir)

    with pytest.raises(DefinitionUnavailable):
        list(source.for_each_child(source.resolve_root("demo")))


def test_children_from_other_crates_are_ignored(crate_builder: CrateBuilder) -> None:
    crate_builder.add_raw_child({"krate": 3, "index": 7})
    crate_builder.write()
    source = SaveAnalysisSource.from_directory(crate_builder.analysis_dir)

    assert list(source.for_each_child(source.resolve_root("demo"))) == []


def test_reload_picks_up_new_docs(crate_builder: CrateBuilder) -> None:
    crate_builder.set_docs(0, "Before")
    crate_builder.write()
    source = SaveAnalysisSource.from_directory(crate_builder.analysis_dir)
    root_id = source.resolve_root("demo")

    crate_builder.set_docs(0, "After")
    crate_builder.write()
    source.reload()

    assert source.get_definition(root_id).docs == "After"


def test_multiple_crates_register_separate_roots(tmp_path: Path) -> None:
    first = CrateBuilder(tmp_path, "first")
    first.write()
    second = CrateBuilder(tmp_path, "second")
    second.write()

    source = SaveAnalysisSource.from_directory(first.analysis_dir)

    assert [name for _, name in source.roots()] == ["first", "second"]
    assert source.get_definition(source.resolve_root("second")).qualname == "second::"


def test_parentless_modules_are_not_roots(crate_builder: CrateBuilder) -> None:
    crate_builder.add("Mod", "a", docs="mod a", record_parent=False)
    crate_builder.add("Mod", "b", record_parent=False)
    crate_builder.write()

    source = SaveAnalysisSource.from_directory(crate_builder.analysis_dir)

    assert source.roots() == [(AnalysisId(krate="demo", index=0), "demo")]


def test_root_is_found_when_listed_after_modules(crate_builder: CrateBuilder) -> None:
    crate_builder.set_docs(0, "Demo crate")
    crate_builder.add("Mod", "a", docs="mod a", record_parent=False)
    crate_builder.move_to_end(0)
    crate_builder.write()

    source = SaveAnalysisSource.from_directory(crate_builder.analysis_dir)
    model = SymbolExtractor().extract(source, "demo")

    assert model.crate.name == "demo"
    assert model.crate.docs == "Demo crate"
    assert model.crate.module_refs == ["demo::a"]
