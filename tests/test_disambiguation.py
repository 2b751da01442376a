from __future__ import annotations

from textwrap import dedent

from extract.orchestrator import extract_file
from parse.project import SourceProject

WS = "/ws"


def _extract(source: str, *, disambiguate: bool = True) -> list:
    project = SourceProject()
    tree = project.add_source_text(f"{WS}/src/dup.ts", dedent(source).lstrip("\n"))
    return extract_file(tree, WS, tree.file_path, disambiguate=disambiguate)


REDECLARED_FUNCTIONS = """
function load() {
  return fetchData();
}

function load() {
  return fetchData();
}

function fetchData() {
  return 1;
}
"""

DUPLICATE_METHODS = """
class Box {
  open() { return 1; }
  open() { return 2; }
}
"""


def test_later_duplicates_get_line_suffix() -> None:
    records = _extract(REDECLARED_FUNCTIONS)

    assert [r.qualified_name for r in records] == [
        "src.dup.load",
        "src.dup.load@L5",
        "src.dup.fetchData",
    ]
    second = records[1]
    assert second.local_name == "load"
    assert [edge.source_name for edge in second.dependencies] == ["src.dup.load@L5"]
    assert [edge.targets[0].qualified_name for edge in second.dependencies] == [
        "src.dup.fetchData"
    ]
    assert records[0].dependencies[0].source_name == "src.dup.load"


def test_class_method_edges_follow_renamed_methods() -> None:
    records = _extract(DUPLICATE_METHODS)

    assert [r.qualified_name for r in records] == [
        "src.dup.Box.open",
        "src.dup.Box.open@L3",
        "src.dup.Box",
    ]
    assert [edge.targets[0].qualified_name for edge in records[-1].dependencies] == [
        "src.dup.Box.open",
        "src.dup.Box.open@L3",
    ]


def test_disambiguation_can_be_disabled() -> None:
    records = _extract(DUPLICATE_METHODS, disambiguate=False)

    assert [r.qualified_name for r in records] == [
        "src.dup.Box.open",
        "src.dup.Box.open",
        "src.dup.Box",
    ]


def test_same_line_duplicates_get_a_counter() -> None:
    records = _extract("class Box { open() {} open() {} open() {} }\n")

    assert [r.qualified_name for r in records] == [
        "src.dup.Box.open",
        "src.dup.Box.open@L1",
        "src.dup.Box.open@L1:2",
        "src.dup.Box",
    ]
