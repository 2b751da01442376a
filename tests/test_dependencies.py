from __future__ import annotations

from textwrap import dedent

from extract.orchestrator import extract_file
from parse.project import SourceProject

WS = "/ws"

UTIL = """
export function helper(value: number): number {
  return value * 2;
}

export class Store {
  static create(): Store {
    return new Store();
  }
}
"""


def _project(files: dict[str, str]) -> SourceProject:
    project = SourceProject()
    for rel_path, source in files.items():
        project.add_source_text(f"{WS}/{rel_path}", dedent(source).lstrip("\n"))
    return project


def _edges(project: SourceProject, target: str, symbol: str) -> list[tuple[str, str]]:
    tree = project.get_source_file(f"{WS}/{target}")
    records = extract_file(tree, WS, f"{WS}/{target}")
    record = next(r for r in records if r.qualified_name == symbol)
    return [
        (edge.targets[0].qualified_name, edge.targets[0].file_path)
        for edge in record.dependencies
    ]


def test_call_into_sibling_module_targets_its_module_path() -> None:
    project = _project(
        {
            "src/util.ts": UTIL,
            "src/main.ts": """
                import { helper } from "./util";

                export function run() {
                  return helper(1);
                }
            """,
        }
    )

    assert _edges(project, "src/main.ts", "src.main.run") == [
        ("src.util.helper", "/ws/src/util.ts")
    ]


def test_external_library_calls_produce_no_edges() -> None:
    project = _project(
        {
            "src/main.ts": """
                import { map } from "lodash";
                import * as path from "path";

                export function run(items: string[]) {
                  map(items);
                  console.log(items);
                  return path.join("a", "b");
                }
            """,
        }
    )

    assert _edges(project, "src/main.ts", "src.main.run") == []


def test_renamed_import_follows_alias_to_declaration() -> None:
    project = _project(
        {
            "src/util.ts": UTIL,
            "src/main.ts": """
                import { helper as double } from "./util";

                export function run() {
                  return double(2);
                }
            """,
        }
    )

    assert _edges(project, "src/main.ts", "src.main.run") == [
        ("src.util.helper", "/ws/src/util.ts")
    ]


def test_re_export_chain_reaches_original_declaration() -> None:
    project = _project(
        {
            "src/util.ts": UTIL,
            "src/index.ts": 'export { helper as twice } from "./util";\n',
            "src/app/main.ts": """
                import { twice } from "../index";

                export function run() {
                  return twice(3);
                }
            """,
        }
    )

    assert _edges(project, "src/app/main.ts", "src.app.main.run") == [
        ("src.util.helper", "/ws/src/util.ts")
    ]


def test_static_member_and_this_calls_resolve_to_class_members() -> None:
    project = _project(
        {
            "src/util.ts": UTIL,
            "src/main.ts": """
                import { Store } from "./util";

                export class Service {
                  start() {
                    return this.load();
                  }

                  load() {
                    return Store.create();
                  }
                }
            """,
        }
    )

    assert _edges(project, "src/main.ts", "src.main.Service.start") == [
        ("src.main.Service.load", "/ws/src/main.ts")
    ]
    assert _edges(project, "src/main.ts", "src.main.Service.load") == [
        ("src.util.Store", "/ws/src/util.ts"),
        ("src.util.Store.create", "/ws/src/util.ts"),
    ]


def test_repeated_calls_are_not_deduplicated() -> None:
    project = _project(
        {
            "src/main.ts": """
                function step() {
                  return 1;
                }

                export function run() {
                  step();
                  step();
                }
            """,
        }
    )

    assert _edges(project, "src/main.ts", "src.main.run") == [
        ("src.main.step", "/ws/src/main.ts"),
        ("src.main.step", "/ws/src/main.ts"),
    ]


def test_locals_and_parameters_are_not_workspace_symbols() -> None:
    project = _project(
        {
            "src/main.ts": """
                export function run(callback: () => void) {
                  const inner = () => 1;
                  callback();
                  return inner();
                }
            """,
        }
    )

    assert _edges(project, "src/main.ts", "src.main.run") == []


def test_expression_bodied_arrow_has_no_dependencies() -> None:
    project = _project(
        {
            "src/main.ts": """
                function step() {
                  return 1;
                }

                export const run = () => step();
            """,
        }
    )

    assert _edges(project, "src/main.ts", "src.main.run") == []


def test_unresolved_module_keeps_call_out_of_the_graph() -> None:
    project = _project(
        {
            "src/main.ts": """
                import { missing } from "./does-not-exist";

                export function run() {
                  return missing();
                }
            """,
        }
    )

    assert _edges(project, "src/main.ts", "src.main.run") == []
