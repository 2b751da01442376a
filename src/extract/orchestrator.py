"""Per-file extraction entry points."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.models.artifacts.symbols import SymbolHint, SymbolRecord
from extract.context import ExtractionContext
from extract.symbols import (
    extract_arrow_functions,
    extract_classes,
    extract_factory_variables,
    extract_functions,
    extract_interfaces,
    extract_type_aliases,
)
from parse.project import normalize_path

if TYPE_CHECKING:
    from pathlib import Path

    from parse.project import SourceProject
    from parse.treesitter_tree import SourceTree

logger = logging.getLogger(__name__)

# Output order of the extraction passes.
EXTRACTION_PASSES = (
    extract_classes,
    extract_functions,
    extract_arrow_functions,
    extract_factory_variables,
    extract_type_aliases,
    extract_interfaces,
)


def _unique_names(records: list[SymbolRecord]) -> list[str]:
    seen: set[str] = set()
    names: list[str] = []
    for record in records:
        name = record.qualified_name
        if name in seen:
            base = f"{name}@L{record.start_line}"
            name = base
            counter = 2
            while name in seen:
                name = f"{base}:{counter}"
                counter += 1
        seen.add(name)
        names.append(name)
    return names


def disambiguate_duplicates(records: list[SymbolRecord]) -> list[SymbolRecord]:
    """Suffix repeated qualified names with ``@L<startLine>``.

    The first occurrence keeps its name. Edges owned by a renamed record get
    the new source name, and a class's method edges point at the (possibly
    renamed) method records that precede it.
    """
    names = _unique_names(records)
    result: list[SymbolRecord] = []
    for index, (record, name) in enumerate(zip(records, names)):
        dependencies = record.dependencies
        if record.extra_hint is SymbolHint.CLASS and dependencies:
            method_names = names[index - len(dependencies) : index]
            dependencies = [
                edge.model_copy(
                    update={
                        "targets": [
                            target.model_copy(update={"qualified_name": method_name})
                            for target in edge.targets
                        ]
                    }
                )
                for edge, method_name in zip(dependencies, method_names)
            ]
        if name != record.qualified_name:
            logger.debug("Renaming duplicate symbol %s to %s", record.qualified_name, name)
            dependencies = [
                edge.model_copy(update={"source_name": name}) for edge in dependencies
            ]
        if name == record.qualified_name and dependencies is record.dependencies:
            result.append(record)
            continue
        result.append(
            record.model_copy(update={"qualified_name": name, "dependencies": dependencies})
        )
    return result


def extract_file(
    tree: SourceTree | None,
    workspace_root: str | Path,
    file_path: str | Path,
    original_file_path: str | None = None,
    *,
    disambiguate: bool = True,
) -> list[SymbolRecord]:
    """Extract the complete symbol inventory of one parsed file.

    Args:
        tree: Parsed file, or None when it could not be loaded
        workspace_root: Directory module paths are computed against
        file_path: Path of the file, used only for logging when ``tree`` is None
        original_file_path: Display path copied to every record
        disambiguate: Suffix repeated qualified names

    Returns:
        Records in fixed pass order: classes (methods first), functions,
        arrow functions, factory variables, type aliases, interfaces.
    """
    if tree is None:
        logger.info("No source tree for %s; returning empty inventory", file_path)
        return []

    context = ExtractionContext.create(
        tree, normalize_path(workspace_root), original_file_path
    )
    records: list[SymbolRecord] = []
    for extraction_pass in EXTRACTION_PASSES:
        records.extend(extraction_pass(context))

    if disambiguate:
        records = disambiguate_duplicates(records)

    logger.info("Extracted %d symbols from %s", len(records), tree.file_path)
    return records


def parse_file(
    project: SourceProject,
    file_path: str | Path,
    workspace_root: str | Path,
    original_file_path: str | None = None,
    *,
    disambiguate: bool = True,
) -> list[SymbolRecord]:
    """Load (or refresh) ``file_path`` in ``project`` and extract it."""
    if project.get_source_file(file_path) is None:
        project.add_source_file(file_path)
    tree = project.refresh_from_file_system(file_path)
    return extract_file(
        tree,
        workspace_root,
        file_path,
        original_file_path or str(file_path),
        disambiguate=disambiguate,
    )


__all__ = ["EXTRACTION_PASSES", "disambiguate_duplicates", "extract_file", "parse_file"]
