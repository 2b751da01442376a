from __future__ import annotations

from typing import TYPE_CHECKING, Any

from artifacts.generators import SymbolsGenerator
from artifacts.models.artifacts.output import FileOutput
from artifacts.utils import _write_json
from contract.artifacts import SYMBOLS_JSONL
from extract.orchestrator import parse_file
from parse.project import SourceProject
from rules.config import load_config, resolve_output_dir

if TYPE_CHECKING:
    from pathlib import Path

    from artifacts.models.artifacts.symbols import SymbolRecord
    from rules.config import SymbolGraphConfig


def write_file_output(
    *,
    root: Path,
    file_path: Path,
    output: Path,
    original_file_path: str | None = None,
    config: SymbolGraphConfig | None = None,
) -> list[SymbolRecord]:
    """Extract one file and write ``{"output": [...]}`` to ``output``.

    Args:
        root: Workspace root module paths are computed against
        file_path: Source file to extract
        output: Destination JSON file (parent directories are created)
        original_file_path: Display path recorded on every symbol
        config: Optional configuration (default: loaded from root)

    Returns:
        The extracted records, in output order.
    """
    if config is None:
        config = load_config(root)

    records = parse_file(
        SourceProject(),
        file_path,
        root,
        original_file_path,
        disambiguate=config.disambiguate_duplicates,
    )
    output.parent.mkdir(parents=True, exist_ok=True)
    _write_json(output, FileOutput(output=records))
    return records


def generate_batch(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: SymbolGraphConfig | None = None,
) -> dict[str, Any]:
    """Extract every source file of a workspace into symbols.jsonl.

    Args:
        root: Root directory of the workspace to analyze
        out_dir: Optional output directory for the artifact
        config: Optional configuration (default: loaded from root)

    Returns:
        Dictionary with counts, failed relative paths and the artifact path.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    _, summary = SymbolsGenerator().generate(
        root=root,
        out_dir=out_dir,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
        extensions=config.extensions,
        disambiguate_duplicates=config.disambiguate_duplicates,
    )

    return {
        "file_count": summary["file_count"],
        "symbol_count": summary["symbol_count"],
        "failed": summary["failed"],
        "artifacts": [str(out_dir / SYMBOLS_JSONL)],
    }
