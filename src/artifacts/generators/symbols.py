"""Symbols artifact generator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from artifacts.models.artifacts.output import BatchFileOutput
from artifacts.utils import _get_output_dir_name, _write_jsonl
from contract.artifacts import SYMBOLS_JSONL
from extract.orchestrator import parse_file
from parse.project import SourceProject
from rules.config import DEFAULT_EXTENSIONS
from scan.files import find_source_files

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class SymbolsGenerator:
    """Generates symbols.jsonl artifact from TypeScript source files."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "symbols"

    def generate(
        self,
        root: Path,
        out_dir: Path,
        **kwargs: Any,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Generate symbols artifact.

        Each file is extracted independently; a file whose extraction raises
        is logged, reported in the summary and left out of the artifact.
        """
        include_patterns: list[str] | None = kwargs.get("include_patterns")
        exclude_patterns: list[str] | None = kwargs.get("exclude_patterns")
        nested_gitignore: bool = kwargs.get("nested_gitignore", False)
        extensions: list[str] = kwargs.get("extensions") or list(DEFAULT_EXTENSIONS)
        disambiguate: bool = kwargs.get("disambiguate_duplicates", True)

        out_dir.mkdir(parents=True, exist_ok=True)

        project = SourceProject()
        file_outputs: list[BatchFileOutput] = []
        failed: list[str] = []

        out_dir_name = _get_output_dir_name(out_dir, root)

        for file_path in find_source_files(
            root,
            output_dir=out_dir_name,
            extensions=extensions,
            include_patterns=include_patterns,
            exclude_patterns=exclude_patterns,
            nested_gitignore=nested_gitignore,
        ):
            relative_path = file_path.relative_to(root).as_posix()
            try:
                records = parse_file(
                    project,
                    file_path,
                    root,
                    relative_path,
                    disambiguate=disambiguate,
                )
            except Exception:
                logger.exception("Extraction failed for %s", relative_path)
                failed.append(relative_path)
                continue
            file_outputs.append(BatchFileOutput(file_path=relative_path, output=records))

        _write_jsonl(out_dir / SYMBOLS_JSONL, file_outputs)

        output_dicts = [output.to_wire() for output in file_outputs]
        summary = {
            "file_count": len(file_outputs),
            "symbol_count": sum(len(output.output) for output in file_outputs),
            "failed": failed,
        }
        logger.info(
            "Wrote %d symbols from %d files to %s",
            summary["symbol_count"],
            summary["file_count"],
            out_dir / SYMBOLS_JSONL,
        )
        return output_dicts, summary
