"""Output contract definitions.

This module defines the stable filenames and top-level fields consumed by
downstream graph builders.
"""

from __future__ import annotations

from dataclasses import dataclass

# Top-level field wrapping the symbol array of a single-file extraction.
OUTPUT_FIELD = "output"

# Batch artifact filename (stable contract identifier).
SYMBOLS_JSONL = "symbols.jsonl"


@dataclass(frozen=True)
class ArtifactSpec:
    """Specification for a contract artifact."""

    filename: str
    format: str
    required_fields_note: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "symbols": ArtifactSpec(
        filename=SYMBOLS_JSONL,
        format="jsonl",
        required_fields_note="BatchFileOutput per line: filePath plus output array.",
    ),
}
