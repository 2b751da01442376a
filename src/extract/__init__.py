"""Symbol extraction and dependency resolution for TypeScript files."""

from extract.orchestrator import disambiguate_duplicates, extract_file, parse_file
from extract.references import (
    ExternalReference,
    InternalReference,
    classify_reference,
)

__all__ = [
    "ExternalReference",
    "InternalReference",
    "classify_reference",
    "disambiguate_duplicates",
    "extract_file",
    "parse_file",
]
