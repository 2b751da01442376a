"""Model namespace for symbolgraph-core artifact schemas."""

from artifacts.models.artifacts.dependencies import (
    DependencyEdge,
    EdgeTarget,
    GeneralKind,
)
from artifacts.models.artifacts.output import BatchFileOutput, FileOutput
from artifacts.models.artifacts.symbols import (
    CodeSnippet,
    SymbolHint,
    SymbolRecord,
    title_for_hint,
)

__all__ = [
    "BatchFileOutput",
    "CodeSnippet",
    "DependencyEdge",
    "EdgeTarget",
    "FileOutput",
    "GeneralKind",
    "SymbolHint",
    "SymbolRecord",
    "title_for_hint",
]
