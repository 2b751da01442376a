"""Output models exposed at the contract boundary."""

from artifacts.models.artifacts.dependencies import DependencyEdge, EdgeTarget
from artifacts.models.artifacts.output import BatchFileOutput, FileOutput
from artifacts.models.artifacts.symbols import SymbolRecord

__all__ = [
    "BatchFileOutput",
    "DependencyEdge",
    "EdgeTarget",
    "FileOutput",
    "SymbolRecord",
]
