"""Batch artifact generators for symbolgraph-core."""

from artifacts.generators.symbols import SymbolsGenerator

__all__ = ["SymbolsGenerator"]
