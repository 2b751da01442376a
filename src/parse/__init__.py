"""Parsing and symbol resolution for TypeScript sources."""

from parse.binder import (
    Declaration,
    TsSymbol,
    fully_qualified_name,
    resolve_alias,
    resolve_symbol,
)
from parse.project import SourceProject, normalize_path
from parse.treesitter_tree import FileDeclarations, SourceTree

__all__ = [
    "Declaration",
    "FileDeclarations",
    "SourceProject",
    "SourceTree",
    "TsSymbol",
    "fully_qualified_name",
    "normalize_path",
    "resolve_alias",
    "resolve_symbol",
]
