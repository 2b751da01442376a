"""Tree-sitter based syntax trees for TypeScript source files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from parse import binder
from parse.binder import unwrap_declaration

if TYPE_CHECKING:
    from collections.abc import Iterator

    from parse.binder import Declaration, TsSymbol
    from parse.project import SourceProject

TSX_SUFFIXES = (".tsx", ".jsx")

_PARSERS: dict[str, Parser] = {}

CLASS_TYPES = frozenset({"class_declaration", "abstract_class_declaration"})
FUNCTION_TYPES = frozenset(
    {"function_declaration", "generator_function_declaration"}
)
IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier",
        "type_identifier",
    }
)
_VARIABLE_STATEMENT_TYPES = frozenset({"lexical_declaration", "variable_declaration"})


def _get_parser(grammar: str) -> Parser:
    """Initialize and return the Tree-sitter parser for a TypeScript grammar."""
    parser = _PARSERS.get(grammar)
    if parser is None:
        if grammar == "tsx":
            lang = Language(tree_sitter_typescript.language_tsx())
        else:
            lang = Language(tree_sitter_typescript.language_typescript())
        parser = Parser(lang)
        _PARSERS[grammar] = parser
    return parser


def grammar_for_path(file_path: str) -> str:
    return "tsx" if file_path.endswith(TSX_SUFFIXES) else "typescript"


def iter_descendants(node: Node) -> Iterator[Node]:
    """Yield every descendant of ``node`` in document (pre-)order."""
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf8", errors="replace")


def iter_top_level_declarations(root: Node) -> Iterator[Node]:
    """Yield the top-level declarations of a program, unwrapped."""
    for statement in root.named_children:
        declaration = unwrap_declaration(statement)
        if declaration is not None:
            yield declaration


@dataclass
class FileDeclarations:
    """Per-category top-level declaration lists of one file."""

    classes: list[Node] = field(default_factory=list)
    functions: list[Node] = field(default_factory=list)
    interfaces: list[Node] = field(default_factory=list)
    type_aliases: list[Node] = field(default_factory=list)
    variable_declarations: list[Node] = field(default_factory=list)


class SourceTree:
    """One parsed TypeScript file plus its symbol-resolution queries."""

    def __init__(
        self,
        file_path: str,
        source_bytes: bytes,
        project: SourceProject | None = None,
    ) -> None:
        self.file_path = file_path
        self.project = project
        self.source_bytes = source_bytes
        self.tree = _get_parser(grammar_for_path(file_path)).parse(source_bytes)

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    def declarations_in_file(self) -> FileDeclarations:
        found = FileDeclarations()
        for declaration in iter_top_level_declarations(self.root_node):
            kind = declaration.type
            if kind in CLASS_TYPES:
                found.classes.append(declaration)
            elif kind in FUNCTION_TYPES:
                found.functions.append(declaration)
            elif kind == "interface_declaration":
                found.interfaces.append(declaration)
            elif kind == "type_alias_declaration":
                found.type_aliases.append(declaration)
            elif kind in _VARIABLE_STATEMENT_TYPES:
                found.variable_declarations.extend(
                    child
                    for child in declaration.named_children
                    if child.type == "variable_declarator"
                )
        return found

    def descendants_of_type(self, node: Node, *types: str) -> list[Node]:
        wanted = frozenset(types)
        return [child for child in iter_descendants(node) if child.type in wanted]

    def call_expressions_in(self, node: Node) -> list[Node]:
        return self.descendants_of_type(node, "call_expression")

    def identifiers_in(self, node: Node) -> list[Node]:
        return [child for child in iter_descendants(node) if child.type in IDENTIFIER_TYPES]

    def resolve_symbol(self, identifier: Node) -> TsSymbol | None:
        return binder.resolve_symbol(self, identifier)

    def resolve_alias(self, symbol: TsSymbol) -> list[Declaration] | None:
        return binder.resolve_alias(self, symbol)

    def fully_qualified_name(self, target: TsSymbol | Declaration) -> str:
        return binder.fully_qualified_name(target)

    def source_span(self, node: Node) -> tuple[int, int]:
        """1-based inclusive line span of ``node``."""
        return node.start_point[0] + 1, node.end_point[0] + 1

    def text(self, node: Node | None) -> str:
        if node is None:
            return ""
        return self.source_bytes[node.start_byte : node.end_byte].decode(
            "utf8", errors="replace"
        )


__all__ = [
    "CLASS_TYPES",
    "FUNCTION_TYPES",
    "IDENTIFIER_TYPES",
    "FileDeclarations",
    "SourceTree",
    "grammar_for_path",
    "iter_descendants",
    "iter_top_level_declarations",
    "node_text",
    "unwrap_declaration",
]
