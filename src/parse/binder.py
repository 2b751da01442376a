"""Best-effort name binding and symbol resolution for TypeScript files.

Resolution is purely syntactic: identifiers are bound by walking lexical
scopes outwards, imports are followed through relative module specifiers,
and ``this.x`` / ``Name.x`` member accesses are bound to class members or
namespace exports. Fully-qualified names follow the compiler convention of
quoting the module path:

- top-level declarations: ``"/ws/src/util".helper``
- class members: ``"/ws/src/util".Helper.run``
- locals and import bindings: bare names (``cb``, ``helper``)
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tree_sitter import Node

    from parse.treesitter_tree import SourceTree

_RESOLVE_SUFFIXES = (".ts", ".tsx", ".d.ts", ".mts", ".cts", ".js", ".jsx")
_JS_EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs")

_CLASS_NODE_TYPES = frozenset(
    {"class_declaration", "abstract_class_declaration", "class"}
)
_FUNCTION_SCOPE_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)
_NAMED_DECLARATION_TYPES = frozenset(
    {
        "class_declaration",
        "abstract_class_declaration",
        "function_declaration",
        "generator_function_declaration",
        "function_signature",
        "interface_declaration",
        "type_alias_declaration",
        "enum_declaration",
    }
)
_CLASS_MEMBER_TYPES = frozenset(
    {
        "method_definition",
        "method_signature",
        "abstract_method_signature",
        "public_field_definition",
    }
)
_BLOCK_SCOPE_TYPES = frozenset({"statement_block", "class_static_block"})
_WRAPPER_TYPES = frozenset({"export_statement", "ambient_declaration"})


@dataclass(frozen=True)
class Declaration:
    """A declaration node that introduces a symbol."""

    name: str
    file_path: str
    start_byte: int
    end_byte: int
    parent: TsSymbol | None = None
    node: Node | None = field(default=None, compare=False, hash=False, repr=False)


@dataclass(frozen=True)
class TsSymbol:
    """A resolved symbol: its declarations and the symbol that contains it."""

    name: str
    file_path: str
    declarations: tuple[Declaration, ...] = ()
    parent: TsSymbol | None = None
    module_specifier: str | None = None
    imported_name: str | None = None
    is_module: bool = False

    @property
    def is_alias(self) -> bool:
        return self.module_specifier is not None


def _declaration(
    node: Node, file_path: str, name: str, parent: TsSymbol | None
) -> Declaration:
    return Declaration(
        name=name,
        file_path=file_path,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        parent=parent,
        node=node,
    )


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf8", errors="replace")


def _same_node(left: Node | None, right: Node | None) -> bool:
    if left is None or right is None:
        return False
    return (left.start_byte, left.end_byte, left.type) == (
        right.start_byte,
        right.end_byte,
        right.type,
    )


def _string_value(node: Node | None) -> str:
    return _text(node).strip("\"'`")


def _strip_extension(file_path: str) -> str:
    return posixpath.splitext(file_path)[0]


def fully_qualified_name(target: TsSymbol | Declaration) -> str:
    """Compiler-style fully-qualified name of a symbol or declaration."""
    if isinstance(target, TsSymbol) and target.is_module:
        return target.name
    if target.parent is None:
        return target.name
    return f"{fully_qualified_name(target.parent)}.{target.name}"


def module_symbol(tree: SourceTree) -> TsSymbol:
    root = tree.root_node
    name = f'"{_strip_extension(tree.file_path)}"'
    return TsSymbol(
        name=name,
        file_path=tree.file_path,
        declarations=(_declaration(root, tree.file_path, name, None),),
        is_module=True,
    )


def unwrap_declaration(statement: Node) -> Node | None:
    """Return the declaration wrapped by ``export``/``declare``, if any."""
    current: Node | None = statement
    while current is not None and current.type in _WRAPPER_TYPES:
        inner = current.child_by_field_name("declaration")
        if inner is None:
            if current.child_by_field_name("value") is not None:
                return None
            inner = next(
                (
                    child
                    for child in current.named_children
                    if child.type not in ("decorator", "comment", "string")
                ),
                None,
            )
            if inner is not None and inner.type in ("export_clause", "namespace_export"):
                return None
        current = inner
    return current


def _pattern_identifiers(node: Node | None) -> Iterator[Node]:
    if node is None:
        return
    if node.type in ("identifier", "shorthand_property_identifier_pattern"):
        yield node
    elif node.type in ("object_pattern", "array_pattern", "rest_pattern"):
        for child in node.named_children:
            yield from _pattern_identifiers(child)
    elif node.type == "pair_pattern":
        yield from _pattern_identifiers(node.child_by_field_name("value"))
    elif node.type in ("assignment_pattern", "object_assignment_pattern"):
        yield from _pattern_identifiers(node.child_by_field_name("left"))


def _declared_names_of(declaration: Node) -> Iterator[tuple[str, Node]]:
    if declaration.type in _NAMED_DECLARATION_TYPES:
        name = _text(declaration.child_by_field_name("name"))
        if name:
            yield name, declaration
    elif declaration.type in ("lexical_declaration", "variable_declaration"):
        for declarator in declaration.named_children:
            if declarator.type != "variable_declarator":
                continue
            for ident in _pattern_identifiers(declarator.child_by_field_name("name")):
                yield _text(ident), declarator


def _declared_names(statement: Node) -> Iterator[tuple[str, Node]]:
    declaration = unwrap_declaration(statement)
    if declaration is not None:
        yield from _declared_names_of(declaration)


def _import_bindings(statement: Node) -> Iterator[tuple[str, str, str, Node]]:
    """Yield (local_name, imported_name, module_specifier, node) per binding."""
    specifier = _string_value(statement.child_by_field_name("source"))
    if not specifier:
        return
    clause = next((c for c in statement.named_children if c.type == "import_clause"), None)
    if clause is None:
        return
    for child in clause.named_children:
        if child.type == "identifier":
            yield _text(child), "default", specifier, child
        elif child.type == "namespace_import":
            ident = next((c for c in child.named_children if c.type == "identifier"), None)
            if ident is not None:
                yield _text(ident), "*", specifier, child
        elif child.type == "named_imports":
            for spec in child.named_children:
                if spec.type != "import_specifier":
                    continue
                imported = _string_value(spec.child_by_field_name("name"))
                alias = spec.child_by_field_name("alias")
                local = _text(alias) if alias is not None else imported
                if local:
                    yield local, imported, specifier, spec


def _program_symbol(tree: SourceTree, name: str) -> TsSymbol | None:
    root = tree.root_node
    module = module_symbol(tree)
    declarations = [
        _declaration(node, tree.file_path, name, module)
        for statement in root.named_children
        for declared, node in _declared_names(statement)
        if declared == name
    ]
    if declarations:
        return TsSymbol(
            name=name,
            file_path=tree.file_path,
            declarations=tuple(declarations),
            parent=module,
        )

    for statement in root.named_children:
        if statement.type != "import_statement":
            continue
        for local, imported, specifier, node in _import_bindings(statement):
            if local == name:
                return TsSymbol(
                    name=name,
                    file_path=tree.file_path,
                    declarations=(_declaration(node, tree.file_path, name, None),),
                    module_specifier=specifier,
                    imported_name=imported,
                )
    return None


def _local_symbol(tree: SourceTree, name: str, nodes: list[Node]) -> TsSymbol | None:
    if not nodes:
        return None
    return TsSymbol(
        name=name,
        file_path=tree.file_path,
        declarations=tuple(_declaration(n, tree.file_path, name, None) for n in nodes),
    )


def _parameter_nodes(function_node: Node) -> Iterator[Node]:
    single = function_node.child_by_field_name("parameter")
    if single is not None:
        yield from _pattern_identifiers(single)
    params = function_node.child_by_field_name("parameters")
    if params is None:
        return
    for param in params.named_children:
        pattern = param.child_by_field_name("pattern") or param
        yield from _pattern_identifiers(pattern)


def _lookup_in_scope(tree: SourceTree, scope: Node, name: str) -> TsSymbol | None:
    kind = scope.type
    if kind == "program":
        return _program_symbol(tree, name)

    matches: list[Node] = []
    if kind in _BLOCK_SCOPE_TYPES:
        for statement in scope.named_children:
            matches.extend(node for declared, node in _declared_names(statement) if declared == name)
    elif kind in _FUNCTION_SCOPE_TYPES:
        matches.extend(p for p in _parameter_nodes(scope) if _text(p) == name)
        if not matches and kind not in ("function_declaration", "generator_function_declaration"):
            own_name = scope.child_by_field_name("name")
            if own_name is not None and _text(own_name) == name and kind != "method_definition":
                matches.append(scope)
    elif kind in ("for_statement", "for_in_statement"):
        binding = scope.child_by_field_name("initializer") or scope.child_by_field_name("left")
        if binding is not None:
            if binding.type in ("lexical_declaration", "variable_declaration"):
                matches.extend(node for declared, node in _declared_names_of(binding) if declared == name)
            else:
                matches.extend(p for p in _pattern_identifiers(binding) if _text(p) == name)
    elif kind == "catch_clause":
        matches.extend(
            p for p in _pattern_identifiers(scope.child_by_field_name("parameter")) if _text(p) == name
        )
    return _local_symbol(tree, name, matches)


def lookup_name(tree: SourceTree, from_node: Node, name: str) -> TsSymbol | None:
    """Bind ``name`` as seen from ``from_node`` by walking enclosing scopes."""
    scope = from_node.parent
    while scope is not None:
        symbol = _lookup_in_scope(tree, scope, name)
        if symbol is not None:
            return symbol
        scope = scope.parent
    return None


def _is_top_level(node: Node) -> bool:
    parent = node.parent
    if parent is not None and parent.type in ("lexical_declaration", "variable_declaration"):
        parent = parent.parent
    while parent is not None and parent.type in _WRAPPER_TYPES:
        parent = parent.parent
    return parent is not None and parent.type == "program"


def symbol_for_class(tree: SourceTree, class_node: Node) -> TsSymbol | None:
    """Symbol of a class declaration node, or None for anonymous classes."""
    name = _text(class_node.child_by_field_name("name"))
    if not name:
        return None
    if _is_top_level(class_node):
        return _program_symbol(tree, name)
    return _local_symbol(tree, name, [class_node])


def _class_member(
    tree: SourceTree, class_node: Node, member_name: str
) -> TsSymbol | None:
    class_symbol = symbol_for_class(tree, class_node)
    body = class_node.child_by_field_name("body")
    if class_symbol is None or body is None:
        return None
    members = [
        member
        for member in body.named_children
        if member.type in _CLASS_MEMBER_TYPES
        and _text(member.child_by_field_name("name")) == member_name
    ]
    if not members:
        return None
    return TsSymbol(
        name=member_name,
        file_path=tree.file_path,
        declarations=tuple(
            _declaration(m, tree.file_path, member_name, class_symbol) for m in members
        ),
        parent=class_symbol,
    )


def _enclosing_class(node: Node) -> Node | None:
    current = node.parent
    while current is not None:
        if current.type in _CLASS_NODE_TYPES:
            return current
        current = current.parent
    return None


def _tree_for(tree: SourceTree, file_path: str) -> SourceTree | None:
    if file_path == tree.file_path:
        return tree
    if tree.project is None:
        return None
    return tree.project.get_source_file(file_path)


def _resolve_member_access(
    tree: SourceTree, member_expression: Node, name: str
) -> TsSymbol | None:
    obj = member_expression.child_by_field_name("object")
    if obj is None:
        return None

    if obj.type == "this":
        class_node = _enclosing_class(member_expression)
        if class_node is None:
            return None
        return _class_member(tree, class_node, name)

    if obj.type != "identifier":
        return None

    base = lookup_name(tree, obj, _text(obj))
    if base is None:
        return None

    if base.is_alias:
        declarations = resolve_alias(tree, base)
        if not declarations:
            return None
    else:
        declarations = list(base.declarations)

    target = declarations[-1]
    if target.node is None:
        return None
    target_tree = _tree_for(tree, target.file_path)
    if target_tree is None:
        return None

    if target.node.type == "program":
        exported = _find_export(target_tree, name, set())
        if not exported:
            return None
        last = exported[-1]
        return TsSymbol(
            name=last.name,
            file_path=last.file_path,
            declarations=tuple(exported),
            parent=last.parent,
        )

    if target.node.type in _CLASS_NODE_TYPES:
        return _class_member(target_tree, target.node, name)

    return None


def resolve_symbol(tree: SourceTree, identifier: Node) -> TsSymbol | None:
    """Resolve an identifier node to the symbol that declares it."""
    name = _text(identifier)
    if not name:
        return None

    if identifier.type in ("property_identifier", "private_property_identifier"):
        parent = identifier.parent
        if (
            parent is not None
            and parent.type == "member_expression"
            and _same_node(parent.child_by_field_name("property"), identifier)
        ):
            return _resolve_member_access(tree, parent, name)
        return None

    return lookup_name(tree, identifier, name)


def _module_candidates(from_file: str, specifier: str) -> Iterator[str]:
    base = posixpath.normpath(posixpath.join(posixpath.dirname(from_file), specifier))
    yield base
    stem, ext = posixpath.splitext(base)
    if ext in _JS_EXTENSIONS:
        for suffix in (".ts", ".tsx", ".d.ts"):
            yield f"{stem}{suffix}"
    for suffix in _RESOLVE_SUFFIXES:
        yield f"{base}{suffix}"
    for suffix in _RESOLVE_SUFFIXES:
        yield posixpath.join(base, f"index{suffix}")


def load_module(tree: SourceTree, from_file: str, specifier: str) -> SourceTree | None:
    """Load the workspace file a relative module specifier points at."""
    if tree.project is None or not specifier.startswith("."):
        return None
    for candidate in _module_candidates(from_file, specifier):
        target = tree.project.get_source_file(candidate)
        if target is not None:
            return target
    return None


def _declarations_of(
    tree: SourceTree, symbol: TsSymbol | None, visited: set[tuple[str, str]]
) -> list[Declaration]:
    if symbol is None:
        return []
    if symbol.is_alias:
        return _follow_alias(tree, symbol, visited) or []
    return list(symbol.declarations)


def _default_export(
    tree: SourceTree, statement: Node, visited: set[tuple[str, str]]
) -> list[Declaration]:
    module = module_symbol(tree)
    declaration = statement.child_by_field_name("declaration")
    if declaration is not None:
        name = _text(declaration.child_by_field_name("name")) or "default"
        return [_declaration(declaration, tree.file_path, name, module)]
    value = statement.child_by_field_name("value")
    if value is None:
        return []
    if value.type == "identifier":
        return _declarations_of(tree, _program_symbol(tree, _text(value)), visited)
    name = _text(value.child_by_field_name("name")) or "default"
    return [_declaration(value, tree.file_path, name, module)]


def _find_export(
    tree: SourceTree, name: str, visited: set[tuple[str, str]]
) -> list[Declaration]:
    """Declarations exported from ``tree`` under ``name``, in source order."""
    key = (tree.file_path, name)
    if key in visited:
        return []
    visited.add(key)

    module = module_symbol(tree)
    results: list[Declaration] = []
    for statement in tree.root_node.named_children:
        if statement.type != "export_statement":
            continue

        if any(child.type == "default" for child in statement.children):
            if name == "default":
                results.extend(_default_export(tree, statement, visited))
            continue

        declaration = statement.child_by_field_name("declaration")
        if declaration is not None:
            results.extend(
                _declaration(node, tree.file_path, declared, module)
                for declared, node in _declared_names_of(declaration)
                if declared == name
            )
            continue

        source = statement.child_by_field_name("source")
        source_tree = (
            load_module(tree, tree.file_path, _string_value(source))
            if source is not None
            else None
        )

        clause = next((c for c in statement.named_children if c.type == "export_clause"), None)
        if clause is not None:
            for spec in clause.named_children:
                if spec.type != "export_specifier":
                    continue
                local = _string_value(spec.child_by_field_name("name"))
                exported = _string_value(spec.child_by_field_name("alias")) or local
                if exported != name:
                    continue
                if source is not None:
                    if source_tree is not None:
                        results.extend(_find_export(source_tree, local, visited))
                else:
                    results.extend(
                        _declarations_of(tree, _program_symbol(tree, local), visited)
                    )
            continue

        if source_tree is None:
            continue
        namespace = next(
            (c for c in statement.named_children if c.type == "namespace_export"), None
        )
        if namespace is not None:
            ident = next((c for c in namespace.named_children if c.type == "identifier"), None)
            if ident is not None and _text(ident) == name:
                results.extend(module_symbol(source_tree).declarations)
        elif name != "default":
            results.extend(_find_export(source_tree, name, visited))
    return results


def _follow_alias(
    tree: SourceTree, symbol: TsSymbol, visited: set[tuple[str, str]]
) -> list[Declaration] | None:
    if symbol.module_specifier is None:
        return None
    target = load_module(tree, symbol.file_path, symbol.module_specifier)
    if target is None:
        return None
    if symbol.imported_name == "*":
        return list(module_symbol(target).declarations)
    return _find_export(target, symbol.imported_name or symbol.name, visited)


def resolve_alias(tree: SourceTree, symbol: TsSymbol) -> list[Declaration] | None:
    """Follow an import alias to the declarations it forwards to.

    Returns None when ``symbol`` is not an alias or its module cannot be
    located in the workspace; otherwise the (possibly empty) list of target
    declarations in source order.
    """
    if not symbol.is_alias:
        return None
    return _follow_alias(tree, symbol, set())


__all__ = [
    "Declaration",
    "TsSymbol",
    "fully_qualified_name",
    "load_module",
    "lookup_name",
    "module_symbol",
    "resolve_alias",
    "resolve_symbol",
    "symbol_for_class",
    "unwrap_declaration",
]
