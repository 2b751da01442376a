"""Symbol classification rules for TypeScript declarations.

Each ``classify_*`` function inspects one syntax node and returns a
``Classification`` when the node qualifies for extraction, or None when it
does not (anonymous declarations, nested callbacks, accessors, ...).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from artifacts.models.artifacts.dependencies import GeneralKind
from artifacts.models.artifacts.symbols import SymbolHint
from parse.treesitter_tree import CLASS_TYPES, FUNCTION_TYPES, node_text

if TYPE_CHECKING:
    from tree_sitter import Node

logger = logging.getLogger(__name__)

METHOD_TYPES = frozenset({"method_definition", "abstract_method_signature"})
_METHOD_NAME_TYPES = frozenset({"property_identifier", "private_property_identifier"})
_ACCESSOR_KEYWORDS = frozenset({"get", "set"})
# An arrow function below one of these is a nested callback, not a symbol.
_ARROW_BARRIER_TYPES = frozenset({"arrow_function"}) | FUNCTION_TYPES


@dataclass(frozen=True)
class Classification:
    """Kind, hint and naming of a declaration that qualifies for extraction."""

    kind: GeneralKind
    hint: SymbolHint
    local_name: str
    enclosing_type: str | None = None


def _name_of(node: Node, allowed: frozenset[str] | None = None) -> str:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return ""
    if allowed is not None and name_node.type not in allowed:
        return ""
    return node_text(name_node)


def classify_class(node: Node) -> Classification | None:
    if node.type not in CLASS_TYPES:
        return None
    name = _name_of(node)
    if not name:
        logger.debug("Skipping anonymous class at line %d", node.start_point[0] + 1)
        return None
    return Classification(GeneralKind.CLASS, SymbolHint.CLASS, name)


def is_constructor_or_accessor(node: Node) -> bool:
    if _name_of(node) == "constructor":
        return True
    return any(child.type in _ACCESSOR_KEYWORDS for child in node.children if not child.is_named)


def classify_method(node: Node, class_name: str) -> Classification | None:
    """A named method of a class body; constructors and accessors are not methods."""
    if node.type not in METHOD_TYPES or is_constructor_or_accessor(node):
        return None
    name = _name_of(node, _METHOD_NAME_TYPES)
    if not name:
        return None
    return Classification(GeneralKind.METHOD, SymbolHint.CLASS_METHOD, name, class_name)


def classify_function(node: Node) -> Classification | None:
    if node.type not in FUNCTION_TYPES:
        return None
    name = _name_of(node)
    if not name:
        return None
    return Classification(GeneralKind.FUNCTION, SymbolHint.FUNCTION, name)


def is_nested_in_function(node: Node) -> bool:
    """True when ``node`` sits inside a function declaration or arrow function."""
    ancestor = node.parent
    while ancestor is not None:
        if ancestor.type in _ARROW_BARRIER_TYPES:
            return True
        ancestor = ancestor.parent
    return False


def _enclosing_class_name(field_definition: Node) -> str:
    body = field_definition.parent
    class_node = body.parent if body is not None else None
    if class_node is None:
        return ""
    return _name_of(class_node)


def arrow_candidate_names(arrow: Node) -> tuple[list[str], Node | None]:
    """Names offered by the arrow's immediate parent, plus the class member node.

    The second element is the ``public_field_definition`` owning the arrow
    when it initializes a class property, otherwise None.
    """
    parent = arrow.parent
    if parent is None:
        return [], None

    if parent.type == "variable_declarator":
        name_node = parent.child_by_field_name("name")
        if name_node is not None and name_node.type == "identifier":
            return [node_text(name_node)], None
        return [], None

    if parent.type == "public_field_definition":
        name = _name_of(parent, _METHOD_NAME_TYPES)
        return ([name] if name else []), parent

    if parent.type == "assignment_expression":
        left = parent.child_by_field_name("left")
        if left is not None and left.type == "identifier":
            return [node_text(left)], None
        return [], None

    if parent.type == "pair":
        key = parent.child_by_field_name("key")
        if key is not None and key.type == "property_identifier":
            return [node_text(key)], None
        return [], None

    # describe("suite", () => {...}) is named after its callee; member
    # callees such as app.get(...) stay anonymous.
    if parent.type == "arguments" and parent.parent is not None:
        callee = parent.parent.child_by_field_name("function")
        if callee is not None and callee.type == "identifier":
            return [node_text(callee)], None

    return [], None


def classify_arrow_function(arrow: Node) -> Classification | None:
    """An outermost arrow function bound to an identifiable name."""
    if arrow.type != "arrow_function" or is_nested_in_function(arrow):
        return None
    names, member = arrow_candidate_names(arrow)
    if not names:
        return None
    if member is not None:
        return Classification(
            GeneralKind.FUNCTION,
            SymbolHint.CLASS_ARROW_FUNCTION,
            names[0],
            _enclosing_class_name(member),
        )
    return Classification(GeneralKind.FUNCTION, SymbolHint.ARROW_FUNCTION, names[0])


def classify_factory_variable(declarator: Node) -> Classification | None:
    """A variable initialized directly by a call, e.g. ``const x = make()``."""
    if declarator.type != "variable_declarator":
        return None
    value = declarator.child_by_field_name("value")
    if value is None or value.type != "call_expression":
        return None
    name_node = declarator.child_by_field_name("name")
    if name_node is None or name_node.type != "identifier":
        return None
    return Classification(GeneralKind.FUNCTION, SymbolHint.FUNCTION, node_text(name_node))


def classify_interface(node: Node) -> Classification | None:
    if node.type != "interface_declaration":
        return None
    name = _name_of(node)
    if not name:
        return None
    return Classification(GeneralKind.INTERFACE, SymbolHint.INTERFACE, name)


def classify_type_alias(node: Node) -> Classification | None:
    if node.type != "type_alias_declaration":
        return None
    name = _name_of(node)
    if not name:
        return None
    return Classification(GeneralKind.TYPE_PARAMETER, SymbolHint.TYPE_ALIAS, name)


def classify(node: Node) -> Classification | None:
    """Classify any node, applying the rules in precedence order."""
    if node.type in CLASS_TYPES:
        return classify_class(node)
    if node.type in METHOD_TYPES:
        class_node = node.parent.parent if node.parent is not None else None
        class_name = _name_of(class_node) if class_node is not None else ""
        return classify_method(node, class_name) if class_name else None
    if node.type in FUNCTION_TYPES:
        return classify_function(node)
    if node.type == "arrow_function":
        return classify_arrow_function(node)
    if node.type == "variable_declarator":
        return classify_factory_variable(node)
    if node.type == "interface_declaration":
        return classify_interface(node)
    if node.type == "type_alias_declaration":
        return classify_type_alias(node)
    return None


__all__ = [
    "METHOD_TYPES",
    "Classification",
    "arrow_candidate_names",
    "classify",
    "classify_arrow_function",
    "classify_class",
    "classify_factory_variable",
    "classify_function",
    "classify_interface",
    "classify_method",
    "classify_type_alias",
    "is_constructor_or_accessor",
    "is_nested_in_function",
]
