"""Per-category symbol extraction passes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.models.artifacts.dependencies import DependencyEdge, EdgeTarget, GeneralKind
from artifacts.models.artifacts.symbols import CodeSnippet, SymbolHint, SymbolRecord
from extract.classifier import (
    Classification,
    classify_arrow_function,
    classify_class,
    classify_factory_variable,
    classify_function,
    classify_interface,
    classify_method,
    classify_type_alias,
)
from extract.dependencies import dependencies_for
from utils import compose_name

if TYPE_CHECKING:
    from tree_sitter import Node

    from extract.context import ExtractionContext

logger = logging.getLogger(__name__)

_DISPLAY_FORMATS: dict[SymbolHint, str] = {
    SymbolHint.FUNCTION: "{}()",
    SymbolHint.CLASS_METHOD: "{}()",
    SymbolHint.ARROW_FUNCTION: "{} callback()",
    SymbolHint.CLASS_ARROW_FUNCTION: "{} callback()",
    SymbolHint.CLASS: "class {}",
    SymbolHint.INTERFACE: "interface {}",
    SymbolHint.TYPE_ALIAS: "type {}",
}


def display_name_for(classification: Classification) -> str:
    return _DISPLAY_FORMATS[classification.hint].format(classification.local_name)


def symbol_qualified_name(context: ExtractionContext, classification: Classification) -> str:
    return compose_name(
        context.module_name,
        classification.enclosing_type or "",
        classification.local_name,
    )


def _declaration_extent(node: Node) -> Node:
    """The declaration including an ``export``/``declare`` wrapper, if any."""
    current = node
    while current.parent is not None and current.parent.type in (
        "export_statement",
        "ambient_declaration",
    ):
        current = current.parent
    return current


def _body_text(context: ExtractionContext, node: Node) -> str:
    return context.tree.text(node.child_by_field_name("body"))


def _build_record(
    context: ExtractionContext,
    node: Node,
    classification: Classification,
    *,
    snippet: str,
    dependencies: list[DependencyEdge] | None = None,
    qualified_name: str | None = None,
    start_node: Node | None = None,
) -> SymbolRecord:
    start_line, end_line = context.tree.source_span(node)
    if start_node is not None:
        start_line = context.tree.source_span(start_node)[0]
    return SymbolRecord(
        qualified_name=qualified_name or symbol_qualified_name(context, classification),
        kind=classification.kind,
        start_line=start_line,
        end_line=end_line,
        snippet=CodeSnippet(code=snippet),
        extra_hint=classification.hint,
        dependencies=dependencies or [],
        file_path=context.file_path,
        original_file_path=context.original_file_path,
        working_directory=context.workspace_root,
        display_name=display_name_for(classification),
        local_name=classification.local_name,
    )


def _leading_decorator(member: Node) -> Node | None:
    """First of the decorators directly preceding a class member.

    Method decorators are siblings in the class body, not children of the
    method node.
    """
    first = None
    sibling = member.prev_named_sibling
    while sibling is not None and sibling.type == "decorator":
        first = sibling
        sibling = sibling.prev_named_sibling
    return first


def _method_records(
    context: ExtractionContext, class_node: Node, class_name: str
) -> list[SymbolRecord]:
    body = class_node.child_by_field_name("body")
    if body is None:
        return []
    records: list[SymbolRecord] = []
    for member in body.named_children:
        classification = classify_method(member, class_name)
        if classification is None:
            continue
        qualified = symbol_qualified_name(context, classification)
        records.append(
            _build_record(
                context,
                member,
                classification,
                snippet=_body_text(context, member),
                dependencies=dependencies_for(context, member, qualified),
                qualified_name=qualified,
                start_node=_leading_decorator(member),
            )
        )
    return records


def extract_classes(context: ExtractionContext) -> list[SymbolRecord]:
    """Classes of the file, each preceded by its methods.

    The class record carries one edge per method so the class node stays
    connected to its methods in the graph.
    """
    records: list[SymbolRecord] = []
    for class_node in context.tree.declarations_in_file().classes:
        classification = classify_class(class_node)
        if classification is None:
            continue
        class_qualified = symbol_qualified_name(context, classification)
        methods = _method_records(context, class_node, classification.local_name)
        method_edges = [
            DependencyEdge(
                source_name=class_qualified,
                source_kind=GeneralKind.FUNCTION,
                targets=[
                    EdgeTarget(
                        qualified_name=method.qualified_name,
                        file_path=context.file_path,
                    )
                ],
            )
            for method in methods
        ]
        records.extend(methods)
        records.append(
            _build_record(
                context,
                _declaration_extent(class_node),
                classification,
                snippet="",
                dependencies=method_edges,
                qualified_name=class_qualified,
            )
        )
    return records


def extract_functions(context: ExtractionContext) -> list[SymbolRecord]:
    records: list[SymbolRecord] = []
    for function_node in context.tree.declarations_in_file().functions:
        classification = classify_function(function_node)
        if classification is None:
            logger.debug(
                "Skipping anonymous function at %s:%d",
                context.file_path,
                function_node.start_point[0] + 1,
            )
            continue
        qualified = symbol_qualified_name(context, classification)
        records.append(
            _build_record(
                context,
                _declaration_extent(function_node),
                classification,
                snippet=_body_text(context, function_node),
                dependencies=dependencies_for(context, function_node, qualified),
                qualified_name=qualified,
            )
        )
    return records


def extract_arrow_functions(context: ExtractionContext) -> list[SymbolRecord]:
    """Outermost named arrow functions anywhere in the file."""
    tree = context.tree
    records: list[SymbolRecord] = []
    for arrow in tree.descendants_of_type(tree.root_node, "arrow_function"):
        classification = classify_arrow_function(arrow)
        if classification is None:
            continue
        qualified = symbol_qualified_name(context, classification)
        records.append(
            _build_record(
                context,
                arrow,
                classification,
                snippet=_body_text(context, arrow),
                dependencies=dependencies_for(context, arrow, qualified),
                qualified_name=qualified,
            )
        )
    return records


def extract_factory_variables(context: ExtractionContext) -> list[SymbolRecord]:
    """Top-level variables initialized by a call, e.g. ``const x = make()``."""
    records: list[SymbolRecord] = []
    for declarator in context.tree.declarations_in_file().variable_declarations:
        classification = classify_factory_variable(declarator)
        if classification is None:
            continue
        qualified = symbol_qualified_name(context, classification)
        records.append(
            _build_record(
                context,
                declarator,
                classification,
                snippet=context.tree.text(declarator),
                dependencies=dependencies_for(context, declarator, qualified),
                qualified_name=qualified,
            )
        )
    return records


def extract_type_aliases(context: ExtractionContext) -> list[SymbolRecord]:
    records: list[SymbolRecord] = []
    for alias_node in context.tree.declarations_in_file().type_aliases:
        classification = classify_type_alias(alias_node)
        if classification is None:
            continue
        extent = _declaration_extent(alias_node)
        records.append(
            _build_record(
                context,
                extent,
                classification,
                snippet=context.tree.text(extent),
            )
        )
    return records


def extract_interfaces(context: ExtractionContext) -> list[SymbolRecord]:
    records: list[SymbolRecord] = []
    for interface_node in context.tree.declarations_in_file().interfaces:
        classification = classify_interface(interface_node)
        if classification is None:
            continue
        extent = _declaration_extent(interface_node)
        records.append(
            _build_record(
                context,
                extent,
                classification,
                snippet=context.tree.text(extent),
            )
        )
    return records


__all__ = [
    "display_name_for",
    "extract_arrow_functions",
    "extract_classes",
    "extract_factory_variables",
    "extract_functions",
    "extract_interfaces",
    "extract_type_aliases",
    "symbol_qualified_name",
]
