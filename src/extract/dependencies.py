"""Dependency edges raised from the executable bodies of symbols."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.models.artifacts.dependencies import (
    UNKNOWN_FILE_PATH,
    DependencyEdge,
    EdgeTarget,
    GeneralKind,
)
from extract.references import InternalReference, classify_reference, qualified_name_for

if TYPE_CHECKING:
    from tree_sitter import Node

    from extract.context import ExtractionContext

logger = logging.getLogger(__name__)


def executable_blocks(node: Node) -> list[Node]:
    """Statement-block children of a declaration (its body, if it has one)."""
    return [child for child in node.children if child.type == "statement_block"]


def _resolve_target(
    context: ExtractionContext, identifier: Node
) -> tuple[str, str] | None:
    """Resolve one identifier to (fully_qualified_name, declaring_file_path)."""
    tree = context.tree
    symbol = tree.resolve_symbol(identifier)
    if symbol is None:
        logger.debug(
            "No declaration for %r at %s:%d",
            tree.text(identifier),
            context.file_path,
            identifier.start_point[0] + 1,
        )
        return None

    name = tree.fully_qualified_name(symbol)
    file_path = symbol.declarations[0].file_path if symbol.declarations else UNKNOWN_FILE_PATH

    if symbol.is_alias:
        declarations = tree.resolve_alias(symbol)
        if declarations:
            last = declarations[-1]
            name = tree.fully_qualified_name(last)
            file_path = last.file_path
    return name, file_path


def dependencies_for_block(
    context: ExtractionContext, block: Node, source_name: str
) -> list[DependencyEdge]:
    """One edge per identifier inside a call that resolves into the workspace.

    Edges are kept in discovery order and are not deduplicated.
    """
    tree = context.tree
    edges: list[DependencyEdge] = []
    for call in tree.call_expressions_in(block):
        for identifier in tree.identifiers_in(call):
            resolved = _resolve_target(context, identifier)
            if resolved is None:
                continue
            fully_qualified_name, file_path = resolved
            reference = classify_reference(fully_qualified_name, context.workspace_root)
            if not isinstance(reference, InternalReference):
                logger.debug(
                    "Dropping %s reference %s from %s",
                    reference.reason,
                    fully_qualified_name,
                    source_name,
                )
                continue
            edges.append(
                DependencyEdge(
                    source_name=source_name,
                    source_kind=GeneralKind.FUNCTION,
                    targets=[
                        EdgeTarget(
                            qualified_name=qualified_name_for(
                                reference, context.workspace_root
                            ),
                            file_path=file_path,
                        )
                    ],
                )
            )
    return edges


def dependencies_for(
    context: ExtractionContext, declaration: Node, source_name: str
) -> list[DependencyEdge]:
    edges: list[DependencyEdge] = []
    for block in executable_blocks(declaration):
        edges.extend(dependencies_for_block(context, block, source_name))
    return edges


__all__ = ["dependencies_for", "dependencies_for_block", "executable_blocks"]
